"""Runtime loader for skill data.

Unknown skill ids resolve to the catalog's default basic move so combat
never aborts on a bad move slot.
"""
from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from talispod.core.errors import DataLoadError
from talispod.core.logging import logger
from talispod.core.paths import SKILLS
from talispod.core.types import NEUTRAL, normalize_attribute
from talispod.data.loader import read_json

DEFAULT_SKILL_ID = "skill_basic_slap"

@dataclass(frozen=True)
class Skill:
    id: str
    name: str
    attribute: str
    category: str  # attack | heal
    power: int

    @property
    def is_heal(self) -> bool:
        return self.category == "heal"

@lru_cache(maxsize=None)
def _load() -> tuple[Mapping[str, Skill], str]:
    raw = read_json(SKILLS)
    try:
        table = {
            s["id"]: Skill(
                id=s["id"],
                name=s.get("name", s["id"]),
                attribute=normalize_attribute(s.get("attribute")) or NEUTRAL,
                category=s.get("category", "attack"),
                power=int(s.get("power", 0)),
            )
            for s in raw["skills"]
        }
    except (KeyError, TypeError, ValueError) as e:
        raise DataLoadError(str(SKILLS), f"malformed skill entry: {e}") from e
    default_id = raw.get("default_skill", DEFAULT_SKILL_ID)
    if default_id not in table:
        raise DataLoadError(str(SKILLS), f"default skill {default_id} missing")
    return MappingProxyType(table), default_id

def all_skills() -> Mapping[str, Skill]:
    return _load()[0]

def default_skill() -> Skill:
    table, default_id = _load()
    return table[default_id]

def get_skill(skill_id: Optional[str]) -> Optional[Skill]:
    if not skill_id:
        return None
    return all_skills().get(skill_id)

def resolve_skill(skill_id: Optional[str]) -> Skill:
    """Skill for ``skill_id``, falling back to the default basic move."""
    sk = get_skill(skill_id)
    if sk is None:
        if skill_id:
            logger.warn("UnknownSkillFallback", skill=skill_id)
        return default_skill()
    return sk

__all__ = ["Skill","DEFAULT_SKILL_ID","all_skills","default_skill","get_skill","resolve_skill"]
