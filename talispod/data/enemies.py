"""Enemy catalog loader (scripted opponents)."""
from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from talispod.core.errors import DataLoadError
from talispod.core.logging import logger
from talispod.core.paths import ENEMIES
from talispod.core.types import normalize_attribute
from talispod.data.loader import frozen_stats, read_json

ENEMY_MOVE_SLOTS = 15

@dataclass(frozen=True)
class RewardEntry:
    item_id: str
    chance: float  # percent, 0..100
    name: str

@dataclass(frozen=True)
class EnemySpecies:
    id: str
    name: str
    attribute: Optional[str]
    base_hp: int
    base_stats: Mapping[str, int]
    moves: Tuple[str, ...]
    rewards: Tuple[RewardEntry, ...]

    @property
    def max_hp(self) -> int:
        return self.base_hp

@lru_cache(maxsize=None)
def _load() -> tuple[Mapping[str, EnemySpecies], str]:
    raw = read_json(ENEMIES)
    table = {}
    try:
        for e in raw["enemies"]:
            moves = tuple(e["moves"])
            if len(moves) != ENEMY_MOVE_SLOTS:
                raise ValueError(f"{e['id']} has {len(moves)} move slots")
            table[e["id"]] = EnemySpecies(
                id=e["id"],
                name=e.get("name", e["id"]),
                attribute=normalize_attribute(e.get("attribute")),
                base_hp=int(e["base_hp"]),
                base_stats=frozen_stats(e.get("base_stats")),
                moves=moves,
                rewards=tuple(
                    RewardEntry(item_id=r["item_id"], chance=float(r.get("chance", 0)), name=r.get("name", r["item_id"]))
                    for r in e.get("rewards", [])
                ),
            )
    except (KeyError, TypeError, ValueError) as e:
        raise DataLoadError(str(ENEMIES), f"malformed enemy entry: {e}") from e
    default_id = raw.get("default_enemy", "harpy")
    if default_id not in table:
        raise DataLoadError(str(ENEMIES), f"default enemy {default_id} missing")
    return MappingProxyType(table), default_id

def enemy_catalog() -> Mapping[str, EnemySpecies]:
    return _load()[0]

def get_enemy(enemy_id: Optional[str]) -> EnemySpecies:
    """Enemy for ``enemy_id``; unknown or missing ids fall back to the default opponent."""
    table, default_id = _load()
    enemy = table.get(enemy_id or "")
    if enemy is None:
        logger.warn("UnknownEnemyFallback", enemy=enemy_id, fallback=default_id)
        return table[default_id]
    return enemy

__all__ = ["EnemySpecies","RewardEntry","ENEMY_MOVE_SLOTS","enemy_catalog","get_enemy"]
