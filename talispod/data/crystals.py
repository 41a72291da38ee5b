"""Crystal (reward item) data loader."""
from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

from talispod.core.errors import DataLoadError
from talispod.core.paths import CRYSTALS
from talispod.core.types import STAT_AXES
from talispod.data.loader import read_json

@dataclass(frozen=True)
class Crystal:
    id: str
    name: str
    attribute: str
    rarity: str
    effect: str  # grow | full_heal
    stat: Optional[str] = None
    amount: int = 0

@lru_cache(maxsize=None)
def all_crystals() -> Mapping[str, Crystal]:
    raw = read_json(CRYSTALS)
    table = {}
    try:
        for c in raw["crystals"]:
            crystal = Crystal(
                id=c["id"], name=c.get("name", c["id"]), attribute=c.get("attribute", "neutral"),
                rarity=c.get("rarity", "common"), effect=c["effect"],
                stat=c.get("stat"), amount=int(c.get("amount", 0)),
            )
            if crystal.effect == "grow" and crystal.stat not in STAT_AXES:
                raise ValueError(f"{crystal.id} grows unknown stat {crystal.stat}")
            table[crystal.id] = crystal
    except (KeyError, TypeError, ValueError) as e:
        raise DataLoadError(str(CRYSTALS), f"malformed crystal entry: {e}") from e
    return MappingProxyType(table)

def get_crystal(crystal_id: str) -> Optional[Crystal]:
    return all_crystals().get(crystal_id)

__all__ = ["Crystal","all_crystals","get_crystal"]
