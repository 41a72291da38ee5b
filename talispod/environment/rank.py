"""Rank evaluation: how well an environment suits a creature.

The rank is the single input to the growth engine. Precedence is fixed:
neutral, light mismatch (land only), superbest, best, bad, good, normal.
Weakness is checked before affinity so a creature whose own attribute is
also its weak one lands on ``bad``.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, TYPE_CHECKING

from talispod.core.types import NEUTRAL, STORM, normalize_attribute
from talispod.data.areas import area_tables
from talispod.environment.resolver import finite_number, is_sea_area, resolve_area, SEA_HUMIDITY

if TYPE_CHECKING:  # pragma: no cover
    from talispod.creature.models import Creature

class Rank(str, Enum):
    NEUTRAL = "neutral"
    SUPERBEST = "superbest"
    BEST = "best"
    GOOD = "good"
    NORMAL = "normal"
    BAD = "bad"

@dataclass(frozen=True)
class EnvironmentSample:
    temperature: float = 0
    humidity: float = 50
    light_or_depth: float = 50

    @property
    def is_sea(self) -> bool:
        return finite_number(self.humidity) == SEA_HUMIDITY

    def area_id(self) -> str:
        return resolve_area(self.temperature, self.humidity, self.light_or_depth)

NEUTRAL_SAMPLE = EnvironmentSample()

@dataclass(frozen=True)
class RankResult:
    rank: Rank
    area_id: str
    area_name: str
    area_attribute: Optional[str]  # None on the neutral area
    is_sea: bool
    light_ok: bool
    light_target: int

def light_target(now: datetime) -> int:
    """Light level a land environment must show at ``now`` (0, 50 or 100)."""
    hour = now.hour
    if 6 <= hour <= 9:
        return 50
    if 10 <= hour <= 15:
        return 100
    return 0

def derived_best_area(creature: "Creature") -> Optional[str]:
    """Best area for a creature: explicit id first, else the area of its optimum."""
    if creature.best_area_id:
        return creature.best_area_id
    opt = creature.optimal
    if opt is None:
        return None
    third = opt.depth if opt.depth is not None else area_tables().sea_default_depth
    area_id = resolve_area(opt.temperature, opt.humidity, third)
    return None if area_id == area_tables().neutral_id else area_id

def _is_superbest(creature: "Creature", t: float, h: float, third: float) -> bool:
    opt = creature.optimal
    if opt is None:
        return False
    if t != opt.temperature or h != opt.humidity:
        return False
    if h == SEA_HUMIDITY:
        return opt.depth is not None and third == opt.depth
    return True

def evaluate_rank(creature: "Creature", sample: EnvironmentSample, now: Optional[datetime] = None) -> RankResult:
    now = now or datetime.now()
    tables = area_tables()
    target = light_target(now)
    area_id = sample.area_id()
    area = tables.areas.get(area_id)
    name = area.name if area else area_id
    if area_id == tables.neutral_id:
        return RankResult(Rank.NEUTRAL, area_id, name, None, False, True, target)

    t, h, third = finite_number(sample.temperature), finite_number(sample.humidity), finite_number(sample.light_or_depth)
    sea = is_sea_area(area_id)
    attribute = STORM if sea else normalize_attribute(area.attribute if area else None)
    light_ok = sea or third == target

    def result(rank: Rank) -> RankResult:
        return RankResult(rank, area_id, name, attribute, sea, light_ok, target)

    if not light_ok:
        return result(Rank.BAD)
    if _is_superbest(creature, t, h, third):
        return result(Rank.SUPERBEST)
    if area_id == derived_best_area(creature):
        return result(Rank.BEST)
    own = normalize_attribute(creature.attribute)
    weak = normalize_attribute(creature.weak_attribute)
    if weak and attribute == weak:
        return result(Rank.BAD)
    if own and attribute == own:
        return result(Rank.GOOD)
    return result(Rank.NORMAL)

def preview_attribute(sample: EnvironmentSample) -> str:
    """Attribute an environment would feed, for UI tinting before ranking."""
    area_id = sample.area_id()
    if area_id == area_tables().neutral_id:
        return NEUTRAL
    if is_sea_area(area_id):
        return STORM
    area = area_tables().areas.get(area_id)
    return normalize_attribute(area.attribute if area else None) or NEUTRAL

__all__ = ["Rank","EnvironmentSample","NEUTRAL_SAMPLE","RankResult","light_target","derived_best_area","evaluate_rank","preview_attribute"]
