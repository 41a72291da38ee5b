"""Time-driven growth engine.

Every tick the creature is ranked against the current environment and the
rank's profile is applied in a fixed order:

  1. heal by ``min(heal_cap, max_hp - current_hp)``
  2. grow max HP (bounded by the HP growth cap) and add the same delta to
     current HP
  3. bump the element counter of the area attribute; when it reaches the
     profile interval reset it and grow the matching stat (bounded)
  4. on ``bad`` subtract the damage
  5. clamp current HP to ``[0, max_hp]``

``preview_tick`` and ``apply_tick`` share one computation so a preview is
always exactly what the next tick applies.
"""
from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from talispod.core.logging import logger
from talispod.core.types import ATTRIBUTES, stat_key
from talispod.creature.models import Creature
from talispod.environment.rank import EnvironmentSample, Rank, RankResult, evaluate_rank

DEFAULT_TICK_SECONDS = 60.0

@dataclass(frozen=True)
class GrowthProfile:
    hp_growth: int
    element_growth: int
    element_interval: Optional[int]
    heal_cap: int
    damage: int = 0

GROWTH_PROFILES: Dict[Rank, GrowthProfile] = {
    Rank.SUPERBEST: GrowthProfile(hp_growth=50, element_growth=20, element_interval=1, heal_cap=500),
    Rank.BEST: GrowthProfile(hp_growth=30, element_growth=10, element_interval=1, heal_cap=300),
    Rank.GOOD: GrowthProfile(hp_growth=20, element_growth=10, element_interval=2, heal_cap=200),
    Rank.NORMAL: GrowthProfile(hp_growth=10, element_growth=10, element_interval=3, heal_cap=100),
    Rank.BAD: GrowthProfile(hp_growth=10, element_growth=10, element_interval=5, heal_cap=0, damage=10),
    Rank.NEUTRAL: GrowthProfile(hp_growth=0, element_growth=0, element_interval=None, heal_cap=0),
}

@dataclass(frozen=True)
class TickResult:
    rank: Rank
    area_id: str
    heal: int
    hp_growth: int
    element: Optional[str]
    element_stat: Optional[str]
    element_counter: int  # counter value after the tick
    element_growth: int
    damage: int
    current_hp: int
    max_hp: int

    @property
    def changed(self) -> bool:
        return bool(self.heal or self.hp_growth or self.element_growth or self.damage)

def _compute(creature: Creature, evaluation: RankResult) -> TickResult:
    creature.repair()
    profile = GROWTH_PROFILES[evaluation.rank]
    current = creature.current_hp
    max_hp = creature.max_hp
    if evaluation.rank is Rank.NEUTRAL:
        return TickResult(evaluation.rank, evaluation.area_id, 0, 0, None, None, 0, 0, 0, current, max_hp)

    heal = min(profile.heal_cap, max(0, max_hp - current))
    current += heal

    hp_growth = min(profile.hp_growth, creature.hp_room())
    max_hp += hp_growth
    current += hp_growth

    element = evaluation.area_attribute if evaluation.area_attribute in ATTRIBUTES else None
    stat = stat_key(element) if element else None
    counter = 0
    element_growth = 0
    if element and profile.element_interval:
        counter = creature.element_counters.get(element, 0) + 1
        if counter >= profile.element_interval:
            counter = 0
            element_growth = min(profile.element_growth, creature.stat_room(stat))

    damage = profile.damage if evaluation.rank is Rank.BAD else 0
    current -= damage
    current = max(0, min(current, max_hp))
    return TickResult(evaluation.rank, evaluation.area_id, heal, hp_growth, element, stat,
                      counter, element_growth, damage, current, max_hp)

def preview_tick(creature: Creature, evaluation: RankResult) -> TickResult:
    """What the next tick would do, without applying it."""
    return _compute(creature, evaluation)

def apply_tick(creature: Creature, evaluation: RankResult) -> TickResult:
    result = _compute(creature, evaluation)
    if result.rank is Rank.NEUTRAL:
        return result
    creature.grown_hp += result.hp_growth
    if result.element:
        creature.element_counters[result.element] = result.element_counter
        if result.element_growth:
            creature.grown_stats[result.element_stat] += result.element_growth
    creature.current_hp = result.current_hp
    if logger.enabled("DEBUG"):
        logger.debug("GrowthTick", creature=creature.species_id, rank=result.rank.value, area=result.area_id,
                     heal=result.heal, hp=result.hp_growth, stat=result.element_stat, grow=result.element_growth,
                     damage=result.damage, current=result.current_hp, max=result.max_hp)
    return result

class GrowthEngine:
    """Drives ``apply_tick`` from elapsed time.

    Time is fed in via ``accumulate``; every full ``tick_seconds`` runs one
    tick against whatever the environment provider returns at that moment.
    While suspended (e.g. during a battle) elapsed time is discarded.
    """
    def __init__(self, creature: Creature, environment: Callable[[], EnvironmentSample],
                 clock: Callable[[], datetime] = datetime.now, tick_seconds: float = DEFAULT_TICK_SECONDS):
        if tick_seconds <= 0:
            raise ValueError("tick_seconds must be positive")
        self.creature = creature
        self.environment = environment
        self.clock = clock
        self.tick_seconds = float(tick_seconds)
        self._elapsed = 0.0
        self._suspended = False

    @property
    def suspended(self) -> bool:
        return self._suspended

    def suspend(self):
        self._suspended = True
        logger.debug("GrowthSuspended", creature=self.creature.species_id)

    def resume(self):
        self._suspended = False
        logger.debug("GrowthResumed", creature=self.creature.species_id)

    def reset_timer(self):
        self._elapsed = 0.0

    def seconds_until_tick(self) -> float:
        return max(0.0, self.tick_seconds - self._elapsed)

    def evaluate(self) -> RankResult:
        return evaluate_rank(self.creature, self.environment(), self.clock())

    def preview(self) -> TickResult:
        return preview_tick(self.creature, self.evaluate())

    def accumulate(self, seconds: float) -> List[TickResult]:
        if self._suspended or not math.isfinite(seconds) or seconds <= 0:
            return []
        self._elapsed += seconds
        results: List[TickResult] = []
        while self._elapsed >= self.tick_seconds:
            self._elapsed -= self.tick_seconds
            results.append(apply_tick(self.creature, self.evaluate()))
        return results

__all__ = ["GrowthProfile","GROWTH_PROFILES","TickResult","preview_tick","apply_tick","GrowthEngine","DEFAULT_TICK_SECONDS"]
