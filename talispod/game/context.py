"""Per-slot game context.

One ``GameContext`` owns everything a save slot needs at runtime: the
creature, the ambient environment, the growth engine, the battle controller
and the inventory. The growth engine and the battle controller never own the
creature at the same time; ``start_battle`` suspends growth and
``close_battle`` hands the creature back.
"""
from __future__ import annotations
from datetime import datetime
from typing import Callable, Dict, List, Optional
import random

from talispod.battle.core import BattleCore
from talispod.battle.session import BattleController, BattleResult, BattleSnapshot, PLAYER_LOSS
from talispod.core.logging import logger
from talispod.creature.models import Creature
from talispod.environment.rank import EnvironmentSample, NEUTRAL_SAMPLE, RankResult
from talispod.growth.crystals import CrystalUse, add_items, use_crystal
from talispod.growth.engine import GrowthEngine, TickResult
from talispod.system.save import SaveState, load_slot, save_slot
from talispod.system.settings import Settings, SettingsData

class GameContext:
    def __init__(self, creature: Creature, settings: Optional[Settings] = None, *,
                 rng: Optional[random.Random] = None, clock: Callable[[], datetime] = datetime.now,
                 inventory: Optional[Dict[str, int]] = None, slot: int = 1):
        self.settings = settings or Settings.load()
        data: SettingsData = self.settings.data
        self.slot = slot
        self.creature = creature
        self.environment: EnvironmentSample = NEUTRAL_SAMPLE
        self.inventory: Dict[str, int] = dict(inventory or {})
        self.play_time_seconds = 0
        self.rng = rng or random.Random(data.seed)
        self.growth = GrowthEngine(creature, lambda: self.environment, clock=clock, tick_seconds=data.tick_seconds)
        self.battle = BattleController(BattleCore(self.rng), rounds=data.rounds,
                                       selection_seconds=data.selection_seconds)

    # --- Environment ---
    def set_environment(self, temperature: float, humidity: float, light_or_depth: float) -> EnvironmentSample:
        self.environment = EnvironmentSample(temperature, humidity, light_or_depth)
        logger.debug("EnvironmentSet", temperature=temperature, humidity=humidity, third=light_or_depth,
                     area=self.environment.area_id())
        return self.environment

    def reset_environment(self):
        self.environment = NEUTRAL_SAMPLE
        logger.debug("EnvironmentReset")

    def evaluate(self) -> RankResult:
        return self.growth.evaluate()

    def update(self, elapsed_seconds: float) -> List[TickResult]:
        """Advance wall time; battles exclude their duration from growth."""
        if elapsed_seconds > 0:
            self.play_time_seconds += int(elapsed_seconds)
        if self.battle.active:
            self.battle.tick(elapsed_seconds)
            return []
        return self.growth.accumulate(elapsed_seconds)

    # --- Battle ---
    def start_battle(self, enemy_id: Optional[str]) -> BattleSnapshot:
        snap = self.battle.start(self.creature, enemy_id)
        self.growth.reset_timer()
        self.growth.suspend()
        return snap

    def close_battle(self) -> BattleResult:
        result = self.battle.close()
        for reward in result["rewards"]:
            add_items(self.inventory, reward.item_id)
        if result["outcome"] == PLAYER_LOSS:
            self.reset_environment()
        self.growth.resume()
        return result

    # --- Items ---
    def use_item(self, item_id: str) -> CrystalUse:
        return use_crystal(self.creature, self.inventory, item_id)

    # --- Persistence ---
    def to_save_state(self) -> SaveState:
        return SaveState(creature=self.creature, inventory=dict(self.inventory),
                         play_time_seconds=self.play_time_seconds)

    def save(self):
        return save_slot(self.to_save_state(), self.slot)

    @classmethod
    def from_save_state(cls, state: SaveState, settings: Optional[Settings] = None, **kw) -> "GameContext":
        ctx = cls(state.creature, settings, inventory=state.inventory, **kw)
        ctx.play_time_seconds = state.play_time_seconds
        return ctx

    @classmethod
    def load(cls, slot: int, settings: Optional[Settings] = None, **kw) -> Optional["GameContext"]:
        state = load_slot(slot)
        if state is None:
            return None
        return cls.from_save_state(state, settings, slot=slot, **kw)
