"""Battle mechanics: skill amounts, reflection and random draws.

Every amount is ``floor(stat * power / 100 * bonus)`` computed in exact
rational arithmetic, with a 1.5 bonus when the actor shares the skill's
attribute. Heals draw on ``recover`` and stop at max HP. A volcano attack
into a bracing tornado user bounces back off the defender's ``counter``.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Callable, Dict, List, Optional, Sequence
import math
import random

from talispod.core.types import STAT_AXES, TORNADO, VOLCANO, normalize_attribute, stat_key
from talispod.data.enemies import RewardEntry
from talispod.data.skills import Skill

SAME_ATTRIBUTE_BONUS = Fraction(3, 2)
REFLECT_BONUS = Fraction(3, 2)
MOVES_PER_ROUND = 3

@dataclass
class Combatant:
    name: str
    attribute: Optional[str]
    stats: Dict[str, int]
    max_hp: int
    hp: int
    moves: List[Optional[str]] = field(default_factory=list)
    bracing: bool = False

    def __post_init__(self):
        self.max_hp = max(1, int(self.max_hp))
        self.hp = max(0, min(int(self.hp), self.max_hp))
        self.stats = {axis: int(self.stats.get(axis, 0)) for axis in STAT_AXES}

    @property
    def alive(self) -> bool:
        return self.hp > 0

    def stat(self, axis: str) -> int:
        return self.stats.get(axis, 0)

def is_reflected(attack: Skill, defense: Skill) -> bool:
    return (not attack.is_heal and attack.attribute == VOLCANO
            and defense.attribute == TORNADO)

class BattleCore:
    def __init__(self, rng: Optional[random.Random] = None, message_cb: Optional[Callable[[str], None]] = None):
        self.rng = rng or random.Random()
        self.message_cb = message_cb

    def _msg(self, text: str):
        if self.message_cb: self.message_cb(text)

    # ------------------------------------------------------------------
    # Mechanics
    # ------------------------------------------------------------------
    @staticmethod
    def skill_amount(actor: Combatant, skill: Skill) -> int:
        bonus = SAME_ATTRIBUTE_BONUS if normalize_attribute(actor.attribute) == skill.attribute else 1
        value = Fraction(actor.stat(stat_key(skill.attribute))) * skill.power / 100 * bonus
        return max(0, math.floor(value))

    def heal(self, actor: Combatant, skill: Skill) -> int:
        before = actor.hp
        actor.hp = min(actor.max_hp, actor.hp + self.skill_amount(actor, skill))
        gained = actor.hp - before
        self._msg(f"{actor.name} used {skill.name} and recovered {gained} HP!")
        return gained

    def strike(self, actor: Combatant, skill: Skill, target: Combatant) -> int:
        dmg = self.skill_amount(actor, skill)
        target.hp = max(0, target.hp - dmg)
        self._msg(f"{actor.name} used {skill.name}! {target.name} took {dmg} damage.")
        return dmg

    def reflect(self, actor: Combatant, skill: Skill, defender: Combatant) -> int:
        """Bounce a volcano attack back at ``actor`` off the defender's counter stat."""
        value = Fraction(defender.stat("counter")) * skill.power / 100 * REFLECT_BONUS
        dmg = max(0, math.floor(value))
        actor.hp = max(0, actor.hp - dmg)
        self._msg(f"{defender.name} reflected {skill.name}! {actor.name} took {dmg} damage.")
        return dmg

    def draw_moves(self, slots: int, count: int = MOVES_PER_ROUND) -> List[int]:
        """Distinct random slot indices; slots are reusable across rounds."""
        return self.rng.sample(range(slots), min(count, slots))

    def roll_rewards(self, entries: Sequence[RewardEntry]) -> List[RewardEntry]:
        granted = [r for r in entries if self.rng.random() * 100 < r.chance]
        for r in granted:
            self._msg(f"Obtained {r.name}!")
        return granted

__all__ = ["Combatant","BattleCore","is_reflected","MOVES_PER_ROUND","SAME_ATTRIBUTE_BONUS"]
