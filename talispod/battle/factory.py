"""Factory helpers for constructing Combatant instances.

The player side starts from the creature's current HP (at least 1); the
enemy side always starts at full HP.
"""
from __future__ import annotations
from typing import Optional

from talispod.creature.models import Creature
from talispod.data.enemies import EnemySpecies
from .core import Combatant

def combatant_from_creature(creature: Creature) -> Combatant:
    creature.repair()
    return Combatant(
        name=creature.display_name,
        attribute=creature.attribute,
        stats=creature.stats(),
        max_hp=creature.max_hp,
        hp=max(1, creature.current_hp),
        moves=list(creature.moves),
    )

def combatant_from_enemy(enemy: EnemySpecies, nickname: Optional[str] = None) -> Combatant:
    return Combatant(
        name=nickname or enemy.name,
        attribute=enemy.attribute,
        stats=dict(enemy.base_stats),
        max_hp=enemy.max_hp,
        hp=enemy.max_hp,
        moves=list(enemy.moves),
    )

__all__ = ["combatant_from_creature","combatant_from_enemy"]
