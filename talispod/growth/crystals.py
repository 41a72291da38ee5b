"""Using reward crystals on a creature.

Inventory is a plain ``{item_id: count}`` mapping owned by the game context.
Only items listed in the crystal catalog are usable; anything else (souls,
king crystals) just sits in the inventory.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

from talispod.core.errors import ItemNotUsableError
from talispod.core.logging import logger
from talispod.creature.models import Creature
from talispod.data.crystals import get_crystal

@dataclass(frozen=True)
class CrystalUse:
    crystal_id: str
    stat: Optional[str]  # None for a full heal
    amount: int  # stat points or HP actually restored
    remaining: int

def add_items(inventory: Dict[str, int], item_id: str, count: int = 1) -> int:
    inventory[item_id] = int(inventory.get(item_id, 0)) + count
    return inventory[item_id]

def use_crystal(creature: Creature, inventory: Dict[str, int], crystal_id: str) -> CrystalUse:
    crystal = get_crystal(crystal_id)
    if crystal is None:
        raise ItemNotUsableError(crystal_id, "not a usable crystal")
    have = int(inventory.get(crystal_id, 0))
    if have <= 0:
        raise ItemNotUsableError(crystal_id, "none left")
    creature.repair()
    if crystal.effect == "full_heal":
        stat = None
        amount = creature.max_hp - creature.current_hp
        creature.current_hp = creature.max_hp
    else:
        stat = crystal.stat
        amount = min(crystal.amount, creature.stat_room(stat))
        creature.grown_stats[stat] += amount
    if have == 1:
        del inventory[crystal_id]
    else:
        inventory[crystal_id] = have - 1
    logger.info("CrystalUsed", crystal=crystal_id, creature=creature.species_id, stat=stat, amount=amount)
    return CrystalUse(crystal_id, stat, amount, have - 1)

__all__ = ["CrystalUse","use_crystal","add_items"]
