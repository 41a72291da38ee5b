"""Factory helpers for constructing Creature instances from species data.

Shared across the game context, save loading and tests.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional

from talispod.data.loader import get_species
from .models import Creature, MAX_MOVE_SLOTS

def default_moves(species_id: str) -> List[Optional[str]]:
    moves: List[Optional[str]] = list(get_species(species_id).default_moves[:MAX_MOVE_SLOTS])
    while len(moves) < MAX_MOVE_SLOTS:
        moves.append(None)
    return moves

def new_creature(species_id: str, nickname: str = "") -> Creature:
    """Fresh creature at full HP with no growth. Raises UnknownSpeciesError."""
    s = get_species(species_id)
    return Creature(
        species_id=s.id,
        name=s.name,
        attribute=s.attribute,
        base_hp=s.base_hp,
        base_stats=dict(s.base_stats),
        max_grow_hp=s.max_grow_hp,
        max_grow_stats=dict(s.max_grow_stats),
        optimal=s.optimal,
        best_area_id=s.best_area_id,
        weak_attribute=s.weak_attribute,
        moves=default_moves(species_id),
        nickname=nickname.strip(),
    )

def creature_from_json(data: Dict[str, Any]) -> Creature:
    """Rebuild a creature from its saved record; static fields come from the catalog."""
    c = new_creature(data["species_id"], str(data.get("nickname") or ""))
    c.grown_hp = data.get("grown_hp", 0)
    c.grown_stats = dict(data.get("grown_stats") or {})
    c.element_counters = dict(data.get("element_counters") or {})
    c.current_hp = data.get("current_hp")
    moves = data.get("moves")
    if isinstance(moves, list) and moves:
        c.moves = [m if isinstance(m, str) and m.strip() else None for m in moves[:MAX_MOVE_SLOTS]]
        while len(c.moves) < MAX_MOVE_SLOTS:
            c.moves.append(None)
    c.repair()
    return c

__all__ = ["new_creature","creature_from_json","default_moves"]
