"""Creature record shared by the growth and battle engines.

A creature keeps its fixed base values next to the grown (time-accumulated)
components. Effective stats are ``base + grown``; max HP is
``base_hp + grown_hp``. Growth containers are lazily zero-initialised and
``repair()`` fixes malformed values in place instead of raising.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from talispod.core.types import ATTRIBUTES, STAT_AXES
from talispod.data.loader import OptimalCoordinate

MAX_MOVE_SLOTS = 15

def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default

def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(value, hi))

@dataclass
class Creature:
    species_id: str
    name: str
    attribute: Optional[str]
    base_hp: int
    base_stats: Dict[str, int]
    max_grow_hp: int
    max_grow_stats: Dict[str, int]
    grown_hp: int = 0
    grown_stats: Dict[str, int] = field(default_factory=dict)
    current_hp: Optional[int] = None  # lazily initialized to max HP
    optimal: Optional[OptimalCoordinate] = None
    best_area_id: Optional[str] = None
    weak_attribute: Optional[str] = None
    moves: List[Optional[str]] = field(default_factory=list)
    element_counters: Dict[str, int] = field(default_factory=dict)
    nickname: str = ""

    def __post_init__(self):
        self.repair()

    @property
    def max_hp(self) -> int:
        return self.base_hp + self.grown_hp

    @property
    def display_name(self) -> str:
        return self.nickname or self.name

    def stat(self, axis: str) -> int:
        return int(self.base_stats.get(axis, 0)) + int(self.grown_stats.get(axis, 0))

    def stats(self) -> Dict[str, int]:
        return {axis: self.stat(axis) for axis in STAT_AXES}

    def hp_room(self) -> int:
        return max(0, self.max_grow_hp - self.grown_hp)

    def stat_room(self, axis: str) -> int:
        return max(0, int(self.max_grow_stats.get(axis, 0)) - int(self.grown_stats.get(axis, 0)))

    def repair(self) -> None:
        """Normalise growth containers, caps and HP in place."""
        if not isinstance(self.base_stats, dict):
            self.base_stats = {}
        if not isinstance(self.max_grow_stats, dict):
            self.max_grow_stats = {}
        if not isinstance(self.grown_stats, dict):
            self.grown_stats = {}
        if not isinstance(self.element_counters, dict):
            self.element_counters = {}
        self.base_hp = max(0, _as_int(self.base_hp))
        self.max_grow_hp = max(0, _as_int(self.max_grow_hp))
        self.grown_hp = _clamp(_as_int(self.grown_hp), 0, self.max_grow_hp)
        for axis in STAT_AXES:
            self.base_stats[axis] = max(0, _as_int(self.base_stats.get(axis)))
            self.max_grow_stats[axis] = max(0, _as_int(self.max_grow_stats.get(axis)))
            self.grown_stats[axis] = _clamp(_as_int(self.grown_stats.get(axis)), 0, self.max_grow_stats[axis])
        for attr in ATTRIBUTES:
            self.element_counters[attr] = max(0, _as_int(self.element_counters.get(attr)))
        if self.current_hp is None:
            self.current_hp = self.max_hp
        self.current_hp = _clamp(_as_int(self.current_hp, self.max_hp), 0, self.max_hp)
        if not isinstance(self.moves, list):
            self.moves = list(self.moves or [])
        if len(self.moves) > MAX_MOVE_SLOTS:
            self.moves = self.moves[:MAX_MOVE_SLOTS]

    # ---------------- Persistence helpers -----------------
    def to_json(self) -> Dict[str, Any]:
        return {
            "species_id": self.species_id,
            "nickname": self.nickname,
            "grown_hp": self.grown_hp,
            "grown_stats": dict(self.grown_stats),
            "current_hp": self.current_hp,
            "moves": list(self.moves),
            "element_counters": dict(self.element_counters),
        }

__all__ = ["Creature","MAX_MOVE_SLOTS"]
