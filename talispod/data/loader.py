"""Runtime loader utilities for the species catalog.

Provides cached access to the JSON catalogs shipped under ``talispod/assets``.
Every catalog is read once and handed out as frozen records inside read-only
mappings, so engine code can never mutate shared static data.
"""
from __future__ import annotations
import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from talispod.core.errors import DataLoadError, UnknownSpeciesError
from talispod.core.paths import SPECIES
from talispod.core.types import STAT_AXES, normalize_attribute, opposite

def read_json(path: Path) -> Dict[str, Any]:
    """Parse a catalog file, wrapping every failure in DataLoadError."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise DataLoadError(str(path), "file missing") from None
    except (OSError, ValueError) as e:
        raise DataLoadError(str(path), str(e)) from e

def frozen_stats(raw: Optional[Mapping[str, Any]], default: int = 0) -> Mapping[str, int]:
    raw = raw or {}
    return MappingProxyType({axis: int(raw.get(axis, default) or 0) for axis in STAT_AXES})

@dataclass(frozen=True)
class OptimalCoordinate:
    temperature: float
    humidity: float
    depth: Optional[float] = None

@dataclass(frozen=True)
class Species:
    id: str
    name: str
    attribute: Optional[str]
    base_hp: int
    base_stats: Mapping[str, int]
    max_grow_hp: int
    max_grow_stats: Mapping[str, int]
    optimal: Optional[OptimalCoordinate]
    best_area_id: Optional[str]
    weak_attribute: Optional[str]
    default_moves: Tuple[Optional[str], ...]

def _optimal(raw: Optional[Mapping[str, Any]]) -> Optional[OptimalCoordinate]:
    if not raw:
        return None
    depth = raw.get("depth")
    return OptimalCoordinate(
        temperature=float(raw["temperature"]),
        humidity=float(raw["humidity"]),
        depth=float(depth) if depth is not None else None,
    )

def _weak(entry: Mapping[str, Any]) -> Optional[str]:
    # entries without the key take the opposite element
    if "weak_attribute" in entry:
        return normalize_attribute(entry["weak_attribute"])
    return opposite(entry.get("attribute"))

def _parse_species(entry: Mapping[str, Any], caps: Mapping[str, Any]) -> Species:
    hp_cap = int(caps.get("hp", 5110))
    stat_cap = int(caps.get("stats", 630))
    return Species(
        id=entry["id"],
        name=entry.get("name", entry["id"]),
        attribute=normalize_attribute(entry.get("attribute")),
        base_hp=int(entry.get("base_hp", 0)),
        base_stats=frozen_stats(entry.get("base_stats")),
        max_grow_hp=int(entry.get("max_grow_hp", hp_cap)),
        max_grow_stats=frozen_stats(entry.get("max_grow_stats"), default=stat_cap),
        optimal=_optimal(entry.get("optimal")),
        best_area_id=entry.get("best_area_id") or None,
        weak_attribute=_weak(entry),
        default_moves=tuple(entry.get("default_moves") or ()),
    )

@lru_cache(maxsize=None)
def species_catalog() -> Mapping[str, Species]:
    raw = read_json(SPECIES)
    caps = raw.get("default_caps", {})
    try:
        table = {e["id"]: _parse_species(e, caps) for e in raw.get("species", [])}
    except (KeyError, TypeError, ValueError) as e:
        raise DataLoadError(str(SPECIES), f"malformed species entry: {e}") from e
    return MappingProxyType(table)

def get_species(species_id: str) -> Species:
    sp = species_catalog().get(species_id)
    if sp is None:
        raise UnknownSpeciesError(species_id)
    return sp

def all_species_ids() -> Tuple[str, ...]:
    return tuple(species_catalog())

def find_by_name(name: str) -> Optional[Species]:
    name_lower = name.lower()
    for sp in species_catalog().values():
        if sp.name.lower() == name_lower or sp.id == name_lower:
            return sp
    return None

__all__ = ["Species","OptimalCoordinate","species_catalog","get_species","all_species_ids","find_by_name","read_json"]
