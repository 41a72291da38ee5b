"""Area catalog and land-grid tables.

Areas are keyed by stable string id. The land grid, temperature/humidity
bands and sea naming rules live in ``assets/areas.json`` next to the areas
themselves, so resolver code only walks declarative tables.
"""
from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from talispod.core.errors import DataLoadError
from talispod.core.paths import AREAS
from talispod.data.loader import read_json

NEUTRAL_AREA = "NEUTRAL"

@dataclass(frozen=True)
class Area:
    id: str
    name: str
    attribute: str

@dataclass(frozen=True)
class Band:
    key: str
    min: Optional[float]
    max: Optional[float]

    def match(self, value: float) -> bool:
        if self.min is not None and value < self.min:
            return False
        if self.max is not None and value > self.max:
            return False
        return True

@dataclass(frozen=True)
class AreaTables:
    areas: Mapping[str, Area]
    neutral_id: str
    temperature_bands: Tuple[Band, ...]
    temperature_gap_negative: str
    temperature_gap_other: str
    humidity_bands: Tuple[Band, ...]
    land_grid: Mapping[str, Mapping[str, str]]
    sea_north_prefix: str
    sea_south_prefix: str
    sea_depths: Mapping[int, str]
    sea_default_depth: int

def _bands(raw: Any) -> Tuple[Band, ...]:
    return tuple(Band(key=str(b["key"]), min=b.get("min"), max=b.get("max")) for b in raw)

@lru_cache(maxsize=None)
def area_tables() -> AreaTables:
    raw = read_json(AREAS)
    try:
        areas = {a["id"]: Area(id=a["id"], name=a["name"], attribute=a["attribute"]) for a in raw["areas"]}
        hum_bands = _bands(raw["humidity_bands"])
        grid = {}
        for row_key, cells in raw["land_grid"].items():
            if len(cells) != len(hum_bands):
                raise ValueError(f"grid row {row_key} has {len(cells)} cells")
            grid[row_key] = MappingProxyType({b.key: cell for b, cell in zip(hum_bands, cells)})
        sea = raw["sea"]
        gap = raw.get("temperature_gap_fallback", {})
        return AreaTables(
            areas=MappingProxyType(areas),
            neutral_id=raw.get("neutral_id", NEUTRAL_AREA),
            temperature_bands=_bands(raw["temperature_bands"]),
            temperature_gap_negative=gap.get("negative", "-5--30"),
            temperature_gap_other=gap.get("other", "0"),
            humidity_bands=hum_bands,
            land_grid=MappingProxyType(grid),
            sea_north_prefix=sea["north_prefix"],
            sea_south_prefix=sea["south_prefix"],
            sea_depths=MappingProxyType({int(k): v for k, v in sea["depths"].items()}),
            sea_default_depth=int(sea.get("default_depth", 50)),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise DataLoadError(str(AREAS), f"malformed area tables: {e}") from e

def area_catalog() -> Mapping[str, Area]:
    return area_tables().areas

def get_area(area_id: str) -> Optional[Area]:
    return area_catalog().get(area_id)

def area_name(area_id: str) -> str:
    area = get_area(area_id)
    return area.name if area else area_id

__all__ = ["Area","Band","AreaTables","NEUTRAL_AREA","area_tables","area_catalog","get_area","area_name"]
