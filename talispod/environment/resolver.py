"""Environment area resolver.

Maps a (temperature, humidity, light-or-depth) coordinate onto an area id:

  * (0, 50) is the neutral point regardless of the third value
  * humidity exactly 100 selects the sea; temperature picks the hemisphere
    and the third value picks the depth band (0 / 50 / 100, anything else 50)
  * everything else walks the 9x9 land grid from ``assets/areas.json``

Resolution is a pure lookup and never raises for bad input; unusable
coordinates come back as the neutral area.
"""
from __future__ import annotations
import math
from typing import Any, Optional

from talispod.data.areas import AreaTables, area_tables

SEA_HUMIDITY = 100.0

def finite_number(value: Any) -> Optional[float]:
    try:
        v = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return v if math.isfinite(v) else None

def is_neutral_point(temperature: Any, humidity: Any) -> bool:
    return finite_number(temperature) == 0.0 and finite_number(humidity) == 50.0

def _temperature_key(tables: AreaTables, temperature: float) -> str:
    for band in tables.temperature_bands:
        if band.match(temperature):
            return band.key
    # values between rows (e.g. 2, 33, -3) snap to the nearest central row
    return tables.temperature_gap_negative if temperature < 0 else tables.temperature_gap_other

def _humidity_key(tables: AreaTables, humidity: float) -> Optional[str]:
    for band in tables.humidity_bands:
        if band.match(humidity):
            return band.key
    return None

def resolve_land_area(temperature: Any, humidity: Any) -> str:
    tables = area_tables()
    t, h = finite_number(temperature), finite_number(humidity)
    if t is None or h is None:
        return tables.neutral_id
    hkey = _humidity_key(tables, h)
    if hkey is None:
        return tables.neutral_id
    row = tables.land_grid.get(_temperature_key(tables, t), {})
    area_id = row.get(hkey)
    if not area_id or area_id not in tables.areas:
        return tables.neutral_id
    return area_id

def resolve_sea_area(temperature: Any, depth: Any) -> str:
    tables = area_tables()
    t, d = finite_number(temperature), finite_number(depth)
    if t is None or d is None:
        return tables.neutral_id
    prefix = tables.sea_north_prefix if t < 0 else tables.sea_south_prefix
    suffix = tables.sea_depths.get(d) if d.is_integer() else None
    if suffix is None:
        suffix = tables.sea_depths[tables.sea_default_depth]
    area_id = prefix + suffix
    return area_id if area_id in tables.areas else tables.neutral_id

def resolve_area(temperature: Any, humidity: Any, light_or_depth: Any) -> str:
    """Area id for a sample. Never raises; bad input resolves to neutral."""
    tables = area_tables()
    t, h, third = finite_number(temperature), finite_number(humidity), finite_number(light_or_depth)
    if t is None or h is None or third is None:
        return tables.neutral_id
    if t == 0 and h == 50:
        return tables.neutral_id
    if h == SEA_HUMIDITY:
        return resolve_sea_area(t, third)
    return resolve_land_area(t, h)

def is_sea_area(area_id: Optional[str]) -> bool:
    if not area_id:
        return False
    tables = area_tables()
    return area_id.startswith((tables.sea_north_prefix, tables.sea_south_prefix))

__all__ = ["finite_number","resolve_area","resolve_land_area","resolve_sea_area","is_neutral_point","is_sea_area","SEA_HUMIDITY"]
