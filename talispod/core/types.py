"""Global attribute metadata: stat axes, relations, colors & labels.

Provides:
  ATTRIBUTES: the four elemental attributes in display order
  STAT_AXES: the four grown stat axes in display order
  stat_key(attribute): stat axis a skill/area attribute draws on
  opposite(attribute): the attribute on the far side of the element wheel
  attribute_abbreviation / rich_attribute: labels for the CLI tables
"""
from __future__ import annotations
from typing import Dict, Optional, Tuple

VOLCANO = "volcano"
TORNADO = "tornado"
EARTHQUAKE = "earthquake"
STORM = "storm"
NEUTRAL = "neutral"

ATTRIBUTES: Tuple[str, ...] = (VOLCANO, TORNADO, EARTHQUAKE, STORM)
STAT_AXES: Tuple[str, ...] = ("magic", "counter", "attack", "recover")

_STAT_KEYS: Dict[str, str] = {
    VOLCANO: "magic",
    TORNADO: "counter",
    EARTHQUAKE: "attack",
    STORM: "recover",
    NEUTRAL: "attack",
}

_OPPOSITES: Dict[str, str] = {
    TORNADO: EARTHQUAKE,
    EARTHQUAKE: TORNADO,
    VOLCANO: STORM,
    STORM: VOLCANO,
}

ATTRIBUTE_COLORS_HEX: Dict[str, str] = {
    VOLCANO: "#EE8130",
    TORNADO: "#7AC74C",
    EARTHQUAKE: "#E2BF65",
    STORM: "#6390F0",
    NEUTRAL: "#A8A77A",
}

ATTRIBUTE_ABBREVIATIONS: Dict[str, str] = {
    VOLCANO: "VOL",
    TORNADO: "TOR",
    EARTHQUAKE: "EQK",
    STORM: "STM",
    NEUTRAL: "NEU",
}

def normalize_attribute(attr: object) -> Optional[str]:
    """Lower-case attribute string, or None for empty/non-string values."""
    if not isinstance(attr, str) or not attr.strip():
        return None
    return attr.strip().lower()

def stat_key(attribute: Optional[str]) -> str:
    return _STAT_KEYS.get(normalize_attribute(attribute) or NEUTRAL, "attack")

def opposite(attribute: Optional[str]) -> Optional[str]:
    return _OPPOSITES.get(normalize_attribute(attribute) or "")

def attribute_abbreviation(attribute: Optional[str]) -> str:
    attr = normalize_attribute(attribute) or NEUTRAL
    return ATTRIBUTE_ABBREVIATIONS.get(attr, attr[:3].upper())

def rich_attribute(attribute: Optional[str], text: Optional[str] = None) -> str:
    """Rich markup for an attribute label (used by the CLI tables)."""
    attr = normalize_attribute(attribute) or NEUTRAL
    label = text if text is not None else attr
    hex_val = ATTRIBUTE_COLORS_HEX.get(attr)
    if not hex_val:
        return label
    return f"[{hex_val}]{label}[/{hex_val}]"

__all__ = [
    'VOLCANO','TORNADO','EARTHQUAKE','STORM','NEUTRAL','ATTRIBUTES','STAT_AXES',
    'normalize_attribute','stat_key','opposite','attribute_abbreviation','rich_attribute'
]
