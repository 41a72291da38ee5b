"""
Centralized path helpers.
"""
from __future__ import annotations
from pathlib import Path

# This file lives at talispod/core/paths.py
PACKAGE = Path(__file__).resolve().parents[1]
ASSETS = PACKAGE / "assets"
AREAS = ASSETS / "areas.json"
SKILLS = ASSETS / "skills.json"
SPECIES = ASSETS / "species.json"
ENEMIES = ASSETS / "enemies.json"
CRYSTALS = ASSETS / "crystals.json"
