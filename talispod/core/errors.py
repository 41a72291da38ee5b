"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class TalisPodError(Exception):
    pass

class DataLoadError(TalisPodError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class UnknownSpeciesError(TalisPodError):
    def __init__(self, species_id: str):
        super().__init__(f"Species not found: {species_id}")
        self.species_id = species_id

class SaveLoadError(TalisPodError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Save slot {path} unreadable: {detail}")
        self.path = path
        self.detail = detail

class ItemNotUsableError(TalisPodError):
    def __init__(self, item_id: str, detail: str):
        super().__init__(f"Item '{item_id}' cannot be used: {detail}")
        self.item_id = item_id
        self.detail = detail

class BattleStateError(TalisPodError):
    pass
