from __future__ import annotations
import json, os, time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional
from talispod.core.errors import SaveLoadError, TalisPodError
from talispod.core.logging import logger
from talispod.creature.factory import creature_from_json
from talispod.creature.models import Creature

SAVE_DIR_NAME = ".talispod_saves"
SAVE_VERSION = 1

@dataclass
class SaveState:
    creature: Creature
    inventory: Dict[str, int] = field(default_factory=dict)
    play_time_seconds: int = 0
    last_save_ts: float = 0.0
    version: int = SAVE_VERSION

    def to_json(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "creature": self.creature.to_json(),
            "inventory": dict(self.inventory),
            "play_time_seconds": self.play_time_seconds,
            "last_save_ts": self.last_save_ts,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "SaveState":
        inventory = {}
        for item_id, count in (data.get("inventory") or {}).items():
            if isinstance(count, int) and count > 0:
                inventory[str(item_id)] = count
        return cls(
            creature=creature_from_json(data["creature"]),
            inventory=inventory,
            play_time_seconds=int(data.get("play_time_seconds", 0)),
            last_save_ts=float(data.get("last_save_ts", 0.0)),
            version=int(data.get("version", SAVE_VERSION)),
        )


def _save_dir() -> Path:
    home = Path(os.path.expanduser("~"))
    path = home / SAVE_DIR_NAME
    path.mkdir(parents=True, exist_ok=True)
    return path

def slot_path(slot: int) -> Path:
    return _save_dir() / f"slot_{int(slot)}.json"


def list_slots() -> List[int]:
    slots = []
    for p in _save_dir().glob("slot_*.json"):
        suffix = p.stem[len("slot_"):]
        if suffix.isdigit():
            slots.append(int(suffix))
    return sorted(slots)


def save_slot(state: SaveState, slot: int) -> Path:
    """Write a slot through a temp file so a crash never leaves half a save."""
    path = slot_path(slot)
    tmp = path.with_suffix(".json.tmp")
    state.last_save_ts = time.time()
    try:
        tmp.write_text(json.dumps(state.to_json(), indent=2), encoding="utf-8")
        os.replace(tmp, path)
    except OSError as e:
        logger.error("GameSaveFailed", file=str(path), error=str(e))
        raise
    logger.info("GameSaved", file=str(path))
    return path


def load_slot(slot: int) -> Optional[SaveState]:
    path = slot_path(slot)
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        state = SaveState.from_json(data)
    except SaveLoadError:
        raise
    except (OSError, ValueError, KeyError, TypeError, AttributeError, TalisPodError) as e:
        raise SaveLoadError(str(path), str(e)) from e
    logger.info("GameLoaded", file=str(path), creature=state.creature.species_id)
    return state


def delete_slot(slot: int) -> bool:
    path = slot_path(slot)
    if path.exists():
        path.unlink()
        logger.info("GameDeleted", file=str(path))
        return True
    return False
