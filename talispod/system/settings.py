from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional
from talispod.core.logging import logger

SETTINGS_FILENAME = ".talispod_settings.json"
LOG_LEVELS = {"DEBUG","INFO","WARN","ERROR"}

@dataclass
class SettingsData:
    log_level: str = "INFO"          # DEBUG / INFO / WARN / ERROR
    debug: bool = False              # Verbose battle/growth prints
    tick_seconds: float = 60.0       # growth tick length
    selection_seconds: float = 30.0  # battle move-selection countdown
    rounds: int = 5                  # battle round limit
    seed: Optional[int] = None       # fixed RNG seed for reproducible battles

    def normalize(self):
        if self.log_level not in LOG_LEVELS:
            self.log_level = "INFO"
        self.debug = bool(self.debug)
        if not isinstance(self.tick_seconds, (int, float)) or isinstance(self.tick_seconds, bool) or self.tick_seconds <= 0:
            self.tick_seconds = 60.0
        if not isinstance(self.selection_seconds, (int, float)) or isinstance(self.selection_seconds, bool) or self.selection_seconds <= 0:
            self.selection_seconds = 30.0
        if not isinstance(self.rounds, int) or isinstance(self.rounds, bool) or self.rounds < 1:
            self.rounds = 5
        if self.seed is not None and (not isinstance(self.seed, int) or isinstance(self.seed, bool)):
            self.seed = None

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls) -> "Settings":
        path = cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                if not isinstance(raw, dict):
                    raise ValueError("settings root must be an object")
                # Backfill missing fields, ignore unknown ones
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def apply_logging(self):
        # debug forces verbose output regardless of log_level
        logger.set_level("DEBUG" if self.data.debug else self.data.log_level)  # type: ignore[arg-type]

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2))
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))
