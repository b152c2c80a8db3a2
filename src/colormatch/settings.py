"""Player-facing settings persisted between runs."""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields
from enum import Enum
from pathlib import Path
from typing import List

from colormatch.palettes import COLOR_BLIND_COLORS, NORMAL_COLORS, PaletteEntry

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    EASY = 3
    MEDIUM = 5
    HARD = 7

    @property
    def grid_size(self) -> int:
        return self.value

    @property
    def label(self) -> str:
        return f"{self.name.title()} ({self.value}×{self.value})"


@dataclass
class Settings:
    player_name: str = "Player"
    color_blind_mode: bool = False
    sound_enabled: bool = True
    haptic_enabled: bool = True


def default_settings_path() -> Path:
    return Path(__file__).resolve().parents[2] / "data" / "settings.json"


def load_settings(path: Path | None = None) -> Settings:
    path = Path(path) if path is not None else default_settings_path()
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError:
        return Settings()
    except json.JSONDecodeError:
        logger.warning("Settings file %s is not valid JSON; using defaults", path)
        return Settings()
    if not isinstance(payload, dict):
        return Settings()
    settings = Settings()
    for item in fields(Settings):
        if item.name not in payload:
            continue
        value = payload[item.name]
        default = getattr(settings, item.name)
        if isinstance(default, bool):
            setattr(settings, item.name, bool(value))
        elif isinstance(value, str) and value.strip():
            setattr(settings, item.name, value.strip())
    return settings


def save_settings(settings: Settings, path: Path | None = None) -> None:
    path = Path(path) if path is not None else default_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(asdict(settings), handle, indent=2)


def palette_for(settings: Settings) -> List[PaletteEntry]:
    return list(COLOR_BLIND_COLORS if settings.color_blind_mode else NORMAL_COLORS)
