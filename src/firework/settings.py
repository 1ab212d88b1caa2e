"""Runtime configuration for a firework show."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import logging

from .utils import FPS, LOG_FILE, SETTINGS_FILE, load_json

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True)
class ShowSettings:
    """Options that shape a show; command-line flags override them."""

    fps: int = FPS
    looping: bool = False
    gradient: bool = False
    cjk: bool = False
    dynamic: bool = False
    demo: int = 0
    log_level: str = "INFO"
    log_file: Path = LOG_FILE

    def __post_init__(self) -> None:
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {self.log_level!r}")

    @property
    def frame_time(self) -> float:
        """Seconds available to compute one frame."""
        return 1.0 / self.fps


class SettingsManager:
    """Load show settings from a JSON file with safe defaults."""

    def __init__(self, path: Path = SETTINGS_FILE) -> None:
        self.path = path
        self.settings = self.load()

    def load(self) -> ShowSettings:
        """Load settings from disk; missing or malformed values keep defaults."""
        raw = load_json(self.path, {})
        settings = ShowSettings()
        if not isinstance(raw, dict):
            logging.getLogger(__name__).warning("ignoring settings file %s: not an object", self.path)
            return settings

        settings.fps = self._positive_int(raw.get("fps"), settings.fps)
        settings.looping = bool(raw.get("looping", settings.looping))
        settings.gradient = bool(raw.get("gradient", settings.gradient))
        settings.cjk = bool(raw.get("cjk", settings.cjk))
        settings.dynamic = bool(raw.get("dynamic", settings.dynamic))
        if isinstance(raw.get("demo"), int):
            settings.demo = raw["demo"]
        if str(raw.get("log_level", "")).upper() in LOG_LEVELS:
            settings.log_level = str(raw["log_level"]).upper()
        if isinstance(raw.get("log_file"), str):
            settings.log_file = Path(raw["log_file"])
        return settings

    @staticmethod
    def _positive_int(value: object, default: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            return default
        return value
