"""Persisted player settings."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "TERM_SNAKE_SETTINGS"


class SettingsError(Exception):
    """Raised when the settings file cannot be read or parsed."""


class Settings(BaseModel):
    """Player-facing toggles, stored between runs."""

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    vim_mode: bool = False
    no_wall_mode: bool = False

    def toggled(self, name: Literal["vim_mode", "no_wall_mode"]) -> Settings:
        """Return a copy with the named flag flipped."""
        return self.model_copy(update={name: not getattr(self, name)})


def default_settings_path() -> Path:
    """Settings location, overridable through ``$TERM_SNAKE_SETTINGS``."""
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".config" / "term-snake" / "settings.json"


class SettingsStore:
    """Reads and writes :class:`Settings` as a JSON file."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else default_settings_path()

    def load(self) -> Settings:
        """Load settings, falling back to defaults when no file exists."""
        if not self.path.exists():
            logger.info("No settings at %s; using defaults.", self.path)
            return Settings()
        try:
            raw = self.path.read_text()
        except OSError as exc:
            raise SettingsError(f"Cannot read settings file {self.path}: {exc}") from exc
        try:
            settings = Settings.model_validate_json(raw)
        except ValidationError as exc:
            raise SettingsError(f"Invalid settings file {self.path}: {exc}") from exc
        logger.info("Settings loaded from %s", self.path)
        return settings

    def save(self, settings: Settings) -> None:
        """Write settings to the JSON file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(settings.model_dump_json(indent=2))
        logger.info("Settings saved to %s", self.path)
