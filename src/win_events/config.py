"""Configuration models for the win_events capability."""
from __future__ import annotations

import os
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import ConfigurationError
from .logging import LEVEL_ENV, set_level

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class EventsSettings(BaseModel):
    """Runtime settings shared by every event-capable host."""

    model_config = ConfigDict(frozen=True)

    log_level: str = Field(default="INFO", description="Level applied to the win_events loggers")
    trace_dispatch: bool = Field(
        default=False,
        description="If True every handler invocation made by trigger is logged at DEBUG.",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LEVELS)}")
        return level


_active = EventsSettings()


def build_settings_from_dict(raw: Mapping[str, Any]) -> EventsSettings:
    """Utility helper to build :class:`EventsSettings` from a plain mapping."""

    try:
        return EventsSettings.model_validate(dict(raw))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid events settings: {exc}") from exc


def settings_from_env(environ: Mapping[str, str] | None = None) -> EventsSettings:
    """Read ``WIN_EVENTS_*`` variables into an :class:`EventsSettings`."""

    env = os.environ if environ is None else environ
    raw: Dict[str, Any] = {}
    if LEVEL_ENV in env:
        raw["log_level"] = env[LEVEL_ENV]
    if "WIN_EVENTS_TRACE_DISPATCH" in env:
        raw["trace_dispatch"] = env["WIN_EVENTS_TRACE_DISPATCH"].strip()
    return build_settings_from_dict(raw)


def configure(settings: EventsSettings | Mapping[str, Any]) -> EventsSettings:
    """Install ``settings`` as the active configuration and apply its log level."""

    global _active
    if not isinstance(settings, EventsSettings):
        settings = build_settings_from_dict(settings)
    _active = settings
    set_level(settings.log_level)
    return settings


def get_settings() -> EventsSettings:
    return _active


__all__ = [
    "EventsSettings",
    "build_settings_from_dict",
    "configure",
    "get_settings",
    "settings_from_env",
]
