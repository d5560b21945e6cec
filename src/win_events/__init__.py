"""Mixin publish/subscribe capability for arbitrary Python objects."""

from .config import EventsSettings, build_settings_from_dict, configure, get_settings, settings_from_env
from .events import OPERATIONS, Events, current_context
from .exceptions import ConfigurationError, EventsError, MixinError
from .records import noop
from .selectors import ByCallback, ByEvent, BySource, BySourceAndEvent, Clear, Selector

__all__ = [
    "ByCallback",
    "ByEvent",
    "BySource",
    "BySourceAndEvent",
    "Clear",
    "ConfigurationError",
    "Events",
    "EventsError",
    "EventsSettings",
    "MixinError",
    "OPERATIONS",
    "Selector",
    "build_settings_from_dict",
    "configure",
    "current_context",
    "get_settings",
    "noop",
    "settings_from_env",
]
