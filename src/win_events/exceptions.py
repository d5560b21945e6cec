"""Custom exceptions raised by win_events."""


class EventsError(RuntimeError):
    """Base error for all event capability exceptions."""


class MixinError(EventsError):
    """Raised when the capability cannot be attached to a host object."""


class ConfigurationError(EventsError):
    """Raised when configuration values are invalid or missing."""
