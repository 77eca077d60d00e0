"""Exceptions raised by metroboard."""


class InvalidTimeFormat(ValueError):
    """Raised when a value cannot be read as a time of day."""
