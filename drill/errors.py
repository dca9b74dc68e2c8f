"""Exceptions raised by Drill."""


class ConfigurationError(ValueError):
    """Algorithm parameters are inconsistent or out of range."""
