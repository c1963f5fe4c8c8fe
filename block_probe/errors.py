"""Errors raised while configuring a probe."""


class InvalidConfiguration(TypeError, ValueError):
    """Raised when a probe is constructed with unusable options."""
