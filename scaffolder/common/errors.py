"""Error types shared across the scaffolder."""


class InputError(ValueError):
    """Raised when a caller supplies invalid input.

    Input errors describe misconfiguration (an unsupported location
    protocol, a missing annotation, an unparseable URL) and are never
    retried.
    """

    pass


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass
