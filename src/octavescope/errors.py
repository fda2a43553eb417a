"""Exceptions raised by the octavescope engine."""


class ConfigurationError(ValueError):
    """
    Raised when a topology, config or generator is built with unusable
    constants (zero bins, zero octaves, non-positive sample rate, ...).

    These are fatal: nothing in the engine retries or recovers from them.
    """
