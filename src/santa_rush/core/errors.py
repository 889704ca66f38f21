"""Exception types for Santa Rush."""


class SantaRushError(Exception):
    """Base class for all Santa Rush errors."""


class ConfigurationError(SantaRushError):
    """Settings describe a world the simulation cannot run in.

    Raised once when a session is built, never from inside a frame.
    """
