# breakin/errors.py


class BreakinError(Exception):
    """Base class for errors raised by the detector."""


class LoadError(BreakinError):
    """A lookup file could not be opened or read."""

    def __init__(self, path, reason: str = "") -> None:
        self.path = str(path)
        self.reason = reason
        message = f"Error opening file {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigError(BreakinError):
    """Invalid configuration file, option or URL."""
