"""
Failures raised by the slog core.

All of them derive from SlogError so the CLI can turn any of them into a
one-line diagnostic and a non-zero exit. Malformed shifts, malformed log
lines and stray files in the log directory are not errors: they are
skipped or defaulted where they are read.
"""


class SlogError(Exception):
    """Base class for every failure surfaced to the caller."""


class ConfigError(SlogError):
    """
    Raised when the log directory or the settings file cannot be created,
    read or written.
    """

    def __init__(self, path, reason=None):
        self.path = path
        msg = f"Cannot use {path}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PathEncodingError(SlogError):
    """Raised when a log path cannot be represented as text."""

    def __init__(self, path):
        self.path = path
        super().__init__("could not convert path to string")


class NoActiveLogError(SlogError):
    """
    Raised when a message is appended or a log replayed but the log
    directory holds no log. Run `slog start` first.
    """

    def __init__(self, root):
        self.root = root
        super().__init__(f"No stream log found in {root}. Run 'slog start' first.")


class LogIOError(SlogError):
    """Wraps an OSError raised while opening, reading or writing a log."""

    def __init__(self, path, error):
        self.path = path
        self.error = error
        reason = error.strerror or str(error)
        super().__init__(f"Could not access {path}: {reason}")
