import re
import time
from collections import namedtuple
from pathlib import Path
from slog.config import LOG_EXT, log_location
from slog.errors import ConfigError, LogIOError, PathEncodingError

# A log is identified by the epoch second it was created at.
LogHandle = namedtuple("LogHandle", ["timestamp", "path"])

_LOG_NAME = re.compile(r"(-?[0-9]+)\." + re.escape(LOG_EXT))


def current_timestamp():
    return int(time.time())


def parse_log_name(name):
    """Return the timestamp encoded in a log file name, or None."""
    match = _LOG_NAME.fullmatch(name)
    if not match:
        return None
    return int(match.group(1))


def ensure_text_path(path):
    """Reject paths that cannot be encoded as UTF-8 text."""
    try:
        str(path).encode("utf-8")
    except UnicodeEncodeError:
        raise PathEncodingError(path)
    return path


class LogStore:
    """Stream logs kept as `<epoch>.csv` files in one directory.

    Nothing is cached: every call re-reads the directory, so the active log
    is always whatever is newest on disk right now.
    """

    def __init__(self, root=None):
        self._root = Path(root) if root is not None else None

    def resolve_root(self):
        if self._root is not None:
            return self._root
        return log_location()

    def path_for(self, timestamp):
        return self.resolve_root() / f"{timestamp}.{LOG_EXT}"

    def logs(self):
        """All logs in the directory, oldest first. Stray entries are ignored."""
        root = self.resolve_root()
        if not root.is_dir():
            return []

        found = []
        try:
            for entry in root.iterdir():
                timestamp = parse_log_name(entry.name)
                if timestamp is None or not entry.is_file():
                    continue
                found.append(LogHandle(timestamp, entry))
        except OSError as e:
            raise ConfigError(root, e.strerror or str(e))
        return sorted(found, key=lambda log: log.timestamp)

    def find_active(self):
        """The log with the greatest timestamp, or None if there are none."""
        found = self.logs()
        if not found:
            return None
        return max(found, key=lambda log: log.timestamp)

    def get(self, timestamp):
        for log in self.logs():
            if log.timestamp == timestamp:
                return log
        return None

    def start(self, now=None):
        """Create a new log holding only the open entry `t0,`."""
        t0 = now if now is not None else current_timestamp()
        root = self.resolve_root()
        path = ensure_text_path(self.path_for(t0))
        try:
            root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(root, e.strerror or str(e))

        try:
            path.write_text(f"{t0},", encoding="utf-8")
        except OSError as e:
            raise LogIOError(path, e)
        return LogHandle(t0, path)
