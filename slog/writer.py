import os
from slog.errors import LogIOError, NoActiveLogError
from slog.store import LogStore, current_timestamp


def append(message, store=None, now=None):
    """Close the active log's open entry with `message` and open the next one.

    The message is written as-is. Commas are fine (only the first comma on a
    line separates the timestamp), but a newline inside the message splits
    it into a new, unparseable line.
    """
    store = store or LogStore()
    log = store.find_active()
    if log is None:
        raise NoActiveLogError(store.resolve_root())

    timestamp = now if now is not None else current_timestamp()
    try:
        # No O_CREAT: a log deleted since find_active() is an error, not a new file.
        fd = os.open(log.path, os.O_WRONLY | os.O_APPEND)
        try:
            f = os.fdopen(fd, "a", encoding="utf-8")
        except Exception:
            os.close(fd)
            raise
        with f:
            f.write(f"{message}\n{timestamp},")
    except OSError as e:
        raise LogIOError(log.path, e)
    return log
