"""Replay a stream log as elapsed-time stamps.

Each entry is shown relative to the first entry of the log, optionally
shifted, in the format `H:MM:SS message`:

    0:00:00 stream started
    0:01:01 first boss
    1:12:40 credits

Parsing here is lenient on purpose. A shift that does not parse counts as
no shift, and log lines whose timestamp does not parse are skipped.
"""

import re
from collections import namedtuple
from slog.errors import LogIOError, NoActiveLogError
from slog.store import LogStore

Entry = namedtuple("Entry", ["timestamp", "message"])

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_int(text):
    """Strict integer parse: ASCII digits with an optional sign, nothing else."""
    if not _INTEGER.fullmatch(text):
        return None
    return int(text)


def parse_shift(text):
    """Take "HH:MM:SS" and turn it into seconds.

    "SS" and "MM:SS" are accepted as well. Returns None for anything else,
    including non-integer segments. Negative segments are used as given.
    """
    if text is None:
        return None
    segs = [parse_int(seg) for seg in text.split(":")]
    if None in segs:
        return None

    if len(segs) == 1:
        return segs[0]
    if len(segs) == 2:
        m, s = segs
        return m * 60 + s
    if len(segs) == 3:
        h, m, s = segs
        return h * 3600 + m * 60 + s
    return None


def format_duration(seconds):
    """3661 -> "1:01:01". Negative durations get a leading minus: -5 -> "-0:00:05"."""
    sign = "-" if seconds < 0 else ""
    hours, rest = divmod(abs(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{sign}{hours}:{minutes:02}:{secs:02}"


def read_entries(path):
    """Yield the entries of a log. Lines without an integer timestamp are skipped.

    The open entry at the end of the log comes back with an empty message; a
    line with no comma at all comes back with message None.
    """
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as f:
            text = f.read()
    except OSError as e:
        raise LogIOError(path, e)

    # Only "\n" ends a line; any other control character belongs to the message.
    for line in text.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        time_part, sep, message = line.partition(",")
        timestamp = parse_int(time_part)
        if timestamp is None:
            continue
        yield Entry(timestamp, message if sep else None)


def replay(log, shift=0):
    """Yield one formatted line per completed entry of `log`."""
    entries = list(read_entries(log.path))
    reference = None
    for i, entry in enumerate(entries):
        if reference is None:
            reference = entry.timestamp
        if entry.message is None:
            continue
        if entry.message == "" and i == len(entries) - 1:
            # the open entry waiting for the next append
            continue
        elapsed = entry.timestamp - reference + shift
        yield f"{format_duration(elapsed)} {entry.message}"


def replay_active(shift_text=None, store=None):
    store = store or LogStore()
    log = store.find_active()
    if log is None:
        raise NoActiveLogError(store.resolve_root())
    return replay(log, parse_shift(shift_text) or 0)
