import os
from datetime import datetime

from .errors import StatError


def read_mtime_ns(path: str) -> int:
    """Return the last-modification time of ``path`` in nanoseconds.

    Raises StatError when the metadata cannot be read.
    """
    try:
        return os.stat(path).st_mtime_ns
    except OSError as e:
        raise StatError(f"Unable to stat {path}: {e}") from e


def format_mtime(mtime_ns: int) -> str:
    return datetime.fromtimestamp(mtime_ns / 1e9).astimezone().isoformat()


def format_duration(ns: int) -> str:
    """Render a nanosecond duration the way a human reads it: 850ns, 1.5ms, 2.25s, 1h3m0.5s."""
    sign = "-" if ns < 0 else ""
    ns = abs(ns)
    if ns < 1_000:
        return f"{sign}{ns}ns"
    if ns < 1_000_000:
        return f"{sign}{ns / 1_000:g}µs"
    if ns < 1_000_000_000:
        return f"{sign}{ns / 1_000_000:g}ms"

    minutes, seconds = divmod(ns / 1e9, 60)
    hours, minutes = divmod(int(minutes), 60)
    seconds = round(seconds, 6)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds:g}s"
    if minutes:
        return f"{sign}{minutes}m{seconds:g}s"
    return f"{sign}{seconds:g}s"
