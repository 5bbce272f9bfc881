import curses
import io
import os
import sys


def _setupterm(stream) -> bool:
    try:
        curses.setupterm(fd=stream.fileno())
    except (curses.error, io.UnsupportedOperation, AttributeError, ValueError, OSError):
        return False
    return True


def terminal_width(default: int = 80, stream=None) -> int:
    """Columns reported by terminfo for ``stream``, or ``default``."""
    stream = stream if stream is not None else sys.stdout
    if not _setupterm(stream):
        return default
    cols = curses.tigetnum("cols")
    return cols if cols > 0 else default


def supports_color(stream=None) -> bool:
    stream = stream if stream is not None else sys.stdout
    if os.environ.get("NO_COLOR"):
        return False
    try:
        if not stream.isatty():
            return False
    except (AttributeError, ValueError):
        return False
    if not _setupterm(stream):
        return False
    return curses.tigetnum("colors") >= 8
