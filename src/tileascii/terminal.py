import os
import sys


def get_terminal_size() -> tuple[int, int]:
    """Return (columns, rows) of the terminal, or (80, 24) if not a tty."""
    if not sys.stdout.isatty():
        return (80, 24)
    size = os.get_terminal_size()
    return (size.columns, size.lines)


def fit_resolution(columns: int, image_width: int) -> int:
    """Largest power of two that fits in the terminal and does not exceed the image width."""
    limit = max(1, min(columns, image_width))
    resolution = 1
    while resolution * 2 <= limit:
        resolution *= 2
    return resolution
