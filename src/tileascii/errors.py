class AsciiArtError(Exception):
    """Base class for errors raised by tileascii."""


class CharsetError(AsciiArtError, ValueError):
    """The character set cannot be used for matching (too small or degenerate)."""


class ImageLoadError(AsciiArtError, OSError):
    """An image could not be read or decoded."""
