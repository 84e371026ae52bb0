import bisect
import logging
from collections.abc import Iterable
from enum import Enum

from tileascii.errors import CharsetError
from tileascii.glyphs import GlyphBrightness

logger = logging.getLogger(__name__)

MIN_CHARSET_SIZE = 2


class RoundingPolicy(str, Enum):
    UP = "up"
    DOWN = "down"
    ABS = "abs"


class CharMatcher:
    """Maps a cell brightness in 0-1 to the character whose glyph brightness is closest.

    Glyph brightness values are min-max normalised against the current
    character set, so the lightest character always sits at 1.0 and the
    darkest at 0.0. The normalised map is rebuilt lazily after the set changes.
    """

    def __init__(
        self,
        characters: Iterable[str] = (),
        glyphs: GlyphBrightness | None = None,
        rounding: RoundingPolicy | str = RoundingPolicy.ABS,
    ):
        self.glyphs = glyphs if glyphs is not None else GlyphBrightness()
        self.rounding = rounding
        self._chars: set[str] = set()
        self._keys: list[float] = []
        self._values: list[str] = []
        self._dirty = True
        self.add_chars(characters)

    @property
    def characters(self) -> frozenset[str]:
        return frozenset(self._chars)

    @property
    def rounding(self) -> RoundingPolicy:
        return self._rounding

    @rounding.setter
    def rounding(self, policy: RoundingPolicy | str) -> None:
        self._rounding = RoundingPolicy(policy)

    def add_char(self, char: str) -> None:
        self.glyphs.brightness_of(char)
        self._chars.add(char)
        self._dirty = True

    def remove_char(self, char: str) -> None:
        # Cached glyph brightness stays valid for a later re-add
        self._chars.discard(char)
        self._dirty = True

    def add_chars(self, chars: Iterable[str]) -> None:
        for char in chars:
            self.add_char(char)

    def remove_chars(self, chars: Iterable[str]) -> None:
        for char in chars:
            self.remove_char(char)

    @property
    def brightness_map(self) -> list[tuple[float, str]]:
        """Normalised (brightness, char) pairs in ascending brightness order."""
        if self._dirty:
            self._rebuild()
        return list(zip(self._keys, self._values))

    def _rebuild(self) -> None:
        if len(self._chars) < MIN_CHARSET_SIZE:
            raise CharsetError(
                f"Need at least {MIN_CHARSET_SIZE} characters to match, have {len(self._chars)}"
            )
        raw = {char: self.glyphs.brightness_of(char) for char in self._chars}
        lo = min(raw.values())
        hi = max(raw.values())
        if lo == hi:
            raise CharsetError(f"All {len(raw)} characters have the same glyph brightness ({lo:.4f})")

        normalized: dict[float, str] = {}
        for char, value in raw.items():
            key = (value - lo) / (hi - lo)
            # Equal keys keep the smallest character
            if key not in normalized or char < normalized[key]:
                normalized[key] = char

        self._keys = sorted(normalized)
        self._values = [normalized[k] for k in self._keys]
        self._dirty = False
        logger.debug("Rebuilt brightness map: %d characters, %d distinct levels", len(raw), len(self._keys))

    def match(self, brightness: float) -> str:
        if self._dirty:
            self._rebuild()
        keys = self._keys

        # Ceiling: first key >= brightness; floor: last key <= brightness
        hi = bisect.bisect_left(keys, brightness)
        lo = bisect.bisect_right(keys, brightness) - 1
        if hi == len(keys):
            hi = lo = len(keys) - 1
        elif lo < 0:
            hi = lo = 0

        if self._rounding is RoundingPolicy.UP:
            return self._values[hi]
        if self._rounding is RoundingPolicy.DOWN:
            return self._values[lo]
        if brightness - keys[lo] > keys[hi] - brightness:
            return self._values[hi]
        return self._values[lo]
