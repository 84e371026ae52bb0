import logging
from pathlib import Path
from typing import Protocol

import numpy as np
from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

GLYPH_SIZE = 16


class Rasterizer(Protocol):
    def rasterize(self, char: str) -> np.ndarray:
        """Render one character as a square bool bitmap. True marks pixels left blank."""
        ...


class GlyphRasterizer:
    """Draws single characters into a fixed square canvas with Pillow."""

    def __init__(self, font_path: str | Path | None = None, size: int = GLYPH_SIZE):
        self.size = size
        if font_path is None:
            self.font = ImageFont.load_default(size=size)
        else:
            self.font = ImageFont.truetype(str(font_path), size)

        # Place every glyph on the same baseline, with a capital centred vertically
        bbox = self.font.getbbox("M")
        self.y_offset = (size - (bbox[3] - bbox[1])) // 2 - bbox[1]

    def rasterize(self, char: str) -> np.ndarray:
        if len(char) != 1:
            raise ValueError(f"Expected a single character, got {char!r}")
        img = Image.new("L", (self.size, self.size), 0)
        draw = ImageDraw.Draw(img)
        gb = self.font.getbbox(char)
        x_offset = (self.size - (gb[2] - gb[0])) // 2 - gb[0]
        draw.text((x_offset, self.y_offset), char, fill=255, font=self.font)
        return np.asarray(img) < 128


class GlyphBrightness:
    """Character -> brightness cache.

    Brightness is the fraction of blank pixels in the glyph bitmap, so a
    space is 1.0 and dense glyphs approach 0. Glyph shapes never change, so
    entries are computed once and kept for the lifetime of the cache.
    """

    def __init__(self, rasterizer: Rasterizer | None = None):
        self.rasterizer = rasterizer if rasterizer is not None else GlyphRasterizer()
        self._cache: dict[str, float] = {}

    def brightness_of(self, char: str) -> float:
        cached = self._cache.get(char)
        if cached is not None:
            return cached
        bitmap = np.asarray(self.rasterizer.rasterize(char), dtype=bool)
        value = float(bitmap.sum() / bitmap.size)
        self._cache[char] = value
        logger.debug("Glyph %r brightness %.4f", char, value)
        return value

    def __contains__(self, char: object) -> bool:
        return char in self._cache

    def __len__(self) -> int:
        return len(self._cache)
