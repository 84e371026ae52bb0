import shutil
import subprocess

import numpy as np
import pytest

from tileascii.glyphs import GLYPH_SIZE

_FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu-sans-mono-fonts/DejaVuSansMono.ttf",
]


def _find_monospace_font():
    """Find a monospace font on the system."""
    for path in _FONT_CANDIDATES:
        if shutil.os.path.exists(path):
            return path
    result = shutil.which("fc-match")
    if result:
        out = subprocess.run(["fc-match", "-f", "%{file}", "monospace"], capture_output=True, text=True)
        if out.returncode == 0 and out.stdout.strip():
            return out.stdout.strip()
    return None


FONT_PATH = _find_monospace_font()
needs_font = pytest.mark.skipif(FONT_PATH is None, reason="No monospace font found on system")


class StubRasterizer:
    """Bitmaps with a fixed share of blank pixels per character."""

    def __init__(self, levels: dict[str, float], size: int = GLYPH_SIZE):
        self.levels = levels
        self.size = size
        self.calls: list[str] = []

    def rasterize(self, char: str) -> np.ndarray:
        self.calls.append(char)
        total = self.size * self.size
        flat = np.zeros(total, dtype=bool)
        flat[: round(self.levels[char] * total)] = True
        return flat.reshape(self.size, self.size)
