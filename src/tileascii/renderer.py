import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from tileascii.errors import CharsetError
from tileascii.image import RasterImage
from tileascii.matcher import MIN_CHARSET_SIZE, CharMatcher
from tileascii.subimages import brightness_grid

logger = logging.getLogger(__name__)

Partitioner = Callable[[RasterImage, int], np.ndarray]


@dataclass(frozen=True)
class Snapshot:
    digest: str
    shape: tuple[int, ...]
    resolution: int
    grid: np.ndarray


class RenderMemo:
    """Holds the brightness grid of the most recent render.

    A hit requires equal image content (compared by content hash, which
    costs one pass over the pixels the first time an image is seen) and an
    equal resolution. Share one memo between renderers to reuse grids
    across them.
    """

    def __init__(self):
        self.snapshot: Snapshot | None = None

    def lookup(self, image: RasterImage, resolution: int) -> np.ndarray | None:
        snap = self.snapshot
        if snap is None or snap.resolution != resolution or snap.shape != image.pixels.shape:
            return None
        if snap.digest != image.digest():
            return None
        return snap.grid

    def store(self, image: RasterImage, resolution: int, grid: np.ndarray) -> None:
        grid = np.array(grid, dtype=np.float64)
        grid.flags.writeable = False
        self.snapshot = Snapshot(image.digest(), image.pixels.shape, resolution, grid)

    def clear(self) -> None:
        self.snapshot = None


class Renderer:
    """Turns an image into a grid of characters, one per square cell."""

    def __init__(self, memo: RenderMemo | None = None, partitioner: Partitioner = brightness_grid):
        self.memo = memo if memo is not None else RenderMemo()
        self.partitioner = partitioner

    def brightness(self, image: RasterImage, resolution: int) -> np.ndarray:
        grid = self.memo.lookup(image, resolution)
        if grid is not None:
            logger.debug("Render memo hit at resolution %d", resolution)
            return grid
        logger.debug("Render memo miss at resolution %d, partitioning %r", resolution, image)
        grid = self.partitioner(image, resolution)
        self.memo.store(image, resolution, grid)
        return self.memo.snapshot.grid

    def render(self, image: RasterImage, resolution: int, matcher: CharMatcher) -> list[list[str]]:
        if len(matcher.characters) < MIN_CHARSET_SIZE:
            raise CharsetError(
                f"Need at least {MIN_CHARSET_SIZE} characters to render, have {len(matcher.characters)}"
            )
        grid = self.brightness(image, resolution)
        # Keep the image aspect ratio; a resolution wider than the image keeps every partitioned row
        rows = image.height * resolution // image.width
        return [[matcher.match(float(value)) for value in row] for row in grid[:rows]]

    def render_text(self, image: RasterImage, resolution: int, matcher: CharMatcher) -> str:
        return "\n".join("".join(row) for row in self.render(image, resolution, matcher))
