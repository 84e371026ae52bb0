import hashlib
from pathlib import Path

import numpy as np
from PIL import Image

from tileascii.errors import ImageLoadError

WHITE = (255, 255, 255)


class RasterImage:
    """Immutable RGB pixel grid.

    Pixels live in a read-only uint8 array of shape (height, width, 3).
    Two images compare equal when their dimensions and every pixel match,
    regardless of identity.
    """

    def __init__(self, pixels: np.ndarray):
        arr = np.array(pixels, dtype=np.uint8)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ValueError(f"Expected an array of shape (height, width, 3), got {arr.shape}")
        # A read-only view of a read-only owner cannot be made writeable again
        arr.flags.writeable = False
        self._pixels = arr.view()
        self._pixels.flags.writeable = False
        self._digest: str | None = None

    @classmethod
    def from_pil(cls, image: Image.Image) -> "RasterImage":
        return cls(np.asarray(image.convert("RGB")))

    @classmethod
    def open(cls, path: str | Path) -> "RasterImage":
        try:
            with Image.open(path) as img:
                return cls.from_pil(img)
        except (OSError, Image.DecompressionBombError) as exc:
            raise ImageLoadError(f"Could not load image {path}: {exc}") from exc

    @classmethod
    def blank(cls, width: int, height: int, colour: tuple[int, int, int] = WHITE) -> "RasterImage":
        return cls(np.full((height, width, 3), colour, dtype=np.uint8))

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    def pixel(self, row: int, col: int) -> tuple[int, int, int]:
        r, g, b = self._pixels[row, col]
        return int(r), int(g), int(b)

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self._pixels)

    def digest(self) -> str:
        """Content hash over shape and pixel bytes. Hashing is O(pixels), done once per instance."""
        if self._digest is None:
            h = hashlib.sha1()
            h.update(np.asarray(self._pixels.shape, dtype=np.int64).tobytes())
            h.update(self._pixels.tobytes())
            self._digest = h.hexdigest()
        return self._digest

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RasterImage):
            return NotImplemented
        if other is self:
            return True
        return np.array_equal(self._pixels, other._pixels)

    def __hash__(self) -> int:
        return hash(self.digest())

    def __repr__(self) -> str:
        return f"RasterImage(width={self.width}, height={self.height})"
