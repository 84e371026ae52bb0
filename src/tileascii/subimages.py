import numpy as np

from tileascii.image import RasterImage

MAX_RGB = 255
# Rec. 709 luminance weights for red, green, blue
LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722])


def cell_size(image: RasterImage, resolution: int) -> int:
    """Side length in pixels of one square cell; at least 1."""
    if resolution < 1:
        raise ValueError(f"Resolution must be positive, got {resolution}")
    return max(1, image.width // resolution)


def grid_shape(image: RasterImage, resolution: int) -> tuple[int, int]:
    """(rows, cols) of the cell grid for a given resolution."""
    return image.height // cell_size(image, resolution), resolution


def sub_images(image: RasterImage, resolution: int) -> list[list[RasterImage | None]]:
    """Split image into square cells, row-major from the top-left.

    Remainder pixels on the right and bottom are dropped. When the
    resolution is wider than the image, columns with no pixels left are None;
    their brightness is 0, so they render as the densest glyph.
    """
    side = cell_size(image, resolution)
    rows, cols = grid_shape(image, resolution)
    pixels = image.pixels
    grid = []
    for r in range(rows):
        row = []
        for c in range(cols):
            y, x = r * side, c * side
            if x + side > image.width:
                row.append(None)
            else:
                row.append(RasterImage(pixels[y : y + side, x : x + side]))
        grid.append(row)
    return grid


def brightness(cell: RasterImage | None) -> float:
    """Luminance-weighted mean of a cell, normalised to 0-1. A missing cell is 0."""
    if cell is None:
        return 0.0
    gray = cell.pixels.astype(np.float64) @ LUMINANCE_WEIGHTS
    return float(gray.sum() / (cell.width * cell.height * MAX_RGB))


def brightness_grid(image: RasterImage, resolution: int) -> np.ndarray:
    """Brightness of every cell at once. Returns array of shape (rows, resolution)."""
    side = cell_size(image, resolution)
    rows, cols = grid_shape(image, resolution)
    full_cols = min(cols, image.width // side)

    arr = image.pixels.astype(np.float64)
    gray = arr @ LUMINANCE_WEIGHTS

    # Trim to exact grid and reshape into (rows, side, full_cols, side)
    trimmed = gray[: rows * side, : full_cols * side]
    cells = trimmed.reshape(rows, side, full_cols, side).transpose(0, 2, 1, 3)

    result = np.zeros((rows, cols))
    result[:, :full_cols] = cells.sum(axis=(2, 3)) / (side * side * MAX_RGB)
    return result
