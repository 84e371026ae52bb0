import numpy as np
import pytest

from tileascii.image import RasterImage
from tileascii.subimages import brightness, brightness_grid, cell_size, grid_shape, sub_images


def random_image(width, height, seed=0):
    rng = np.random.default_rng(seed)
    return RasterImage(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))


def test_cell_size_and_shape():
    img = RasterImage.blank(16, 8)
    assert cell_size(img, 4) == 4
    assert grid_shape(img, 4) == (2, 4)


def test_cell_size_never_below_one():
    img = RasterImage.blank(2, 2)
    assert cell_size(img, 8) == 1


def test_rejects_non_positive_resolution():
    with pytest.raises(ValueError, match="Resolution must be positive"):
        cell_size(RasterImage.blank(4, 4), 0)


def test_sub_images_layout():
    img = random_image(4, 4)
    grid = sub_images(img, 2)
    assert len(grid) == 2
    assert all(len(row) == 2 for row in grid)
    assert grid[1][0] == RasterImage(img.pixels[2:4, 0:2])
    assert grid[0][1] == RasterImage(img.pixels[0:2, 2:4])


def test_sub_images_drop_remainder():
    img = random_image(5, 7)
    grid = sub_images(img, 2)
    # cell side 5 // 2 = 2, rows 7 // 2 = 3
    assert len(grid) == 3
    assert all(len(row) == 2 for row in grid)
    assert all(cell.width == 2 and cell.height == 2 for row in grid for cell in row)


def test_resolution_wider_than_image():
    img = RasterImage.blank(2, 2, (0, 0, 0))
    grid = sub_images(img, 4)
    assert len(grid) == 2
    assert [cell is None for cell in grid[0]] == [False, False, True, True]
    assert brightness(grid[0][3]) == 0.0


def test_brightness_black_and_white():
    assert brightness(RasterImage.blank(3, 3, (0, 0, 0))) == 0.0
    assert brightness(RasterImage.blank(3, 3, (255, 255, 255))) == pytest.approx(1.0)


def test_brightness_channel_weights():
    assert brightness(RasterImage.blank(2, 2, (255, 0, 0))) == pytest.approx(0.2126)
    assert brightness(RasterImage.blank(2, 2, (0, 255, 0))) == pytest.approx(0.7152)
    assert brightness(RasterImage.blank(2, 2, (0, 0, 255))) == pytest.approx(0.0722)


def test_brightness_of_missing_cell_is_zero():
    assert brightness(None) == 0.0


def test_brightness_in_unit_range():
    img = random_image(32, 32, seed=5)
    for row in sub_images(img, 8):
        for cell in row:
            assert 0.0 <= brightness(cell) <= 1.0


@pytest.mark.parametrize("width, height, resolution", [(16, 16, 4), (16, 8, 8), (13, 9, 3), (4, 4, 8)])
def test_brightness_grid_matches_per_cell(width, height, resolution):
    img = random_image(width, height, seed=width * height)
    expected = [[brightness(cell) for cell in row] for row in sub_images(img, resolution)]
    grid = brightness_grid(img, resolution)
    assert grid.shape == grid_shape(img, resolution)
    np.testing.assert_allclose(grid, expected)


def test_brightness_grid_half_and_half():
    arr = np.zeros((2, 4, 3), dtype=np.uint8)
    arr[:, 2:] = 255
    grid = brightness_grid(RasterImage(arr), 2)
    np.testing.assert_allclose(grid, [[0.0, 1.0]])
