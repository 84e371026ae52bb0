import logging

import numpy as np

from tileascii.image import WHITE, RasterImage

logger = logging.getLogger(__name__)


def next_power_of_two(length: int) -> int:
    """Smallest power of two >= length, never less than 2."""
    padded = 2
    while padded < length:
        padded *= 2
    return padded


def pad(image: RasterImage) -> RasterImage:
    """Return a copy of image centred on a white canvas with power-of-two sides."""
    new_width = next_power_of_two(image.width)
    new_height = next_power_of_two(image.height)
    top = (new_height - image.height) // 2
    left = (new_width - image.width) // 2

    canvas = np.empty((new_height, new_width, 3), dtype=np.uint8)
    canvas[:] = WHITE
    canvas[top : top + image.height, left : left + image.width] = image.pixels
    logger.debug("Padded %dx%d to %dx%d", image.width, image.height, new_width, new_height)
    return RasterImage(canvas)
