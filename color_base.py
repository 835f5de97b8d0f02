import math

import numpy as np


class ConfigurationError(Exception):
    pass


def check_color_size(color_size):
    if color_size < 2:
        raise ConfigurationError(
            f"A color size of {color_size} can't be scaled to 0-255; it has to be at least 2"
        )


def color_base_to_color(color_base, color_size):
    # Shares the grid-wide arithmetic, so a single color and a saved image always agree
    pixel = color_bases_to_pixels(np.asarray(color_base), color_size)

    return tuple(int(c) for c in pixel)


def color_bases_to_pixels(grid, color_size):
    check_color_size(color_size)

    # Integer math in int64 so that c * 255 can't overflow the uint16 grid
    pixels = grid.astype(np.int64) * 255 // (color_size - 1)

    return pixels.astype(np.uint8)


def color_dist(c1, c2):
    """
    Sum of the integer square roots of the per-channel differences.

    Large differences are compressed while small ones are kept mostly intact,
    so the walk smooths small gradients more aggressively than big jumps.
    """
    return sum(math.isqrt(abs(int(a) - int(b))) for a, b in zip(c1, c2))


def _channel_dists(a, b):
    diff = np.abs(a.astype(np.int64) - b.astype(np.int64))

    # np.sqrt is exact for the perfect squares, so floor() matches math.isqrt
    # for every difference a color base can have
    return np.floor(np.sqrt(diff)).astype(np.int64).sum(axis=2)


def roughness(grid):
    """
    The total color_dist() between every cell and its right and down neighbor,
    wrapping around the edges of the torus.
    """
    right = np.roll(grid, -1, axis=1)
    down = np.roll(grid, -1, axis=0)

    return int(_channel_dists(grid, right).sum() + _channel_dists(grid, down).sum())
