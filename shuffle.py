import argparse
from pathlib import Path

import numpy as np
from PIL import Image

from color_base import ConfigurationError, check_color_size, color_bases_to_pixels


def get_sizes(scale):
    """
    Returns the side length of the grid and the number of values per channel.

    Every color fits exactly once, since size**2 == scale**6 == color_size**3.
    """
    if scale < 1:
        raise ConfigurationError(f"The scale has to be positive, but it is {scale}")

    size = scale**3
    color_size = scale**2

    check_color_size(color_size)

    return size, color_size


def check_seed(seed):
    if seed < 0:
        raise ConfigurationError(f"The seed can't be negative, but it is {seed}")


def get_color_bases(scale):
    _, color_size = get_sizes(scale)

    n = np.arange(color_size**3)

    r_base = n % color_size
    g_base = (n // color_size) % color_size
    b_base = n // color_size**2

    return np.stack((r_base, g_base, b_base), axis=1).astype(np.uint16)


def initialize_grid(scale, rng):
    size, _ = get_sizes(scale)

    color_bases = get_color_bases(scale)

    # Shuffles the rows, so every color base stays intact
    rng.shuffle(color_bases)

    # Chunk i of size color bases becomes row i
    return color_bases.reshape((size, size, 3))


def shuffle(scale, seed, output_image_path):
    check_seed(seed)

    rng = np.random.default_rng(seed)

    grid = initialize_grid(scale, rng)

    _, color_size = get_sizes(scale)
    output_img = Image.fromarray(color_bases_to_pixels(grid, color_size))
    output_img.save(output_image_path)


def add_parser_arguments(parser):
    parser.add_argument(
        "scale",
        type=int,
        help="The output image is scale**3 pixels wide, with scale**2 values per channel",
    )
    parser.add_argument(
        "output_image_path",
        type=Path,
        help="The path to the output image",
    )
    parser.add_argument(
        "-e",
        "--seed",
        type=int,
        default=0,
        help="The seed of the shuffle",
    )


def main():
    parser = argparse.ArgumentParser(
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_parser_arguments(parser)
    args = parser.parse_args()

    shuffle(args.scale, args.seed, args.output_image_path)


if __name__ == "__main__":
    main()
