import argparse
from pathlib import Path

import numpy as np
from PIL import Image

from color_base import color_bases_to_pixels
from shuffle import get_color_bases, get_sizes


def _get_colors_and_counts(arr):
    # Arrange all pixels into a tall column of 3 values and find unique rows (colors)
    colors, counts = np.unique(arr.reshape(-1, 3), axis=0, return_counts=1)

    return colors, counts


def verify_grid(grid, scale):
    expected_colors, expected_counts = _get_colors_and_counts(get_color_bases(scale))
    colors, counts = _get_colors_and_counts(grid)

    assert np.array_equal(
        expected_colors, colors
    ), "❌ The grid doesn't contain every color base of the cube!"

    assert np.array_equal(
        expected_counts, counts
    ), "❌ The grid doesn't contain every color base exactly once!"


def verify(output_image_path, scale):
    print("Verifying...")

    _, color_size = get_sizes(scale)

    # Quantizing the whole cube, so colors that happen to collide are counted right
    expected_pixels = color_bases_to_pixels(get_color_bases(scale), color_size)
    expected_colors, expected_counts = _get_colors_and_counts(expected_pixels)

    output_img = Image.open(output_image_path).convert("RGB")
    output_colors, output_counts = _get_colors_and_counts(np.array(output_img))

    colors_equal = np.array_equal(expected_colors, output_colors)
    counts_equal = np.array_equal(expected_counts, output_counts)

    assert colors_equal, "❌ The set of colors of the output isn't the color cube!"

    assert counts_equal, "❌ The output doesn't contain every color exactly once!"

    print("🎉 The output contains every color of the cube exactly once!")


def add_parser_arguments(parser):
    parser.add_argument(
        "output_image_path",
        type=Path,
        help="Path to the output image",
    )
    parser.add_argument(
        "scale",
        type=int,
        help="The scale the output image was generated with",
    )


def main():
    parser = argparse.ArgumentParser(
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_parser_arguments(parser)
    args = parser.parse_args()

    verify(args.output_image_path, args.scale)


if __name__ == "__main__":
    main()
