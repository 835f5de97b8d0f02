import argparse
import math
import time
from pathlib import Path

import humanize
import numpy as np
from PIL import Image

import verify
from color_base import ConfigurationError, color_bases_to_pixels, color_dist, roughness
from shuffle import check_seed, get_sizes, initialize_grid
from torus import Direction, move, non_reversing


def get_dists(size, ratio):
    # A higher ratio allows comparing colors that lie further apart
    max_power = int(math.log2(size) * ratio)

    return [1 << power for power in range(max_power)]


def check_dists(dists, size, ratio):
    if not dists:
        raise ConfigurationError(
            f"A ratio of {ratio} with a grid size of {size} leaves no distances to compare colors at;"
            " increase the ratio or the scale"
        )


def check_configuration(scale, steps, ratio, seed):
    size, _ = get_sizes(scale)

    if steps < 0:
        raise ConfigurationError(f"The step count can't be negative, but it is {steps}")

    check_dists(get_dists(size, ratio), size, ratio)

    check_seed(seed)


class Walker:
    """
    Walks over the torus, swapping colors whenever that brings
    the colors along the walk closer together.

    The grid is owned by the walker while it walks, and is only ever
    changed by swapping two of its cells, so every color base stays in it exactly once.
    """

    def __init__(self, grid, ratio, rng):
        self.grid = grid
        self.size = grid.shape[0]
        self.dists = get_dists(self.size, ratio)
        check_dists(self.dists, self.size, ratio)
        self.rng = rng

        self.loc = (int(rng.integers(0, self.size)), int(rng.integers(0, self.size)))
        self.direction = Direction.UP

        self.step_count = 0
        self.swap_count = 0

    def _swap(self, loc1, loc2):
        rows, cols = zip(loc1, loc2)

        # A single assignment, so a Ctrl+C can't land between writing the two cells
        self.grid[rows, cols] = self.grid[rows[::-1], cols[::-1]]

        self.swap_count += 1

    def step(self):
        dist = self.dists[self.rng.integers(0, len(self.dists))]

        next_loc = move(self.loc, self.direction, self.size, dist)
        nn_loc = move(next_loc, self.direction, self.size, dist)

        loc_color = self.grid[self.loc].copy()
        next_color = self.grid[next_loc].copy()
        nn_color = self.grid[nn_loc].copy()

        dist1 = color_dist(loc_color, next_color)
        dist2 = color_dist(next_color, nn_color)
        newd = color_dist(loc_color, nn_color)

        if newd < dist2 and dist2 >= dist1:
            self._swap(self.loc, next_loc)
        elif newd < dist1:
            self._swap(next_loc, nn_loc)

        # Always move on, whether a swap happened or not
        self.loc = next_loc

        self.direction = non_reversing(self.direction)[self.rng.integers(0, 3)]

        self.step_count += 1

    def run(self, steps, status_callback=None, seconds_between_status=math.inf):
        last_status_time = time.time()

        for _ in range(steps):
            self.step()

            if (
                status_callback is not None
                and time.time() > last_status_time + seconds_between_status
            ):
                status_callback(self)
                last_status_time = time.time()

        return self.grid


def walk(grid, steps, ratio, rng):
    return Walker(grid, ratio, rng).run(steps)


def make_grid(scale, steps, ratio, seed):
    check_configuration(scale, steps, ratio, seed)

    # Every random draw comes from this one generator, in a fixed order,
    # so the same arguments always give the same grid
    rng = np.random.default_rng(seed)

    grid = initialize_grid(scale, rng)

    return walk(grid, steps, ratio, rng)


def print_status(saved_results, walker, steps, start_time):
    print(
        f"Frame {saved_results}"
        f", {humanize.precisedelta(time.time() - start_time)}"
        f", step {humanize.intword(walker.step_count, '%.3f')}"
        f" / {humanize.intword(steps, '%.3f')}"
        f", {humanize.intword(walker.swap_count, '%.3f')} swaps"
        f", roughness {roughness(walker.grid)}"
    )


def save_result(
    grid,
    color_size,
    output_image_path,
    no_overwriting_output,
    saved_results,
    saved_image_leading_zero_count,
):
    saved_img = Image.fromarray(color_bases_to_pixels(grid, color_size))

    saved_results += 1

    # Save the image with/without overwriting the old image
    if no_overwriting_output:
        saved_img.save(
            f"{output_image_path.with_suffix('')}_{saved_results:0{saved_image_leading_zero_count}d}{output_image_path.suffix}"
        )
    else:
        saved_img.save(output_image_path)

    return saved_results


def get_output_image_path(scale, steps, ratio, seed):
    return Path(f"img-{scale}-{steps}-{ratio}-{seed}.png")


def add_parser_arguments(parser):
    parser.add_argument(
        "-s",
        "--scale",
        type=int,
        default=10,
        help="The output image is scale**3 pixels wide, with scale**2 values per channel",
    )
    parser.add_argument(
        "-t",
        "--steps",
        type=int,
        default=None,
        help="How many steps to walk; defaults to 50000 * scale**6",
    )
    parser.add_argument(
        "-r",
        "--ratio",
        type=float,
        default=0.5,
        help="Colors are compared at distances of up to 2**(log2(scale**3) * ratio - 1) pixels",
    )
    parser.add_argument(
        "-e",
        "--seed",
        type=int,
        default=0,
        help="The seed of the shuffle and the walk",
    )
    parser.add_argument(
        "-o",
        "--output-image-path",
        type=Path,
        default=None,
        help="The path where to save the output image to; defaults to img-SCALE-STEPS-RATIO-SEED.png",
    )
    parser.add_argument(
        "-b",
        "--seconds-between-saves",
        type=int,
        default=10,
        help="How often the current output image gets saved",
    )
    parser.add_argument(
        "-n",
        "--no-overwriting-output",
        action="store_true",
        help="Save all output images, instead of the default behavior of overwriting; this turns off verify() being ran at the end",
    )
    parser.add_argument(
        "-z",
        "--saved-image-leading-zero-count",
        type=int,
        default=4,
        help="The number of leading zeros on saved images; this has no effect if the -n switch isn't passed!",
    )


def main():
    start_time = time.time()

    parser = argparse.ArgumentParser(
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_parser_arguments(parser)
    args = parser.parse_args()

    scale = args.scale
    ratio = args.ratio
    seed = args.seed

    steps = args.steps
    if steps is None:
        steps = 50000 * scale**6

    output_image_path = args.output_image_path
    if output_image_path is None:
        output_image_path = get_output_image_path(scale, steps, ratio, seed)
    print(output_image_path)

    check_configuration(scale, steps, ratio, seed)

    _, color_size = get_sizes(scale)

    rng = np.random.default_rng(seed)

    print("Initializing grid...")
    grid = initialize_grid(scale, rng)

    walker = Walker(grid, ratio, rng)

    saved_results = 0

    def save_and_print_status(walker):
        nonlocal saved_results

        saved_results = save_result(
            walker.grid,
            color_size,
            output_image_path,
            args.no_overwriting_output,
            saved_results,
            args.saved_image_leading_zero_count,
        )

        print_status(saved_results, walker, steps, start_time)

    print("Running walk...")
    try:
        walker.run(steps, save_and_print_status, args.seconds_between_saves)
    except KeyboardInterrupt:
        print("Interrupted, saving the current grid...")

    save_and_print_status(walker)

    if not args.no_overwriting_output:
        verify.verify(output_image_path, scale)


if __name__ == "__main__":
    main()
