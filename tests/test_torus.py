import itertools

import pytest

from torus import Direction, move, non_reversing

OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


def test_move_wraps_around():
    assert move((0, 0), Direction.UP, 4, 1) == (3, 0)
    assert move((3, 0), Direction.DOWN, 4, 1) == (0, 0)
    assert move((0, 0), Direction.LEFT, 4, 1) == (0, 3)
    assert move((0, 3), Direction.RIGHT, 4, 1) == (0, 0)


def test_move_within_grid():
    assert move((5, 5), Direction.UP, 8, 2) == (3, 5)
    assert move((5, 5), Direction.DOWN, 8, 2) == (7, 5)
    assert move((5, 5), Direction.LEFT, 8, 4) == (5, 1)
    assert move((5, 5), Direction.RIGHT, 8, 4) == (5, 1)


@pytest.mark.parametrize("direction", list(Direction))
def test_move_by_size_is_identity(direction):
    for loc in itertools.product(range(4), repeat=2):
        assert move(loc, direction, 4, 4) == loc


@pytest.mark.parametrize("direction", list(Direction))
def test_move_there_and_back(direction):
    for loc in itertools.product(range(8), repeat=2):
        there = move(loc, direction, 8, 2)
        assert move(there, OPPOSITES[direction], 8, 2) == loc


@pytest.mark.parametrize("direction", list(Direction))
def test_non_reversing(direction):
    directions = non_reversing(direction)

    assert len(directions) == 3
    assert len(set(directions)) == 3
    assert direction in directions
    assert OPPOSITES[direction] not in directions


def test_non_reversing_order():
    # The walk picks from these by index, so their order is part of the output
    assert non_reversing(Direction.UP) == (Direction.UP, Direction.LEFT, Direction.RIGHT)
    assert non_reversing(Direction.DOWN) == (
        Direction.DOWN,
        Direction.LEFT,
        Direction.RIGHT,
    )
    assert non_reversing(Direction.LEFT) == (Direction.DOWN, Direction.LEFT, Direction.UP)
    assert non_reversing(Direction.RIGHT) == (
        Direction.DOWN,
        Direction.RIGHT,
        Direction.UP,
    )
