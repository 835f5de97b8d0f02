from enum import Enum


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Going straight or turning is allowed, going back isn't.
# The order of each entry matters, since the walk picks from it by index
NON_REVERSING = {
    Direction.UP: (Direction.UP, Direction.LEFT, Direction.RIGHT),
    Direction.DOWN: (Direction.DOWN, Direction.LEFT, Direction.RIGHT),
    Direction.LEFT: (Direction.DOWN, Direction.LEFT, Direction.UP),
    Direction.RIGHT: (Direction.DOWN, Direction.RIGHT, Direction.UP),
}


def move(loc, direction, size, dist):
    row, col = loc

    # Adding size - dist instead of subtracting dist keeps the sum positive
    if direction == Direction.UP:
        return ((row + size - dist) % size, col)
    if direction == Direction.DOWN:
        return ((row + dist) % size, col)
    if direction == Direction.LEFT:
        return (row, (col + size - dist) % size)
    return (row, (col + dist) % size)


def non_reversing(direction):
    return NON_REVERSING[direction]
