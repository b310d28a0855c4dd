from enum import IntEnum
from typing import Tuple

Point = Tuple[int, int]


class Direction(IntEnum):
    # Value doubles as the wall bit in a cell mask
    NORTH = 0b0001
    EAST  = 0b0010
    SOUTH = 0b0100
    WEST  = 0b1000


NORTH, EAST, SOUTH, WEST = Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST

# Fixed enumeration order, shuffled per cell by the carver
DIRECTIONS = (NORTH, EAST, SOUTH, WEST)

DX = {NORTH: 0, SOUTH: 0, EAST: 1, WEST: -1}
DY = {NORTH: -1, SOUTH: 1, EAST: 0, WEST: 0}
OPPOSITE = {NORTH: SOUTH, SOUTH: NORTH, EAST: WEST, WEST: EAST}


def delta(direction: Direction) -> Tuple[int, int]:
    return DX[direction], DY[direction]


def opposite(direction: Direction) -> Direction:
    return OPPOSITE[direction]


def translate(point: Point, direction: Direction) -> Point:
    """
    Moves one step from point in direction.
    The result can fall outside the board; callers bounds-check it.
    """
    x, y = point
    dx, dy = delta(direction)
    return x + dx, y + dy


def clear_wall(mask: int, direction: Direction) -> int:
    return mask & ~direction
