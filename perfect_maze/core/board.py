from array import array
from typing import Iterator, Tuple

from perfect_maze.core.geometry import (
    DIRECTIONS, NORTH, EAST, SOUTH, WEST, Direction, Point, translate,
)

Dims = Tuple[int, int]


class InvalidDimension(ValueError):
    """Raised when a board is requested with a non-positive width or height."""


def in_bounds(dims: Dims, point: Point) -> bool:
    width, height = dims
    x, y = point
    return 0 <= x < width and 0 <= y < height


class Board:
    # All walls present by default (N|E|S|W) = 15
    ALL_WALLS = NORTH | EAST | SOUTH | WEST

    __slots__ = ('width', 'height', 'walls')

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise InvalidDimension(f"Board dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        # 'B' (unsigned char) -> 1 byte per cell, row-major
        self.walls = array('B', [self.ALL_WALLS]) * (width * height)

    @property
    def dims(self) -> Dims:
        return self.width, self.height

    def __len__(self) -> int:
        return len(self.walls)

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height})"

    def reset(self):
        """Puts every wall back."""
        for i in range(len(self.walls)):
            self.walls[i] = self.ALL_WALLS

    def in_bounds(self, x: int, y: int) -> bool:
        return in_bounds(self.dims, (x, y))

    def index(self, x: int, y: int) -> int:
        if self.in_bounds(x, y):
            return y * self.width + x
        raise IndexError(f"Coordinate ({x}, {y}) out of bounds")

    def has_wall(self, x: int, y: int, direction: Direction) -> bool:
        return (self.walls[self.index(x, y)] & direction) != 0

    def neighbors(self, point: Point) -> Iterator[Tuple[Point, Direction]]:
        """
        Yields (neighbor, direction_to_neighbor) for every in-bounds neighbor.
        Does NOT check walls.
        """
        for direction in DIRECTIONS:
            nx, ny = translate(point, direction)
            if self.in_bounds(nx, ny):
                yield (nx, ny), direction

    def open_neighbors(self, point: Point) -> Iterator[Point]:
        """
        Yields neighbors that are NOT blocked by a wall.
        """
        mask = self.walls[self.index(*point)]
        for neighbor, direction in self.neighbors(point):
            if not mask & direction:
                yield neighbor


def make_board(dims: Dims) -> Board:
    """
    Make an empty board.

    dims: (width, height)
    Returns a board of that size with every cell separated by walls.
    Raises InvalidDimension if either side is not positive.
    """
    width, height = dims
    return Board(width, height)
