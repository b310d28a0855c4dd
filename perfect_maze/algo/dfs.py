import logging
from array import array
from typing import Iterator, List, Optional, Tuple
from perfect_maze.core.board import Board, in_bounds
from perfect_maze.core.geometry import Direction, Point, clear_wall, opposite, translate
from perfect_maze.core.rng import shuffled_directions
from perfect_maze.algo.base import Generator

logger = logging.getLogger(__name__)


class DFSBoard:
    """
    Run state for one generation: the board being carved plus a visited
    buffer of the same shape. Lives only as long as the run that made it.
    """

    __slots__ = ('board', 'visited')

    def __init__(self, board: Board):
        self.board = board
        self.visited = array('B', [0]) * len(board.walls)

    def reset(self):
        self.board.reset()
        for i in range(len(self.visited)):
            self.visited[i] = 0

    def is_visited(self, point: Point) -> bool:
        x, y = point
        return self.visited[y * self.board.width + x] != 0

    def mark_visited(self, point: Point):
        x, y = point
        self.visited[y * self.board.width + x] = 1

    def carve(self, curr: Point, direction: Direction) -> Point:
        """
        Opens the wall between curr and its neighbor in direction on both
        cells and marks the neighbor visited. The neighbor must be in bounds.
        """
        width = self.board.width
        walls = self.board.walls
        other = translate(curr, direction)
        curr_i = curr[1] * width + curr[0]
        other_i = other[1] * width + other[0]

        walls[curr_i] = clear_wall(walls[curr_i], direction)
        walls[other_i] = clear_wall(walls[other_i], opposite(direction))
        self.visited[other_i] = 1
        return other


class RecursiveBacktracker(Generator):
    # Yield every N steps to keep UI responsive without spamming
    PROGRESS_EVERY = 100

    def __init__(self, board: Board, seed: int = None, rng=None, start: Point = (0, 0)):
        super().__init__(board, seed=seed, rng=rng)
        self.start = start
        self.current: Optional[Point] = None
        self.carved = 0

    def run(self) -> Iterator[str]:
        if not in_bounds(self.board.dims, self.start):
            raise IndexError(f"Start {self.start} out of bounds for {self.board.width}x{self.board.height} board")

        dims = self.board.dims
        state = DFSBoard(self.board)
        state.reset()
        state.mark_visited(self.start)
        self.current = self.start
        self.carved = 0
        self.step_count = 0
        logger.debug("Carving %dx%d board from %s", self.board.width, self.board.height, self.start)

        # Stack of (cell, directions not tried yet). The permutation is drawn
        # when a cell is entered, same as a recursive call would.
        stack: List[Tuple[Point, Iterator[Direction]]] = [
            (self.start, iter(shuffled_directions(self.rng)))
        ]

        while stack:
            curr, remaining = stack[-1]
            self.current = curr

            for direction in remaining:
                nx, ny = translate(curr, direction)
                # Bounds first: an out-of-range point is not a valid index
                if not in_bounds(dims, (nx, ny)):
                    continue
                if state.is_visited((nx, ny)):
                    continue

                neighbor = state.carve(curr, direction)
                stack.append((neighbor, iter(shuffled_directions(self.rng))))
                self.carved += 1
                self.step_count += 1

                if self.step_count % self.PROGRESS_EVERY == 0:
                    yield f"Carving... Stack: {len(stack)}"
                break
            else:
                # Backtrack
                stack.pop()
                self.step_count += 1
                if self.step_count % self.PROGRESS_EVERY == 0:
                    yield f"Backtracking... Stack: {len(stack)}"

        self.current = None
        logger.debug("Carved %d passages", self.carved)
        yield "Done"


def generate_maze(board: Board, rng, start: Point = (0, 0)) -> Board:
    """
    Carves a perfect maze into board with a randomized depth-first search.

    board: any board; it is reset to all walls first.
    rng: UniformIntSource deciding the direction order at every cell.
    start: cell the traversal begins at.

    Returns the same board, mutated in place. Raises IndexError if start is
    outside the board.
    """
    return RecursiveBacktracker(board, rng=rng, start=start).run_all()
