from typing import Dict, Any, Set
from perfect_maze.core.board import Board
from perfect_maze.core.geometry import Point, EAST, SOUTH, WEST, NORTH


def popcount_walls(val: int) -> int:
    c = 0
    if val & NORTH: c += 1
    if val & EAST: c += 1
    if val & SOUTH: c += 1
    if val & WEST: c += 1
    return c


def count_passages(board: Board) -> int:
    """
    Counts adjacent cell pairs whose shared wall is open on both sides.
    Only East and South links are inspected so each pair is seen once.
    """
    passages = 0
    width, height = board.dims
    walls = board.walls
    for y in range(height):
        for x in range(width):
            idx = y * width + x
            if x < width - 1 and not walls[idx] & EAST and not walls[idx + 1] & WEST:
                passages += 1
            if y < height - 1 and not walls[idx] & SOUTH and not walls[idx + width] & NORTH:
                passages += 1
    return passages


def is_symmetric(board: Board) -> bool:
    """True if every interior wall is either present on both sides or open on both."""
    width, height = board.dims
    walls = board.walls
    for y in range(height):
        for x in range(width):
            idx = y * width + x
            if x < width - 1 and bool(walls[idx] & EAST) != bool(walls[idx + 1] & WEST):
                return False
            if y < height - 1 and bool(walls[idx] & SOUTH) != bool(walls[idx + width] & NORTH):
                return False
    return True


def reachable_cells(board: Board, start: Point = (0, 0)) -> Set[Point]:
    # Iterative flood through open passages
    seen = {start}
    stack = [start]
    while stack:
        curr = stack.pop()
        for neighbor in board.open_neighbors(curr):
            if neighbor not in seen:
                seen.add(neighbor)
                stack.append(neighbor)
    return seen


def is_perfect(board: Board) -> bool:
    """
    A perfect maze is a spanning tree of the grid: symmetric walls,
    every cell reachable, and exactly cells - 1 passages (so no loops).
    """
    total = board.width * board.height
    if not is_symmetric(board):
        return False
    if count_passages(board) != total - 1:
        return False
    return len(reachable_cells(board)) == total


def calculate_stats(board: Board) -> Dict[str, Any]:
    dead_ends = 0
    intersections = 0 # 0, 1 walls
    corridors = 0 # 2 walls
    isolated = 0 # 4 walls, only on a 1x1 or uncarved board

    for val in board.walls:
        walls = popcount_walls(val)
        if walls == 3: dead_ends += 1
        elif walls == 2: corridors += 1
        elif walls <= 1: intersections += 1
        else: isolated += 1

    total = board.width * board.height
    return {
        "dead_ends": dead_ends,
        "corridors": corridors,
        "intersections": intersections,
        "isolated": isolated,
        "passages": count_passages(board),
        "dead_end_percent": (dead_ends / total) * 100 if total > 0 else 0
    }
