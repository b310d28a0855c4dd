from abc import ABC, abstractmethod
from typing import Iterator
from perfect_maze.core.board import Board
from perfect_maze.core.rng import RandomSource

class Generator(ABC):
    def __init__(self, board: Board, seed: int = None, rng=None):
        self.board = board
        self.seed = seed
        # Injected UniformIntSource wins over the seed
        self.rng = rng if rng is not None else RandomSource(seed)
        self.step_count = 0

    @abstractmethod
    def run(self) -> Iterator[str]:
        """
        Yields status strings or progress updates.
        The actual board modifications happen in-place on self.board.
        """
        pass

    def run_all(self) -> Board:
        """Helper to run the generator to completion."""
        for _ in self.run():
            pass
        return self.board
