import random
from typing import List, Sequence, TypeVar

from perfect_maze.core.geometry import DIRECTIONS, Direction

T = TypeVar("T")


class RandomSource:
    """
    Default UniformIntSource, backed by a seeded random.Random.

    Anything with a uniform_int(bound) method returning an int in [0, bound)
    can stand in for it (the carver only ever calls that one method).
    """

    def __init__(self, seed: int = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def uniform_int(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        return self._rng.randrange(bound)


def shuffle(items: Sequence[T], rng) -> List[T]:
    """
    Returns the elements of items in a uniformly random order.
    Does not modify its argument.

    Draws one index over the not-yet-placed elements per step and moves
    that element to the result, so a list of n items costs exactly n draws
    with bounds n, n-1, ..., 1.
    """
    unshuffled = list(items)
    result: List[T] = []
    while unshuffled:
        result.append(unshuffled.pop(rng.uniform_int(len(unshuffled))))
    return result


def shuffled_directions(rng) -> List[Direction]:
    return shuffle(DIRECTIONS, rng)
