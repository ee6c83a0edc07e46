"""
Spawner - Places new tiles on empty cells.

Randomness is injected through a RandomSource so that
tests and replays can drive exact tile placement.
"""

from __future__ import annotations
import random
from typing import Protocol, Sequence

from .board import Board


SPAWN_VALUE = 2


class RandomSource(Protocol):
    """Anything that can pick an index in [0, n). random.Random qualifies."""

    def randrange(self, n: int) -> int:
        ...


class SequenceRandom:
    """
    Deterministic random source that replays a fixed list of indices.

    Each index is taken modulo n, and the sequence wraps around
    when exhausted.

    Usage:
        rng = SequenceRandom([0, 3])  # first empty cell, then the fourth
    """

    def __init__(self, indices: Sequence[int]):
        if not indices:
            raise ValueError("SequenceRandom needs at least one index")
        self._indices = list(indices)
        self._position = 0

    def randrange(self, n: int) -> int:
        value = self._indices[self._position % len(self._indices)]
        self._position += 1
        return value % n


def default_random(seed: int | None = None) -> RandomSource:
    return random.Random(seed)


class Spawner:
    """Spawns a single tile at a uniformly chosen empty cell."""

    def __init__(self, rng: RandomSource | None = None, tile_value: int = SPAWN_VALUE):
        self.rng = rng if rng is not None else default_random()
        self.tile_value = tile_value

    def spawn(self, board: Board) -> tuple[Board, tuple[int, int] | None]:
        """
        Return (new board, position of the new tile).

        A full board is returned unchanged with position None.
        """
        empty = board.empty_cells()
        if not empty:
            return board, None

        row, column = empty[self.rng.randrange(len(empty))]
        return board.with_cell(row, column, self.tile_value), (row, column)
