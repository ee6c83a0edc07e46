"""
Snapshot - Read-only view of a session for presentation layers.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from .board import Board
from .rules import GameStatus


@dataclass(frozen=True)
class Snapshot:
    """
    Immutable copy of grid, score and status.

    The grid is a tuple of tuples; to_dict() hands out fresh lists,
    so nothing a caller does to a snapshot reaches the live session.
    """
    grid: tuple[tuple[int, ...], ...]
    score: int
    status: GameStatus
    moves: int = 0
    changed: bool = False
    spawned: tuple[int, int] | None = None

    @classmethod
    def capture(
        cls,
        board: Board,
        score: int,
        status: GameStatus,
        moves: int = 0,
        changed: bool = False,
        spawned: tuple[int, int] | None = None,
    ) -> Snapshot:
        return cls(
            grid=board.cells,
            score=score,
            status=status,
            moves=moves,
            changed=changed,
            spawned=spawned,
        )

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def columns(self) -> int:
        return len(self.grid[0])

    @property
    def max_tile(self) -> int:
        return max(v for row in self.grid for v in row)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def to_rows(self) -> list[list[int]]:
        return [list(row) for row in self.grid]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready plain data."""
        return {
            "grid": self.to_rows(),
            "score": self.score,
            "status": self.status.value,
            "moves": self.moves,
            "max_tile": self.max_tile,
            "changed": self.changed,
            "spawned": list(self.spawned) if self.spawned else None,
        }
