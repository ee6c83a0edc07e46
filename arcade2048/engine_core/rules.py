"""
Rules - Terminal state evaluation.

A board is WON as soon as any cell holds exactly the winning tile.
It is LOST only when it is full AND no two neighbours are equal;
either condition alone keeps the game going.
"""

from __future__ import annotations
from enum import Enum

from .board import Board


WINNING_TILE = 2048


class GameStatus(Enum):
    """High-level session state."""
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.ACTIVE


def is_won(board: Board, winning_tile: int = WINNING_TILE) -> bool:
    return board.contains(winning_tile)


def is_lost(board: Board) -> bool:
    return not board.has_empty_cell() and not board.has_adjacent_pair()


def evaluate(board: Board, winning_tile: int = WINNING_TILE) -> GameStatus:
    """Evaluate the board after a move (and its spawn)."""
    if is_won(board, winning_tile):
        return GameStatus.WON
    if is_lost(board):
        return GameStatus.LOST
    return GameStatus.ACTIVE
