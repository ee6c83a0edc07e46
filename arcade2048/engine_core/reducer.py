"""
Reducer - Applies a directional move to a board.

The reducer is the single point of board transformation.
Spawning and terminal evaluation happen around it, in the session.

Design principles:
- Pure function: (board, direction) -> MoveOutcome
- Every line is slid independently
- No-op moves are detected by comparing the full board
"""

from __future__ import annotations
from dataclasses import dataclass

from .board import Board, Direction, slide_line


@dataclass(frozen=True)
class MoveOutcome:
    """
    Result of sliding a board in one direction.

    Contains:
    - The board after merging and compaction (before any spawn)
    - Score gained from merges
    - Whether any cell changed
    - Number of merges performed
    """
    board: Board
    gained: int
    changed: bool
    merges: int = 0


def apply_move(board: Board, direction: Direction) -> MoveOutcome:
    """
    Slide every line of the board in the given direction.

    A move that leaves the board untouched reports changed=False
    and gains nothing, even if the lines were visited.
    """
    new_board = board
    gained = 0
    merges = 0

    for index in range(board.line_count(direction)):
        line = board.line(index, direction)
        slid, line_gain = slide_line(line)
        if slid == line:
            continue
        # Each merge removes exactly one tile from the line
        merges += sum(1 for v in line if v) - sum(1 for v in slid if v)
        gained += line_gain
        new_board = new_board.with_line(index, direction, slid)

    changed = new_board.cells != board.cells
    if not changed:
        return MoveOutcome(board=board, gained=0, changed=False)

    return MoveOutcome(board=new_board, gained=gained, changed=True, merges=merges)


def legal_directions(board: Board) -> list[Direction]:
    """Directions that would change the board."""
    return [d for d in Direction if apply_move(board, d).changed]
