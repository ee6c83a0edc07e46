"""
Engine Core - Deterministic 2048 board transformation.

The engine is the runtime that:
1. Holds the tile grid (Board)
2. Slides and merges lines for a move (reducer)
3. Spawns new tiles from an injectable random source
4. Evaluates win/loss conditions
5. Produces immutable snapshots for presentation
"""

from .board import Board, Direction, slide_line, compact
from .reducer import MoveOutcome, apply_move, legal_directions
from .spawner import Spawner, RandomSource, SequenceRandom, SPAWN_VALUE
from .rules import GameStatus, WINNING_TILE, evaluate
from .snapshot import Snapshot
from .errors import EngineError, InvalidOperation, ReportingFailure

__all__ = [
    "Board",
    "Direction",
    "slide_line",
    "compact",
    "MoveOutcome",
    "apply_move",
    "legal_directions",
    "Spawner",
    "RandomSource",
    "SequenceRandom",
    "SPAWN_VALUE",
    "GameStatus",
    "WINNING_TILE",
    "evaluate",
    "Snapshot",
    "EngineError",
    "InvalidOperation",
    "ReportingFailure",
]
