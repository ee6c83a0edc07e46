"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of 2048:
- Created when the player starts a game
- Holds the board, score and status
- Reports its final score once, when won or lost
- Replaced wholesale on reset

Sessions are EPHEMERAL: nothing about a board in progress is persisted.
"""

from .game import GameSession, DEFAULT_GAME_ID, get_report_executor
from .manager import SessionManager

__all__ = [
    "GameSession",
    "DEFAULT_GAME_ID",
    "get_report_executor",
    "SessionManager",
]
