"""
Scoreboard Module - Where final scores go.

The game session only knows the ScoreReporter interface.
Implementations:
- NullReporter: discards scores
- InMemoryScoreboard: leaderboard, play analytics and ratings for this process
- HttpScoreReporter: posts scores to a remote arcade backend
"""

from .reporter import ScoreReporter, ScoreReceipt, NullReporter, DEFAULT_PLAYER_NAME
from .memory import (
    InMemoryScoreboard,
    ScoreEntry,
    LeaderboardEntry,
    GameAnalytics,
    RatingEntry,
    RatingSummary,
    ANONYMOUS_PLAYER_NAME,
)
from .remote import HttpScoreReporter

__all__ = [
    "ScoreReporter",
    "ScoreReceipt",
    "NullReporter",
    "DEFAULT_PLAYER_NAME",
    "InMemoryScoreboard",
    "ScoreEntry",
    "LeaderboardEntry",
    "GameAnalytics",
    "RatingEntry",
    "RatingSummary",
    "ANONYMOUS_PLAYER_NAME",
    "HttpScoreReporter",
]
