"""
API Models - Request and response shapes for the service layer.

These models define the contract between the presentation layer
and the engine. All models are plain dataclasses of JSON-ready values
(enum values are carried as their strings).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from ..engine_core.snapshot import Snapshot
from ..session.game import DEFAULT_GAME_ID


# =============================================================================
# Request Models
# =============================================================================

@dataclass
class CreateSessionRequest:
    """Request to start a new game session."""
    game_id: str = DEFAULT_GAME_ID
    rows: int = 4
    columns: int = 4
    seed: int | None = None


@dataclass
class MoveRequest:
    """Request to slide a session's board."""
    session_id: str
    direction: str  # "left", "right", "up", "down"


@dataclass
class SubmitScoreRequest:
    """Request to record a score directly (outside of a session)."""
    game_id: str
    player_name: str
    score: int
    play_duration: int | None = None


@dataclass
class SubmitRatingRequest:
    """Request to rate a game."""
    game_id: str
    rating: int  # 1 to 5
    comment: str | None = None
    player_name: str | None = None


# =============================================================================
# Response Models
# =============================================================================

@dataclass
class SessionResponse:
    """Snapshot of one session, for rendering."""
    session_id: str
    game_id: str
    grid: list[list[int]]
    score: int
    status: str  # "active", "won", "lost"
    moves: int = 0
    max_tile: int = 0
    changed: bool = False
    spawned: list[int] | None = None
    report_error: str | None = None

    @classmethod
    def from_snapshot(
        cls,
        session_id: str,
        game_id: str,
        snapshot: Snapshot,
        report_error: str | None = None,
    ) -> SessionResponse:
        data = snapshot.to_dict()
        return cls(
            session_id=session_id,
            game_id=game_id,
            grid=data["grid"],
            score=data["score"],
            status=data["status"],
            moves=data["moves"],
            max_tile=data["max_tile"],
            changed=data["changed"],
            spawned=data["spawned"],
            report_error=report_error,
        )


@dataclass
class ScoreResponse:
    """A recorded score with its rank."""
    game_id: str
    player_name: str
    score: int
    score_id: int | None = None
    rank: int | None = None


@dataclass
class ScoreEntryInfo:
    score_id: int
    player_name: str
    score: int
    created_at: float
    play_duration_seconds: int | None = None


@dataclass
class LeaderboardEntryInfo:
    rank: int
    player_name: str
    score: int
    created_at: float


@dataclass
class LeaderboardResponse:
    game_id: str
    entries: list[LeaderboardEntryInfo] = field(default_factory=list)


@dataclass
class TopScoresResponse:
    game_id: str
    scores: list[ScoreEntryInfo] = field(default_factory=list)


@dataclass
class AnalyticsResponse:
    """Play statistics for one game."""
    game_id: str
    play_count: int = 0
    high_score: int | None = None
    avg_score: float | None = None
    last_played_at: float | None = None


@dataclass
class RatingInfo:
    """A single rating, with its optional comment."""
    rating_id: int
    game_id: str
    rating: int
    player_name: str
    created_at: float
    comment: str | None = None


@dataclass
class RatingsResponse:
    """Rating summary and the most recent reviews for one game."""
    game_id: str
    total_ratings: int = 0
    avg_rating: float | None = None
    reviews: list[RatingInfo] = field(default_factory=list)


@dataclass
class ErrorResponse:
    """Error response."""
    error: str
    error_code: str | None = None
    details: dict[str, Any] | None = None
