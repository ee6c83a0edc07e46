"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between the browser front end
and the engine. Score submission accepts the arcade's camelCase field
names (gameId, playerName, playDuration) as well as snake_case, and so
does rating submission.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has been ended
- SESSION_NOT_ACTIVE: Session is won or lost; reset it to keep playing
- VALIDATION_ERROR: Request body is invalid
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"


class MoveDirection(str, Enum):
    """Directions accepted by the move endpoint."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SESSION_NOT_ACTIVE = "SESSION_NOT_ACTIVE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionBody(BaseModel):
    """Body for POST /sessions."""
    game_id: str = Field("2048", description="Game identifier used for scores")
    rows: int = Field(4, ge=2, le=8)
    columns: int = Field(4, ge=2, le=8)
    seed: Optional[int] = Field(None, description="Seed for reproducible tile placement")


class MoveBody(BaseModel):
    """Body for POST /sessions/{id}/move."""
    direction: MoveDirection


class SubmitScoreBody(BaseModel):
    """Body for POST /scores."""
    game_id: str = Field(alias="gameId", min_length=1)
    player_name: str = Field(alias="playerName", min_length=1)
    score: int = Field(ge=0)
    play_duration: Optional[int] = Field(None, alias="playDuration", ge=0)

    model_config = {"populate_by_name": True}


class SubmitRatingBody(BaseModel):
    """Body for POST /ratings. The 1-5 bound is checked by the service."""
    game_id: str = Field(alias="gameId", min_length=1)
    rating: int
    comment: Optional[str] = None
    player_name: Optional[str] = Field(None, alias="playerName")

    model_config = {"populate_by_name": True}


# =============================================================================
# Response Models
# =============================================================================

class SessionResponse(BaseModel):
    """Board snapshot returned after every session call."""
    session_id: str
    game_id: str
    grid: list[list[int]]
    score: int
    status: SessionStatus
    moves: int = 0
    max_tile: int = 0
    changed: bool = Field(False, description="Whether the last move changed the board")
    spawned: Optional[list[int]] = Field(None, description="[row, column] of the last spawned tile")
    report_error: Optional[str] = None
    api_version: str = "v1"

    model_config = {"from_attributes": True}


class SessionListResponse(BaseModel):
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    success: bool
    session_id: str


class ScoreResponse(BaseModel):
    """A recorded score and its rank for the game."""
    game_id: str
    player_name: str
    score: int
    score_id: Optional[int] = None
    rank: Optional[int] = None

    model_config = {"from_attributes": True}


class ScoreEntryInfo(BaseModel):
    score_id: int
    player_name: str
    score: int
    created_at: float
    play_duration_seconds: Optional[int] = None

    model_config = {"from_attributes": True}


class TopScoresResponse(BaseModel):
    game_id: str
    scores: list[ScoreEntryInfo] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class LeaderboardEntryInfo(BaseModel):
    rank: int
    player_name: str
    score: int
    created_at: float

    model_config = {"from_attributes": True}


class LeaderboardResponse(BaseModel):
    game_id: str
    entries: list[LeaderboardEntryInfo] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class AnalyticsResponse(BaseModel):
    """Play statistics for one game."""
    game_id: str
    play_count: int = 0
    high_score: Optional[int] = None
    avg_score: Optional[float] = None
    last_played_at: Optional[float] = None

    model_config = {"from_attributes": True}


class AnalyticsListResponse(BaseModel):
    games: list[AnalyticsResponse] = Field(default_factory=list)


class RatingInfo(BaseModel):
    """A single rating."""
    rating_id: int
    game_id: str
    rating: int
    player_name: str
    created_at: float
    comment: Optional[str] = None

    model_config = {"from_attributes": True}


class RatingsResponse(BaseModel):
    """Rating count, average (one decimal) and the 10 most recent reviews."""
    game_id: str
    total_ratings: int = 0
    avg_rating: Optional[float] = None
    reviews: list[RatingInfo] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict] = None


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
