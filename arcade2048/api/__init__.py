"""
API Module - Browser front end interface.

Exposes game sessions and the scoreboard via REST.
The front end:
1. Creates a game session
2. Sends one move per key press
3. Renders the snapshot returned by every call
4. Resets the session to play again
5. Reads leaderboards, analytics and ratings

Finished sessions report their score automatically.
"""

from .models import (
    # Requests
    CreateSessionRequest,
    MoveRequest,
    SubmitScoreRequest,
    SubmitRatingRequest,
    # Responses
    SessionResponse,
    ScoreResponse,
    LeaderboardResponse,
    TopScoresResponse,
    AnalyticsResponse,
    RatingsResponse,
    ErrorResponse,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "MoveRequest",
    "SubmitScoreRequest",
    "SubmitRatingRequest",
    # Responses
    "SessionResponse",
    "ScoreResponse",
    "LeaderboardResponse",
    "TopScoresResponse",
    "AnalyticsResponse",
    "RatingsResponse",
    "ErrorResponse",
    # Service
    "APIService",
    "create_app",
]
