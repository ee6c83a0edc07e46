"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session calls
2. Manages sessions
3. Records scores, leaderboards, analytics and ratings
4. Formats responses for the presentation layer

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .models import (
    # Requests
    CreateSessionRequest,
    MoveRequest,
    SubmitScoreRequest,
    SubmitRatingRequest,
    # Responses
    SessionResponse,
    ScoreResponse,
    ScoreEntryInfo,
    LeaderboardEntryInfo,
    LeaderboardResponse,
    TopScoresResponse,
    AnalyticsResponse,
    RatingInfo,
    RatingsResponse,
    ErrorResponse,
)
from ..engine_core.errors import InvalidOperation
from ..scoreboard import InMemoryScoreboard, ScoreReporter, GameAnalytics, RatingEntry
from ..session import SessionManager, GameSession


logger = logging.getLogger(__name__)

SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
SESSION_NOT_ACTIVE = "SESSION_NOT_ACTIVE"
VALIDATION_ERROR = "VALIDATION_ERROR"


@dataclass
class APIService:
    """
    Main API service.

    By default finished sessions report into the service's own
    scoreboard; pass a reporter (e.g. HttpScoreReporter) to send
    them elsewhere.

    Usage:
        service = APIService()

        session = service.create_session(CreateSessionRequest())
        snap = service.move(MoveRequest(session.session_id, "left"))
        board = service.get_leaderboard("2048")
    """
    scoreboard: InMemoryScoreboard = field(default_factory=InMemoryScoreboard)
    reporter: ScoreReporter | None = None
    session_manager: SessionManager | None = None

    def __post_init__(self):
        if self.session_manager is None:
            self.session_manager = SessionManager(reporter=self.reporter or self.scoreboard)

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new game session.

        Raises:
            ValueError: if the board dimensions are unusable
        """
        session = self.session_manager.create_session(
            game_id=request.game_id,
            rows=request.rows,
            columns=request.columns,
            seed=request.seed,
        )
        self.scoreboard.track_play(request.game_id)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def move(self, request: MoveRequest) -> SessionResponse | ErrorResponse:
        """
        Apply a move to a session.

        Moves on a won or lost session come back as SESSION_NOT_ACTIVE;
        the board is left as it was.
        """
        session = self.session_manager.get_session(request.session_id)
        if not session:
            return self._not_found(request.session_id)

        try:
            session.move(request.direction)
        except InvalidOperation as e:
            return ErrorResponse(
                error=str(e),
                error_code=SESSION_NOT_ACTIVE,
                details={"status": session.status.value},
            )
        except ValueError:
            return ErrorResponse(
                error=f"Unknown direction: {request.direction}",
                error_code=VALIDATION_ERROR,
            )

        return self._session_to_response(session)

    def reset(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Start the session over with a fresh board."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.reset()
        return self._session_to_response(session)

    def end_session(self, session_id: str) -> bool:
        return self.session_manager.end_session(session_id)

    def list_sessions(self) -> list[str]:
        return self.session_manager.list_sessions()

    # =========================================================================
    # Scores / Leaderboard
    # =========================================================================

    def submit_score(self, request: SubmitScoreRequest) -> ScoreResponse | ErrorResponse:
        try:
            receipt = self.scoreboard.submit_score(
                game_id=request.game_id,
                player_name=request.player_name,
                score=request.score,
                duration_seconds=request.play_duration,
            )
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=VALIDATION_ERROR)

        return ScoreResponse(
            game_id=receipt.game_id,
            player_name=receipt.player_name,
            score=receipt.score,
            score_id=receipt.score_id,
            rank=receipt.rank,
        )

    def get_top_scores(self, game_id: str, limit: int = 10) -> TopScoresResponse:
        return TopScoresResponse(
            game_id=game_id,
            scores=[
                ScoreEntryInfo(
                    score_id=entry.score_id,
                    player_name=entry.player_name,
                    score=entry.score,
                    created_at=entry.created_at,
                    play_duration_seconds=entry.play_duration_seconds,
                )
                for entry in self.scoreboard.top_scores(game_id, limit)
            ],
        )

    def get_leaderboard(self, game_id: str) -> LeaderboardResponse:
        return LeaderboardResponse(
            game_id=game_id,
            entries=[
                LeaderboardEntryInfo(
                    rank=entry.rank,
                    player_name=entry.player_name,
                    score=entry.score,
                    created_at=entry.created_at,
                )
                for entry in self.scoreboard.leaderboard(game_id)
            ],
        )

    # =========================================================================
    # Analytics
    # =========================================================================

    def get_analytics(self, game_id: str) -> AnalyticsResponse:
        return self._analytics_to_response(self.scoreboard.analytics(game_id))

    def list_analytics(self) -> list[AnalyticsResponse]:
        return [self._analytics_to_response(a) for a in self.scoreboard.all_analytics()]

    def track_play(self, game_id: str) -> AnalyticsResponse:
        return self._analytics_to_response(self.scoreboard.track_play(game_id))

    # =========================================================================
    # Ratings
    # =========================================================================

    def submit_rating(self, request: SubmitRatingRequest) -> RatingInfo | ErrorResponse:
        try:
            entry = self.scoreboard.submit_rating(
                game_id=request.game_id,
                rating=request.rating,
                comment=request.comment,
                player_name=request.player_name,
            )
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=VALIDATION_ERROR)
        return self._rating_to_info(entry)

    def get_ratings(self, game_id: str) -> RatingsResponse:
        summary = self.scoreboard.ratings(game_id)
        return RatingsResponse(
            game_id=summary.game_id,
            total_ratings=summary.total_ratings,
            avg_rating=summary.avg_rating,
            reviews=[self._rating_to_info(r) for r in summary.reviews],
        )

    # =========================================================================
    # Conversion Helpers
    # =========================================================================

    def _session_to_response(self, session: GameSession) -> SessionResponse:
        return SessionResponse.from_snapshot(
            session_id=session.session_id,
            game_id=session.game_id,
            snapshot=session.snapshot(),
            report_error=str(session.last_report_error) if session.last_report_error else None,
        )

    def _analytics_to_response(self, analytics: GameAnalytics) -> AnalyticsResponse:
        return AnalyticsResponse(
            game_id=analytics.game_id,
            play_count=analytics.play_count,
            high_score=analytics.high_score,
            avg_score=analytics.avg_score,
            last_played_at=analytics.last_played_at,
        )

    def _rating_to_info(self, entry: RatingEntry) -> RatingInfo:
        return RatingInfo(
            rating_id=entry.rating_id,
            game_id=entry.game_id,
            rating=entry.rating,
            player_name=entry.player_name,
            created_at=entry.created_at,
            comment=entry.comment,
        )

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=SESSION_NOT_FOUND,
        )
