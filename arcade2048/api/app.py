"""
FastAPI Application - REST API for the arcade front end.

Endpoints:
    POST   /api/v1/sessions                   Start a game session
    GET    /api/v1/sessions                   List session IDs
    GET    /api/v1/sessions/{id}              Get session snapshot
    DELETE /api/v1/sessions/{id}              End session
    POST   /api/v1/sessions/{id}/move         Slide the board
    POST   /api/v1/sessions/{id}/reset        Start over with a fresh board
    POST   /api/v1/scores                     Submit a score
    GET    /api/v1/scores/{game_id}           Top scores for a game
    GET    /api/v1/leaderboard/{game_id}      Top 10, ranked
    GET    /api/v1/analytics                  Analytics for all games
    GET    /api/v1/analytics/{game_id}        Analytics for one game
    POST   /api/v1/analytics/{game_id}/play   Count a play
    POST   /api/v1/ratings                    Rate a game (1-5)
    GET    /api/v1/ratings/{game_id}          Rating summary and recent reviews

Every session call returns the post-call snapshot: grid, score, status.
All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import logging
import os

from fastapi import FastAPI, Body, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from .service import APIService, SESSION_NOT_FOUND, SESSION_NOT_ACTIVE
from . import models
from .schemas import (
    # Request models
    CreateSessionBody,
    MoveBody,
    SubmitScoreBody,
    SubmitRatingBody,
    # Response models
    SessionResponse,
    SessionListResponse,
    EndSessionResponse,
    ScoreResponse,
    TopScoresResponse,
    LeaderboardResponse,
    AnalyticsResponse,
    AnalyticsListResponse,
    RatingInfo,
    RatingsResponse,
    ErrorResponse,
    HealthResponse,
    # Enums
    ErrorCode,
)


logger = logging.getLogger(__name__)

# Environment configuration
ARCADE2048_ENV = os.getenv("ARCADE2048_ENV", "development")
ARCADE2048_REPORT_URL = os.getenv("ARCADE2048_REPORT_URL", None)
ARCADE2048_REPORT_TOKEN = os.getenv("ARCADE2048_REPORT_TOKEN", None)
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

_ERROR_STATUS = {
    SESSION_NOT_FOUND: 404,
    SESSION_NOT_ACTIVE: 409,
}


def _default_service() -> APIService:
    """Service wired from the environment."""
    if ARCADE2048_REPORT_URL:
        from ..scoreboard import HttpScoreReporter
        logger.info("Reporting final scores to %s", ARCADE2048_REPORT_URL)
        return APIService(reporter=HttpScoreReporter(
            ARCADE2048_REPORT_URL,
            token=ARCADE2048_REPORT_TOKEN,
        ))
    return APIService()


def create_app(service: Optional[APIService] = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    app = FastAPI(
        title="Arcade 2048 API",
        description="""
2048 game sessions plus the arcade's scores, leaderboards and analytics.

## Session Flow

1. `POST /sessions` returns a board with two starting tiles
2. `POST /sessions/{id}/move` with `{"direction": "left"}` after each key press
3. When `status` becomes `won` or `lost` the score is recorded automatically
4. `POST /sessions/{id}/reset` to play again

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `SESSION_NOT_ACTIVE` | Session is won or lost; reset it first |
| `VALIDATION_ERROR` | Invalid request values |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or _default_service()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def from_service_error(error: models.ErrorResponse) -> JSONResponse:
        return make_error_response(
            ErrorCode(error.error_code),
            error.error,
            status_code=_ERROR_STATUS.get(error.error_code, 400),
            details=error.details,
        )

    def session_or_error(
        response: Union[models.SessionResponse, models.ErrorResponse],
    ) -> Union[SessionResponse, JSONResponse]:
        if isinstance(response, models.ErrorResponse):
            return from_service_error(response)
        return SessionResponse.model_validate(response, from_attributes=True)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Start a new game session",
    )
    async def create_session(
        body: Annotated[Optional[CreateSessionBody], Body()] = None,
    ) -> Union[SessionResponse, JSONResponse]:
        """Create a session with an empty board and two starting tiles."""
        body = body or CreateSessionBody()
        request = models.CreateSessionRequest(
            game_id=body.game_id,
            rows=body.rows,
            columns=body.columns,
            seed=body.seed,
        )
        try:
            response = api_service.create_session(request)
        except ValueError as e:
            return make_error_response(ErrorCode.VALIDATION_ERROR, str(e))
        return session_or_error(response)

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List sessions",
    )
    async def list_sessions() -> SessionListResponse:
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session snapshot",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        return session_or_error(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(session_id: str) -> EndSessionResponse:
        success = api_service.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    @app.post(
        "/api/v1/sessions/{session_id}/move",
        response_model=SessionResponse,
        responses={
            404: {"model": ErrorResponse, "description": "Session not found"},
            409: {"model": ErrorResponse, "description": "Session already won or lost"},
        },
        tags=["Game"],
        summary="Slide the board",
    )
    async def move(session_id: str, body: MoveBody) -> Union[SessionResponse, JSONResponse]:
        """
        Slide the board in a direction.

        A move that changes nothing still succeeds, with `changed=false`.
        """
        request = models.MoveRequest(session_id=session_id, direction=body.direction.value)
        return session_or_error(api_service.move(request))

    @app.post(
        "/api/v1/sessions/{session_id}/reset",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Start the session over",
    )
    async def reset(session_id: str) -> Union[SessionResponse, JSONResponse]:
        return session_or_error(api_service.reset(session_id))

    # =========================================================================
    # Scores / Leaderboard Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/scores",
        response_model=ScoreResponse,
        status_code=201,
        responses={400: {"model": ErrorResponse}},
        tags=["Scores"],
        summary="Submit a score",
    )
    async def submit_score(body: SubmitScoreBody) -> Union[ScoreResponse, JSONResponse]:
        request = models.SubmitScoreRequest(
            game_id=body.game_id,
            player_name=body.player_name,
            score=body.score,
            play_duration=body.play_duration,
        )
        response = api_service.submit_score(request)
        if isinstance(response, models.ErrorResponse):
            return from_service_error(response)
        return ScoreResponse.model_validate(response, from_attributes=True)

    @app.get(
        "/api/v1/scores/{game_id}",
        response_model=TopScoresResponse,
        tags=["Scores"],
        summary="Top scores for a game",
    )
    async def top_scores(
        game_id: str,
        limit: Annotated[int, Query(ge=1, le=100)] = 10,
    ) -> TopScoresResponse:
        response = api_service.get_top_scores(game_id, limit)
        return TopScoresResponse.model_validate(response, from_attributes=True)

    @app.get(
        "/api/v1/leaderboard/{game_id}",
        response_model=LeaderboardResponse,
        tags=["Scores"],
        summary="Ranked top 10 for a game",
    )
    async def leaderboard(game_id: str) -> LeaderboardResponse:
        response = api_service.get_leaderboard(game_id)
        return LeaderboardResponse.model_validate(response, from_attributes=True)

    # =========================================================================
    # Analytics Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/analytics",
        response_model=AnalyticsListResponse,
        tags=["Analytics"],
        summary="Analytics for all games",
    )
    async def list_analytics() -> AnalyticsListResponse:
        return AnalyticsListResponse(games=[
            AnalyticsResponse.model_validate(a, from_attributes=True)
            for a in api_service.list_analytics()
        ])

    @app.get(
        "/api/v1/analytics/{game_id}",
        response_model=AnalyticsResponse,
        tags=["Analytics"],
        summary="Analytics for one game",
    )
    async def get_analytics(game_id: str) -> AnalyticsResponse:
        response = api_service.get_analytics(game_id)
        return AnalyticsResponse.model_validate(response, from_attributes=True)

    @app.post(
        "/api/v1/analytics/{game_id}/play",
        response_model=AnalyticsResponse,
        tags=["Analytics"],
        summary="Count a play",
    )
    async def track_play(game_id: str) -> AnalyticsResponse:
        response = api_service.track_play(game_id)
        return AnalyticsResponse.model_validate(response, from_attributes=True)

    # =========================================================================
    # Ratings Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/ratings",
        response_model=RatingInfo,
        status_code=201,
        responses={400: {"model": ErrorResponse, "description": "Rating outside 1-5"}},
        tags=["Ratings"],
        summary="Rate a game",
    )
    async def submit_rating(body: SubmitRatingBody) -> Union[RatingInfo, JSONResponse]:
        """Players without a name are recorded as anonymous."""
        request = models.SubmitRatingRequest(
            game_id=body.game_id,
            rating=body.rating,
            comment=body.comment,
            player_name=body.player_name,
        )
        response = api_service.submit_rating(request)
        if isinstance(response, models.ErrorResponse):
            return from_service_error(response)
        return RatingInfo.model_validate(response, from_attributes=True)

    @app.get(
        "/api/v1/ratings/{game_id}",
        response_model=RatingsResponse,
        tags=["Ratings"],
        summary="Ratings for a game",
    )
    async def get_ratings(game_id: str) -> RatingsResponse:
        response = api_service.get_ratings(game_id)
        return RatingsResponse.model_validate(response, from_attributes=True)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="arcade2048",
            version=__version__,
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Arcade 2048 API",
            "version": __version__,
            "env": ARCADE2048_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn arcade2048.api.app:app
app = create_app()
