"""
Tests for score reporters.

Tests:
- In-memory scores, ranks, leaderboards and analytics
- Ratings, their bounds and averages
- HTTP reporter payloads and failure wrapping
- Sessions reporting into a real scoreboard
"""

from __future__ import annotations

import json

import httpx
import pytest

from ..engine_core.board import Direction
from ..engine_core.errors import ReportingFailure
from ..scoreboard import ANONYMOUS_PLAYER_NAME, HttpScoreReporter, NullReporter
from ..session import GameSession


class TestInMemoryScoreboard:
    """Tests for the in-memory scoreboard."""

    def test_submit_returns_rank(self, scoreboard):
        first = scoreboard.submit_score("2048", "ana", 500)
        second = scoreboard.submit_score("2048", "luis", 900)
        third = scoreboard.submit_score("2048", "eva", 700)

        assert first.rank == 1
        assert second.rank == 1
        assert third.rank == 2
        assert [first.score_id, second.score_id, third.score_id] == [1, 2, 3]

    def test_equal_scores_share_rank(self, scoreboard):
        scoreboard.submit_score("2048", "ana", 500)
        receipt = scoreboard.submit_score("2048", "luis", 500)
        assert receipt.rank == 1

    def test_validation(self, scoreboard):
        with pytest.raises(ValueError):
            scoreboard.submit_score("", "ana", 10)
        with pytest.raises(ValueError):
            scoreboard.submit_score("2048", "", 10)
        with pytest.raises(ValueError):
            scoreboard.submit_score("2048", "ana", -1)

    def test_top_scores_order(self, scoreboard):
        """Highest first, earlier submission wins ties."""
        scoreboard.submit_score("2048", "ana", 300)
        scoreboard.submit_score("2048", "luis", 800)
        scoreboard.submit_score("2048", "eva", 300)

        top = scoreboard.top_scores("2048", limit=10)

        assert [(e.player_name, e.score) for e in top] == [
            ("luis", 800), ("ana", 300), ("eva", 300),
        ]

    def test_leaderboard_is_top_ten(self, scoreboard):
        for i in range(12):
            scoreboard.submit_score("2048", f"p{i}", i * 10)

        board = scoreboard.leaderboard("2048")

        assert len(board) == 10
        assert [e.rank for e in board] == list(range(1, 11))
        assert board[0].score == 110

    def test_games_are_separate(self, scoreboard):
        scoreboard.submit_score("2048", "ana", 300)
        scoreboard.submit_score("snake", "ana", 50)

        assert len(scoreboard.top_scores("2048")) == 1
        assert scoreboard.leaderboard("tetris") == []

    def test_analytics(self, scoreboard):
        scoreboard.submit_score("2048", "ana", 100)
        scoreboard.submit_score("2048", "luis", 200)
        scoreboard.track_play("2048")

        stats = scoreboard.analytics("2048")

        assert stats.play_count == 3
        assert stats.high_score == 200
        assert stats.avg_score == 150.0
        assert stats.last_played_at is not None

    def test_unknown_game_analytics(self, scoreboard):
        stats = scoreboard.analytics("pong")
        assert stats.play_count == 0
        assert stats.high_score is None

    def test_all_analytics_most_played_first(self, scoreboard):
        scoreboard.track_play("snake")
        scoreboard.track_play("2048")
        scoreboard.track_play("2048")

        assert [a.game_id for a in scoreboard.all_analytics()] == ["2048", "snake"]

    def test_report_uses_default_player(self, scoreboard):
        receipt = scoreboard.report("2048", 64, duration_seconds=30)

        assert receipt.player_name == "Invitado"
        entry = scoreboard.top_scores("2048")[0]
        assert entry.play_duration_seconds == 30

    def test_session_reports_into_scoreboard(self, scoreboard, locked_board):
        session = GameSession(initial_board=locked_board, reporter=scoreboard)
        session.move(Direction.LEFT)
        receipt = session.wait_for_report()

        assert scoreboard.analytics("2048").play_count == 1
        assert receipt.rank == 1


class TestRatings:
    """Tests for game ratings."""

    def test_submit_rating(self, scoreboard):
        entry = scoreboard.submit_rating("2048", 5, comment="Genial", player_name="ana")

        assert entry.rating_id == 1
        assert entry.player_name == "ana"
        assert entry.comment == "Genial"

    def test_anonymous_by_default(self, scoreboard):
        entry = scoreboard.submit_rating("2048", 3)
        assert entry.player_name == ANONYMOUS_PLAYER_NAME
        assert entry.comment is None

    @pytest.mark.parametrize("rating", [0, 6, -2])
    def test_rating_bounds(self, scoreboard, rating):
        with pytest.raises(ValueError, match="between 1 and 5"):
            scoreboard.submit_rating("2048", rating)

    def test_bounds_are_inclusive(self, scoreboard):
        scoreboard.submit_rating("2048", 1)
        scoreboard.submit_rating("2048", 5)
        assert scoreboard.ratings("2048").total_ratings == 2

    def test_average_rounded_to_one_decimal(self, scoreboard):
        for rating in (5, 4, 4):
            scoreboard.submit_rating("2048", rating)

        summary = scoreboard.ratings("2048")

        assert summary.total_ratings == 3
        assert summary.avg_rating == 4.3

    def test_recent_reviews_newest_first(self, scoreboard):
        for i in range(12):
            scoreboard.submit_rating("2048", 1 + i % 5, player_name=f"p{i}")

        reviews = scoreboard.ratings("2048").reviews

        assert len(reviews) == 10
        assert reviews[0].player_name == "p11"
        assert reviews[-1].player_name == "p2"

    def test_unrated_game(self, scoreboard):
        summary = scoreboard.ratings("snake")
        assert summary.total_ratings == 0
        assert summary.avg_rating is None
        assert summary.reviews == []

    def test_ratings_do_not_count_plays(self, scoreboard):
        scoreboard.submit_rating("2048", 4)
        assert scoreboard.all_analytics() == []


class TestNullReporter:

    def test_accepts_anything(self):
        receipt = NullReporter().report("2048", 10)
        assert receipt.score == 10
        assert receipt.rank is None


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestHttpScoreReporter:
    """Tests for the HTTP reporter."""

    def test_posts_score(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(201, json={
                "id": 7, "game_id": "2048", "player_name": "Invitado", "score": 1200, "rank": 3,
            })

        reporter = HttpScoreReporter("https://arcade.test/", client=_client(handler))
        receipt = reporter.report("2048", 1200, duration_seconds=95)

        assert seen["url"] == "https://arcade.test/api/scores"
        assert seen["body"] == {
            "gameId": "2048", "score": 1200, "playDuration": 95, "playerName": "Invitado",
        }
        assert seen["auth"] is None
        assert receipt.score_id == 7
        assert receipt.rank == 3

    def test_sends_bearer_token(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(201, json={})

        reporter = HttpScoreReporter("https://arcade.test", token="abc", client=_client(handler))
        receipt = reporter.report("2048", 10)

        assert seen["auth"] == "Bearer abc"
        assert receipt.score == 10
        assert receipt.game_id == "2048"

    def test_server_error_raises_reporting_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(500, json={"error": "Internal server error"})

        reporter = HttpScoreReporter("https://arcade.test", client=_client(handler))

        with pytest.raises(ReportingFailure) as exc_info:
            reporter.report("2048", 10)

        assert exc_info.value.game_id == "2048"
        assert "500" in str(exc_info.value)

    def test_network_error_raises_reporting_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        reporter = HttpScoreReporter("https://arcade.test", client=_client(handler))

        with pytest.raises(ReportingFailure) as exc_info:
            reporter.report("2048", 10)

        assert isinstance(exc_info.value.cause, httpx.ConnectError)

    def test_timeout_raises_reporting_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        reporter = HttpScoreReporter("https://arcade.test", client=_client(handler))

        with pytest.raises(ReportingFailure, match="timed out"):
            reporter.report("2048", 10)

    def test_session_survives_unreachable_backend(self, locked_board):
        """The game ends normally even when the score cannot be sent."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        reporter = HttpScoreReporter("https://arcade.test", client=_client(handler))
        session = GameSession(initial_board=locked_board, reporter=reporter)

        snap = session.move(Direction.RIGHT)
        session.wait_for_report()

        assert snap.is_terminal
        assert isinstance(session.last_report_error, ReportingFailure)
