"""
In-Memory Scoreboard - Scores, leaderboards and play analytics.

Keeps the same bookkeeping as the arcade's score tables:
- Every submitted score is recorded with its player and duration
- Each game has analytics: play count, high score, last played time
- Leaderboards are the top 10 scores, ranked by row number
- Players rate games 1 to 5, optionally with a comment

Nothing is persisted; the scoreboard lives as long as the process.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import itertools
import logging
import threading
import time

from .reporter import ScoreReporter, ScoreReceipt, DEFAULT_PLAYER_NAME


logger = logging.getLogger(__name__)

LEADERBOARD_SIZE = 10
RECENT_REVIEWS = 10
MIN_RATING = 1
MAX_RATING = 5
ANONYMOUS_PLAYER_NAME = "Anónimo"


@dataclass
class ScoreEntry:
    """A single recorded score."""
    score_id: int
    game_id: str
    player_name: str
    score: int
    created_at: float
    play_duration_seconds: int | None = None


@dataclass
class LeaderboardEntry:
    rank: int
    player_name: str
    score: int
    created_at: float


@dataclass
class GameAnalytics:
    """Aggregate play statistics for one game."""
    game_id: str
    play_count: int = 0
    high_score: int | None = None
    avg_score: float | None = None
    last_played_at: float | None = None


@dataclass
class RatingEntry:
    """A single rating, with an optional comment."""
    rating_id: int
    game_id: str
    rating: int
    player_name: str
    created_at: float
    comment: str | None = None


@dataclass
class RatingSummary:
    game_id: str
    total_ratings: int = 0
    avg_rating: float | None = None
    reviews: list[RatingEntry] = field(default_factory=list)


@dataclass
class _GameRecord:
    play_count: int = 0
    high_score: int | None = None
    last_played_at: float | None = None
    scores: list[ScoreEntry] = field(default_factory=list)


class InMemoryScoreboard(ScoreReporter):
    """
    Score store that doubles as the sessions' score reporter.

    Usage:
        board = InMemoryScoreboard()
        receipt = board.submit_score("2048", "ana", 1200)
        board.leaderboard("2048")
    """

    def __init__(self, player_name: str = DEFAULT_PLAYER_NAME, clock=time.time):
        self.player_name = player_name
        self._clock = clock
        self._games: dict[str, _GameRecord] = {}
        self._ratings: dict[str, list[RatingEntry]] = {}
        self._ids = itertools.count(1)
        self._rating_ids = itertools.count(1)
        # Sessions report from the report executor's threads
        self._lock = threading.RLock()

    def report(
        self,
        game_id: str,
        score: int,
        duration_seconds: int | None = None,
    ) -> ScoreReceipt:
        return self.submit_score(game_id, self.player_name, score, duration_seconds)

    def submit_score(
        self,
        game_id: str,
        player_name: str,
        score: int,
        duration_seconds: int | None = None,
    ) -> ScoreReceipt:
        """
        Record a score and update the game's analytics.

        Raises:
            ValueError: if game_id or player_name is empty, or score is negative
        """
        if not game_id:
            raise ValueError("game_id is required")
        if not player_name:
            raise ValueError("player_name is required")
        if score < 0:
            raise ValueError("score must be >= 0")

        with self._lock:
            now = self._clock()
            entry = ScoreEntry(
                score_id=next(self._ids),
                game_id=game_id,
                player_name=player_name,
                score=score,
                created_at=now,
                play_duration_seconds=duration_seconds,
            )

            record = self._games.setdefault(game_id, _GameRecord())
            record.scores.append(entry)
            record.play_count += 1
            record.high_score = score if record.high_score is None else max(record.high_score, score)
            record.last_played_at = now

            rank = 1 + sum(1 for s in record.scores if s.score > score)

        logger.info(
            "Recorded score %d for %s by %s (rank %d)", score, game_id, player_name, rank
        )

        return ScoreReceipt(
            game_id=game_id,
            score=score,
            player_name=player_name,
            score_id=entry.score_id,
            rank=rank,
        )

    def track_play(self, game_id: str) -> GameAnalytics:
        """Count a play without recording a score."""
        with self._lock:
            record = self._games.setdefault(game_id, _GameRecord())
            record.play_count += 1
            record.last_played_at = self._clock()
            return self.analytics(game_id)

    def top_scores(self, game_id: str, limit: int = LEADERBOARD_SIZE) -> list[ScoreEntry]:
        """Best scores first; equal scores keep submission order."""
        with self._lock:
            record = self._games.get(game_id)
            if not record:
                return []
            ordered = sorted(record.scores, key=lambda s: (-s.score, s.score_id))
        return ordered[:limit]

    def leaderboard(self, game_id: str) -> list[LeaderboardEntry]:
        return [
            LeaderboardEntry(
                rank=i + 1,
                player_name=entry.player_name,
                score=entry.score,
                created_at=entry.created_at,
            )
            for i, entry in enumerate(self.top_scores(game_id, LEADERBOARD_SIZE))
        ]

    def analytics(self, game_id: str) -> GameAnalytics:
        with self._lock:
            record = self._games.get(game_id)
            if not record:
                return GameAnalytics(game_id=game_id)

            avg_score = None
            if record.scores:
                avg_score = round(sum(s.score for s in record.scores) / len(record.scores), 1)

            return GameAnalytics(
                game_id=game_id,
                play_count=record.play_count,
                high_score=record.high_score,
                avg_score=avg_score,
                last_played_at=record.last_played_at,
            )

    def all_analytics(self) -> list[GameAnalytics]:
        """Analytics for every known game, most played first."""
        with self._lock:
            stats = [self.analytics(game_id) for game_id in self._games]
        return sorted(stats, key=lambda a: a.play_count, reverse=True)

    # =========================================================================
    # Ratings
    # =========================================================================

    def submit_rating(
        self,
        game_id: str,
        rating: int,
        comment: str | None = None,
        player_name: str | None = None,
    ) -> RatingEntry:
        """
        Record a 1-5 rating for a game.

        Raises:
            ValueError: if game_id is empty or rating is outside 1-5
        """
        if not game_id:
            raise ValueError("game_id is required")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValueError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")

        with self._lock:
            entry = RatingEntry(
                rating_id=next(self._rating_ids),
                game_id=game_id,
                rating=rating,
                player_name=player_name or ANONYMOUS_PLAYER_NAME,
                created_at=self._clock(),
                comment=comment or None,
            )
            self._ratings.setdefault(game_id, []).append(entry)

        logger.info("Recorded rating %d for %s", rating, game_id)
        return entry

    def ratings(self, game_id: str) -> RatingSummary:
        """Rating count, average and the most recent reviews, newest first."""
        with self._lock:
            entries = list(self._ratings.get(game_id, []))
        if not entries:
            return RatingSummary(game_id=game_id)

        recent = sorted(entries, key=lambda r: (r.created_at, r.rating_id), reverse=True)
        return RatingSummary(
            game_id=game_id,
            total_ratings=len(entries),
            avg_rating=round(sum(r.rating for r in entries) / len(entries), 1),
            reviews=recent[:RECENT_REVIEWS],
        )
