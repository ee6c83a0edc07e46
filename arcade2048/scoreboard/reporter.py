"""
Score Reporter - Interface the session uses to hand off a final score.

A ScoreReporter is called once per session, when the game first
reaches a terminal state. Delivery is at most once: the session
does not retry and does not care about the receipt beyond logging.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass


DEFAULT_PLAYER_NAME = "Invitado"


@dataclass
class ScoreReceipt:
    """Acknowledgement returned by a reporter."""
    game_id: str
    score: int
    player_name: str = DEFAULT_PLAYER_NAME
    score_id: int | None = None
    rank: int | None = None


class ScoreReporter(ABC):
    """
    Abstract base class for score reporters.

    Implementations raise ReportingFailure when the score
    cannot be delivered.
    """

    @abstractmethod
    def report(
        self,
        game_id: str,
        score: int,
        duration_seconds: int | None = None,
    ) -> ScoreReceipt:
        """
        Record a final score.

        Args:
            game_id: Which game the score belongs to (e.g. "2048")
            score: Final score of the session
            duration_seconds: Whole seconds the session lasted

        Returns:
            ScoreReceipt acknowledging the score
        """
        pass

    def get_name(self) -> str:
        return self.__class__.__name__


class NullReporter(ScoreReporter):
    """Accepts every score and keeps none of them."""

    def report(
        self,
        game_id: str,
        score: int,
        duration_seconds: int | None = None,
    ) -> ScoreReceipt:
        return ScoreReceipt(game_id=game_id, score=score)
