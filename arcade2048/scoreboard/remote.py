"""
HTTP Score Reporter - Posts final scores to a remote arcade backend.

The backend accepts:
    POST {base_url}/api/scores
    {"gameId": "2048", "score": 1200, "playDuration": 95, "playerName": "Invitado"}

A single attempt is made per score; any failure becomes a ReportingFailure.
"""

from __future__ import annotations
import logging
from typing import Any

import httpx

from ..engine_core.errors import ReportingFailure
from .reporter import ScoreReporter, ScoreReceipt, DEFAULT_PLAYER_NAME


logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 5.0


class HttpScoreReporter(ScoreReporter):
    """
    Reporter backed by the arcade's REST API.

    Args:
        base_url: Root of the backend, e.g. "https://arcade.example.com"
        token: Optional bearer token; without it the score is posted as a guest
        player_name: Name sent alongside the score
        timeout: Request timeout in seconds
        client: Optional custom httpx.Client (tests pass a MockTransport client)
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        player_name: str = DEFAULT_PLAYER_NAME,
        timeout: float = _DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.player_name = player_name
        self.timeout = timeout
        self._client = client

    @property
    def scores_url(self) -> str:
        return f"{self.base_url}/api/scores"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def report(
        self,
        game_id: str,
        score: int,
        duration_seconds: int | None = None,
    ) -> ScoreReceipt:
        payload = {
            "gameId": game_id,
            "score": score,
            "playDuration": duration_seconds or 0,
            "playerName": self.player_name,
        }
        logger.debug("Submitting score for %s: %d", game_id, score)

        client = self._client or httpx.Client(timeout=self.timeout)
        try:
            response = client.post(self.scores_url, json=payload, headers=self._headers())
            response.raise_for_status()
            body: dict[str, Any] = response.json()
        except httpx.TimeoutException as e:
            raise ReportingFailure(game_id, f"request timed out: {e!s}", cause=e) from e
        except httpx.HTTPStatusError as e:
            raise ReportingFailure(
                game_id, f"server error: {e.response.status_code}", cause=e
            ) from e
        except httpx.RequestError as e:
            raise ReportingFailure(game_id, f"network error: {e!s}", cause=e) from e
        except ValueError as e:
            raise ReportingFailure(game_id, "invalid JSON in response", cause=e) from e
        finally:
            if self._client is None:
                client.close()

        logger.info("Score submitted for %s: %d", game_id, score)
        return ScoreReceipt(
            game_id=body.get("game_id", game_id),
            score=body.get("score", score),
            player_name=body.get("player_name", self.player_name),
            score_id=body.get("id"),
            rank=body.get("rank"),
        )
