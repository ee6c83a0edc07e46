"""
Session Manager - Creates and tracks independent game sessions.

Sessions are EPHEMERAL:
- Held in memory only, keyed by session id
- No save/resume of a board in progress
- Removed when ended, or when stale and finished

Sessions share nothing but the score reporter, which is
only touched once per finished playthrough.
"""

from __future__ import annotations
import logging
import random
import time
from concurrent.futures import Executor
from typing import Callable

from ..engine_core.board import DEFAULT_ROWS, DEFAULT_COLUMNS
from ..engine_core.spawner import RandomSource
from ..scoreboard.reporter import ScoreReporter
from .game import GameSession, DEFAULT_GAME_ID


logger = logging.getLogger(__name__)


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with their own random source
    - Track active sessions
    - Clean up finished sessions
    """

    def __init__(
        self,
        reporter: ScoreReporter | None = None,
        rng_factory: Callable[[int | None], RandomSource] | None = None,
        executor: Executor | None = None,
    ):
        self.reporter = reporter
        self.executor = executor
        self._rng_factory = rng_factory or random.Random
        self._sessions: dict[str, GameSession] = {}
        self._created_at: dict[str, float] = {}

    def create_session(
        self,
        game_id: str = DEFAULT_GAME_ID,
        rows: int = DEFAULT_ROWS,
        columns: int = DEFAULT_COLUMNS,
        seed: int | None = None,
    ) -> GameSession:
        """
        Create a new game session.

        Args:
            game_id: Game identifier used when reporting the score
            rows: Board height
            columns: Board width
            seed: Seed for tile placement (random if None)

        Returns:
            New GameSession, already seeded with its starting tiles
        """
        session = GameSession(
            rows=rows,
            columns=columns,
            rng=self._rng_factory(seed),
            reporter=self.reporter,
            game_id=game_id,
            executor=self.executor,
        )
        self._sessions[session.session_id] = session
        self._created_at[session.session_id] = time.time()
        logger.info("Created session %s (%dx%d)", session.session_id, rows, columns)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and forget it.

        Returns False if there was no such session.
        """
        session = self._sessions.pop(session_id, None)
        self._created_at.pop(session_id, None)
        if session is None:
            return False
        logger.info("Ended session %s (%s)", session_id, session.status.value)
        return True

    def list_sessions(self) -> list[str]:
        return list(self._sessions)

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions still accepting moves."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove finished sessions older than max_age_seconds.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        to_remove = [
            sid for sid, session in self._sessions.items()
            if current_time - self._created_at[sid] > max_age_seconds
            and not session.is_active()
        ]

        for session_id in to_remove:
            self.end_session(session_id)
        return len(to_remove)
