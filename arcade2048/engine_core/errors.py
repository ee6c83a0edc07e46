"""
Engine errors.

InvalidOperation is raised synchronously to the caller.
ReportingFailure is raised by score reporters and absorbed by the session.
"""

from __future__ import annotations
from typing import Any


class EngineError(Exception):
    """Base class for engine errors."""


class InvalidOperation(EngineError):
    """Raised when moving a session that is already won or lost."""

    def __init__(self, message: str = "session is not active", status: Any = None):
        self.status = status
        super().__init__(message)


class ReportingFailure(EngineError):
    """Raised when a score reporter fails or cannot be reached."""

    def __init__(self, game_id: str, message: str, cause: BaseException | None = None):
        self.game_id = game_id
        self.cause = cause
        super().__init__(f"Failed to report score for {game_id}: {message}")
