"""
Pytest fixtures for Arcade 2048 tests.
"""

import threading

import pytest

from ..engine_core.board import Board
from ..engine_core.spawner import SequenceRandom
from ..scoreboard import InMemoryScoreboard, ScoreReporter, ScoreReceipt
from ..session import GameSession


class RecordingReporter(ScoreReporter):
    """Reporter that remembers every call."""

    def __init__(self):
        self.calls = []

    def report(self, game_id, score, duration_seconds=None):
        self.calls.append((game_id, score, duration_seconds))
        return ScoreReceipt(game_id=game_id, score=score, rank=1)


class FailingReporter(ScoreReporter):
    """Reporter whose backend is always down."""

    def __init__(self, error=None):
        self.error = error or ConnectionError("backend unreachable")
        self.calls = 0

    def report(self, game_id, score, duration_seconds=None):
        self.calls += 1
        raise self.error


class BlockingReporter(ScoreReporter):
    """Reporter that holds each call until the test releases it."""

    def __init__(self):
        self.started = threading.Event()
        self.release = threading.Event()
        self.calls = 0

    def report(self, game_id, score, duration_seconds=None):
        self.calls += 1
        self.started.set()
        self.release.wait(timeout=10)
        return ScoreReceipt(game_id=game_id, score=score, rank=1)


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, start=100.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def first_cell_rng() -> SequenceRandom:
    """Always spawns in the first empty cell (row-major)."""
    return SequenceRandom([0])


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scoreboard() -> InMemoryScoreboard:
    return InMemoryScoreboard(clock=FakeClock(1_700_000_000.0))


@pytest.fixture
def almost_won_board() -> Board:
    """Two 1024s side by side; sliding left makes 2048."""
    return Board.from_rows([
        [1024, 1024, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 0],
    ])


@pytest.fixture
def locked_board() -> Board:
    """Full board with no equal neighbours anywhere."""
    return Board.from_rows([
        [2, 4, 2, 4],
        [4, 2, 4, 2],
        [2, 4, 2, 4],
        [4, 2, 4, 2],
    ])


@pytest.fixture
def new_session(first_cell_rng, reporter, clock) -> GameSession:
    """Fresh session with deterministic spawns and a recording reporter."""
    return GameSession(rng=first_cell_rng, reporter=reporter, clock=clock)
