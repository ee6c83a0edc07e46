"""
Game Session - One playthrough of 2048.

LIFECYCLE:
1. Created with an empty board and two spawned tiles, status ACTIVE
2. Each move: slide/merge, spawn if the board changed, re-evaluate status
3. On the first WON/LOST transition the final score is handed to the
   report executor once; the move returns without waiting for delivery
4. Terminal sessions reject moves until reset()
5. reset() throws the playthrough away and seeds a fresh one

The session owns its board and score exclusively. Callers only ever
see Snapshots.
"""

from __future__ import annotations
import atexit
import logging
import time
import uuid
from concurrent import futures
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Callable

from ..engine_core.board import Board, Direction, DEFAULT_ROWS, DEFAULT_COLUMNS
from ..engine_core.reducer import apply_move
from ..engine_core.spawner import Spawner, RandomSource
from ..engine_core.rules import GameStatus, WINNING_TILE, evaluate
from ..engine_core.snapshot import Snapshot
from ..engine_core.errors import InvalidOperation, ReportingFailure
from ..scoreboard.reporter import ScoreReporter, ScoreReceipt


logger = logging.getLogger(__name__)

DEFAULT_GAME_ID = "2048"
INITIAL_TILES = 2

# Shared pool for score delivery, created on first use
_report_executor: ThreadPoolExecutor | None = None


def get_report_executor() -> ThreadPoolExecutor:
    """
    Get or create the thread pool that delivers final scores.

    Reporters may block on the network, so they never run on the
    thread that made the move. The pool is shut down at process exit,
    letting queued reports finish.
    """
    global _report_executor
    if _report_executor is None:
        _report_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="score-report")

        def cleanup() -> None:
            if _report_executor is not None:
                _report_executor.shutdown(wait=True)

        atexit.register(cleanup)
    return _report_executor


class GameSession:
    """
    A single 2048 session.

    Usage:
        session = GameSession(rng=random.Random(7))
        snap = session.move(Direction.LEFT)
        if snap.is_terminal:
            session.reset()
    """

    def __init__(
        self,
        rows: int = DEFAULT_ROWS,
        columns: int = DEFAULT_COLUMNS,
        rng: RandomSource | None = None,
        reporter: ScoreReporter | None = None,
        game_id: str = DEFAULT_GAME_ID,
        clock: Callable[[], float] = time.monotonic,
        session_id: str | None = None,
        winning_tile: int = WINNING_TILE,
        initial_board: Board | None = None,
        executor: Executor | None = None,
    ):
        if initial_board is not None:
            rows, columns = initial_board.rows, initial_board.columns
        if rows < 1 or columns < 1:
            raise ValueError("Board needs at least one row and one column")
        if rows * columns < INITIAL_TILES:
            raise ValueError(f"Board needs room for {INITIAL_TILES} starting tiles")

        self.session_id = session_id or str(uuid.uuid4())
        self.rows = rows
        self.columns = columns
        self.game_id = game_id
        self.winning_tile = winning_tile
        self.reporter = reporter
        self.spawner = Spawner(rng)
        self._clock = clock
        self.executor = executor

        # Outcome of the last report attempt, filled in by the report executor
        self.last_receipt: ScoreReceipt | None = None
        self.last_report_error: ReportingFailure | None = None
        self._report_future: futures.Future | None = None
        self._playthrough = 0

        self._start(initial_board)

    def _start(self, initial_board: Board | None = None):
        self._board = initial_board or Board.empty(self.rows, self.columns)
        self._score = 0
        self._status = GameStatus.ACTIVE
        self._moves = 0
        self._reported = False
        self._playthrough += 1
        self._started_at = self._clock()
        self._last_changed = False
        self._last_spawned: tuple[int, int] | None = None

        # A scripted opening board is taken as-is
        for _ in range(0 if initial_board else INITIAL_TILES):
            self._board, self._last_spawned = self.spawner.spawn(self._board)

        logger.debug("Session %s started:\n%s", self.session_id, self._board.render())

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def score(self) -> int:
        return self._score

    @property
    def moves(self) -> int:
        return self._moves

    def is_active(self) -> bool:
        return self._status is GameStatus.ACTIVE

    def elapsed_seconds(self) -> int:
        return int(self._clock() - self._started_at)

    def snapshot(self) -> Snapshot:
        """Immutable copy of the current grid, score and status."""
        return Snapshot.capture(
            board=self._board,
            score=self._score,
            status=self._status,
            moves=self._moves,
            changed=self._last_changed,
            spawned=self._last_spawned,
        )

    # =========================================================================
    # Mutators
    # =========================================================================

    def move(self, direction: Direction | str) -> Snapshot:
        """
        Slide the board in a direction.

        A move that changes nothing is accepted: no score, no spawn.

        Raises:
            InvalidOperation: if the session is already won or lost
            ValueError: if direction is not one of the four directions
        """
        direction = Direction(direction)
        if not self.is_active():
            raise InvalidOperation("session is not active", status=self._status)

        outcome = apply_move(self._board, direction)
        self._last_changed = outcome.changed
        self._last_spawned = None

        if outcome.changed:
            self._board = outcome.board
            self._score += outcome.gained
            self._moves += 1
            self._board, self._last_spawned = self.spawner.spawn(self._board)

        self._status = evaluate(self._board, self.winning_tile)
        if self._status.is_terminal:
            logger.info(
                "Session %s %s with score %d after %d moves",
                self.session_id, self._status.value, self._score, self._moves,
            )
            self._report_once()

        return self.snapshot()

    def reset(self) -> Snapshot:
        """
        Discard this playthrough and start a fresh one.

        A report still in flight for the old playthrough is delivered
        but no longer recorded on the session.
        """
        self.last_receipt = None
        self.last_report_error = None
        self._start()
        return self.snapshot()

    # =========================================================================
    # Score reporting
    # =========================================================================

    def _report_once(self):
        """Queue the final score for delivery, at most once per playthrough."""
        if self._reported or self.reporter is None:
            return
        self._reported = True

        executor = self.executor or get_report_executor()
        self._report_future = executor.submit(
            self._deliver,
            self._playthrough,
            self.reporter,
            self._score,
            self.elapsed_seconds(),
        )

    def _deliver(self, playthrough: int, reporter: ScoreReporter, score: int, duration: int):
        """Runs on the report executor. Never raises."""
        receipt = None
        error = None
        try:
            receipt = reporter.report(self.game_id, score, duration)
        except ReportingFailure as e:
            error = e
        except Exception as e:
            error = ReportingFailure(self.game_id, str(e), cause=e)

        if error:
            logger.warning(
                "Score for session %s was not reported: %s", self.session_id, error
            )

        # Reset while the report was in flight
        if playthrough != self._playthrough:
            return
        self.last_receipt = receipt
        self.last_report_error = error

    def wait_for_report(self, timeout: float | None = None) -> ScoreReceipt | None:
        """
        Block until the last queued report has been delivered.

        Returns last_receipt, which is None while nothing was reported,
        the report failed, or the timeout expired first.
        """
        if self._report_future is not None:
            futures.wait([self._report_future], timeout=timeout)
        return self.last_receipt
