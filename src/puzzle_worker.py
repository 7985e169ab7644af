"""
Puzzle Worker Module

Provides a background QThread that drives one puzzle engine so long
solve() calls (8x8 knight tours, 10-disk Hanoi) do not block the caller's
thread. Results and progress come back through Qt signals.
"""

import logging
from typing import Optional

from PyQt5.QtCore import QThread, pyqtSignal

from src.puzzles import PuzzleEngine


# Configure module logger
logger = logging.getLogger(__name__)


class PuzzleWorker(QThread):
    """
    Background worker thread for a single puzzle engine.

    Runs either one solve() call or a loop of step() calls. The engine
    is not thread-safe: while the worker runs, nothing else may call a
    mutating method on it.

    Signals:
        status_changed(str): Emitted when worker status changes
        step_made(int): Emitted after each successful step with the step counter
        finished_with_result(bool, object): (solved, PuzzleSummary) when done
        error_occurred(str): Emitted when the engine raises

    Example:
        engine = create_puzzle("knight", ordering="warnsdorff")
        engine.initialize(8, 0, 0)
        worker = PuzzleWorker(engine)
        worker.finished_with_result.connect(on_done)
        worker.start()
    """

    status_changed = pyqtSignal(str)
    step_made = pyqtSignal(int)
    finished_with_result = pyqtSignal(bool, object)
    error_occurred = pyqtSignal(str)

    MODES = ("solve", "step")

    def __init__(self, engine: PuzzleEngine, mode: str = "solve",
                 step_delay_ms: int = 0, max_steps: Optional[int] = None):
        """
        Initialize the puzzle worker.

        Args:
            engine: Initialized engine to drive
            mode: "solve" for one solve() call, "step" for a step() loop
            step_delay_ms: Pause between steps in step mode
            max_steps: Optional cap on step() calls in step mode
        """
        super().__init__()
        if mode not in self.MODES:
            raise ValueError(f"Unknown worker mode: {mode}. Available: {', '.join(self.MODES)}")
        self.engine = engine
        self.mode = mode
        self.step_delay_ms = step_delay_ms
        self.max_steps = max_steps
        self._running = False

    def run(self):
        """
        Drive the engine. Called when thread starts.

        solve() runs to its own conclusion; request_stop() only takes
        effect between steps.
        """
        self._running = True
        logger.info(f"Puzzle worker started: {self.engine.name} ({self.mode})")
        self.status_changed.emit("Running")

        try:
            if self.mode == "solve":
                solved = self.engine.solve()
            else:
                solved = self._run_steps()
            summary = self.engine.create_summary(self.engine.is_solved())
        except Exception as e:
            logger.exception("Error while driving puzzle engine")
            self.error_occurred.emit(str(e))
            self.status_changed.emit("Error")
            return
        finally:
            self._running = False

        self.status_changed.emit("Solved" if solved else "Stopped")
        logger.info(f"Puzzle worker finished: solved={solved}, steps={self.engine.steps}")
        self.finished_with_result.emit(solved, summary)

    def _run_steps(self) -> bool:
        calls = 0
        while self._running:
            if self.max_steps is not None and calls >= self.max_steps:
                logger.info(f"Step limit reached ({self.max_steps})")
                break
            if not self.engine.step():
                break
            calls += 1
            self.step_made.emit(self.engine.steps)
            if self.step_delay_ms > 0:
                self.msleep(self.step_delay_ms)
        return self.engine.is_solved()

    def request_stop(self):
        """Ask a step loop to stop before its next step."""
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running
