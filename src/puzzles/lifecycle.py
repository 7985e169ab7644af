"""
Lifecycle Module - Progress bookkeeping embedded in every puzzle engine.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .errors import StateFault


@dataclass
class PuzzleLifecycle:
    """
    Shared lifecycle state owned by each engine instance.

    Attributes:
        initialized: True once initialize() has succeeded
        solved: True once the puzzle reached its goal state
        steps: Attempt counter, non-decreasing until reset()
        start_time: When the current game was initialized
        end_time: When the puzzle was solved (set iff solved)
    """
    initialized: bool = False
    solved: bool = False
    steps: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    def initialize(self) -> None:
        """Start a fresh game: clear counters and record the start time."""
        self.initialized = True
        self.solved = False
        self.steps = 0
        self.start_time = datetime.now()
        self.end_time = None

    def require_initialized(self, action: str) -> None:
        """
        Raise if the engine has not been initialized.

        Args:
            action: Operation name used in the error message

        Raises:
            StateFault: If initialize() has not been called
        """
        if not self.initialized:
            raise StateFault(f"Cannot {action}: puzzle has not been initialized")

    def can_step(self) -> bool:
        """
        Gate for step()/solve(): fault before init, False once solved.

        Returns:
            True if a mutating search call may proceed
        """
        self.require_initialized("step")
        return not self.solved

    def record_step(self, count: int = 1) -> None:
        self.steps += count

    def mark_completed(self) -> None:
        """Flag the puzzle as solved and stamp the end time."""
        self.solved = True
        self.end_time = datetime.now()

    def reset(self) -> None:
        """Return every field to its pre-initialize value."""
        self.initialized = False
        self.solved = False
        self.steps = 0
        self.start_time = None
        self.end_time = None

    def elapsed_seconds(self) -> float:
        """
        Seconds from start to end, or to now while still running.

        Returns:
            Elapsed time in seconds (0.0 before initialize)
        """
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else datetime.now()
        return (end - self.start_time).total_seconds()
