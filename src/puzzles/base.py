"""
Base Engine Module - Capability interface shared by all puzzle engines.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from .lifecycle import PuzzleLifecycle
from .summary import PuzzleSummary


class PuzzleEngine(ABC):
    """
    Abstract interface for all puzzle engines.

    Each engine owns a PuzzleLifecycle value (self._lifecycle) and
    implements the initialize/step/solve/reset contract on top of it.
    Subclasses must define name and description class attributes.

    Engines are synchronous and not thread-safe: at most one mutating
    call (step, solve, or a manual move) may be in flight per instance.

    Attributes:
        name: Short identifier used by the factory
        description: Human-readable description for UI
    """
    name: str = "base"
    description: str = "Base puzzle"

    def __init__(self):
        self._lifecycle = PuzzleLifecycle()

    @abstractmethod
    def initialize(self, *params: int) -> None:
        """
        Build the initial board from type-specific parameters.

        Raises:
            ValidationFault: If a parameter is outside its domain
        """

    @abstractmethod
    def step(self) -> bool:
        """
        Perform one incremental action.

        Returns:
            False when no further step is possible (not an error)

        Raises:
            StateFault: If called before initialize()
        """

    @abstractmethod
    def solve(self) -> bool:
        """
        Run to completion.

        Returns:
            False if the search space was exhausted without a solution

        Raises:
            StateFault: If called before initialize()
        """

    @abstractmethod
    def is_valid_solution(self) -> bool:
        """Check whether the current state is a correct solution."""

    @abstractmethod
    def reset(self) -> None:
        """Discard all state and return to the uninitialized state."""

    @abstractmethod
    def create_summary(self, completed: bool) -> PuzzleSummary:
        """
        Materialize the current state into an immutable summary.

        Args:
            completed: Completion flag recorded in the summary

        Raises:
            StateFault: If called before initialize()
        """

    # Lifecycle accessors

    @property
    def is_initialized(self) -> bool:
        return self._lifecycle.initialized

    def is_solved(self) -> bool:
        return self._lifecycle.solved

    @property
    def steps(self) -> int:
        """Attempts counted since initialize()."""
        return self._lifecycle.steps

    @property
    def start_time(self) -> Optional[datetime]:
        return self._lifecycle.start_time

    @property
    def end_time(self) -> Optional[datetime]:
        return self._lifecycle.end_time

    def elapsed_seconds(self) -> float:
        return self._lifecycle.elapsed_seconds()

    def _summary_common(self, completed: bool) -> dict:
        """Keyword arguments shared by every summary type."""
        self._lifecycle.require_initialized("create summary")
        return {
            "steps": self._lifecycle.steps,
            "completed": completed,
            "start_time": self._lifecycle.start_time,
            "end_time": self._lifecycle.end_time,
            "elapsed_seconds": self._lifecycle.elapsed_seconds(),
        }
