"""
Summary Module - Immutable end-of-game results handed to storage.

Engines never persist anything themselves. create_summary() materializes
their terminal state into one of these frozen records; whatever stores
game history consumes them (to_dict() gives a JSON-friendly form).
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Any, ClassVar, Dict, Optional


@dataclass(frozen=True)
class PuzzleSummary:
    """
    Fields common to every puzzle result.

    Attributes:
        steps: Attempts counted by the engine
        completed: Whether the caller considers the game finished
        start_time: When the game was initialized
        end_time: When it was solved (None if never solved)
        elapsed_seconds: Duration at summary time
    """
    game_type: ClassVar[str] = "puzzle"

    steps: int
    completed: bool
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    elapsed_seconds: float

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a plain dict with ISO-formatted timestamps.

        Returns:
            Dictionary including a "game_type" key
        """
        data = asdict(self)
        for key in ("start_time", "end_time"):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        data["game_type"] = self.game_type
        return data


@dataclass(frozen=True)
class QueensSummary(PuzzleSummary):
    """N-Queens result."""
    game_type: ClassVar[str] = "queens"

    board_size: int


@dataclass(frozen=True)
class KnightSummary(PuzzleSummary):
    """Knight's Tour result: start cell and number of visited cells."""
    game_type: ClassVar[str] = "knight"

    board_size: int
    start_x: int
    start_y: int
    total_moves: int


@dataclass(frozen=True)
class HanoiSummary(PuzzleSummary):
    """
    Tower of Hanoi result.

    Attributes:
        num_disks: Disk count
        movements: Disk moves actually made
        minimum_moves: 2^num_disks - 1
        optimal: True if movements == minimum_moves
    """
    game_type: ClassVar[str] = "hanoi"

    num_disks: int
    movements: int
    minimum_moves: int
    optimal: bool
