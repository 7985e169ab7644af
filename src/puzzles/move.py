"""
Move Module - Immutable transition records for Knight and Hanoi engines.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Position:
    """
    A cell on a square board.

    Attributes:
        x: Column index
        y: Row index
    """
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> 'Position':
        """Position shifted by (dx, dy)."""
        return Position(self.x + dx, self.y + dy)

    def delta(self, other: 'Position') -> Tuple[int, int]:
        """(dx, dy) needed to go from this cell to other."""
        return (other.x - self.x, other.y - self.y)

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


@dataclass(frozen=True)
class KnightMove:
    """
    One knight jump in a tour.

    Attributes:
        source: Cell the knight left
        target: Cell the knight landed on
        index: Visitation index written into target
    """
    source: Position
    target: Position
    index: int

    def __str__(self) -> str:
        return f"#{self.index}: {self.source} -> {self.target}"


@dataclass(frozen=True)
class HanoiMove:
    """
    One disk transfer between towers.

    Attributes:
        from_tower: Source tower index (0-2)
        to_tower: Destination tower index (0-2)
        disk_size: Size of the moved disk (1 = smallest)
    """
    from_tower: int
    to_tower: int
    disk_size: int

    def __str__(self) -> str:
        return f"Move disk {self.disk_size} from tower {self.from_tower + 1} to tower {self.to_tower + 1}"
