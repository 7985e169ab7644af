"""
Board Module - Mutable board containers shared by the engines.

VisitGrid backs the knight's tour (numpy int grid, one visitation index
per cell). Tower backs Tower of Hanoi (ordered disk stack). Both hand out
copies from their snapshot methods, never the live storage.
"""

from typing import List, Optional, Tuple

import numpy as np

from .move import Position


# (dx, dy) knight offsets in the fixed search order
KNIGHT_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (2, 1), (1, 2), (-1, 2), (-2, 1),
    (-2, -1), (-1, -2), (1, -2), (2, -1),
)

UNVISITED = -1


def is_knight_offset(dx: int, dy: int) -> bool:
    """Check whether (dx, dy) is one of the 8 L-shaped jumps."""
    return (abs(dx), abs(dy)) in ((1, 2), (2, 1))


class VisitGrid:
    """
    Square grid of visitation indices, indexed [y][x].

    Cells hold the 0-based order in which the knight reached them,
    or UNVISITED.
    """

    def __init__(self, size: int):
        self.size = size
        self._grid = np.full((size, size), UNVISITED, dtype=np.int32)

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.size and 0 <= pos.y < self.size

    def get(self, pos: Position) -> int:
        return int(self._grid[pos.y, pos.x])

    def is_free(self, pos: Position) -> bool:
        """True if pos lies on the board and has not been visited."""
        return self.in_bounds(pos) and self._grid[pos.y, pos.x] == UNVISITED

    def mark(self, pos: Position, index: int) -> None:
        self._grid[pos.y, pos.x] = index

    def unmark(self, pos: Position) -> None:
        self._grid[pos.y, pos.x] = UNVISITED

    def clear(self) -> None:
        self._grid.fill(UNVISITED)

    def visited_count(self) -> int:
        return int(np.count_nonzero(self._grid != UNVISITED))

    def onward_degree(self, pos: Position) -> int:
        """
        Count free cells reachable from pos with one knight jump.

        Used by the Warnsdorff ordering: fewer onward options first.
        """
        return sum(
            1 for dx, dy in KNIGHT_OFFSETS
            if self.is_free(pos.offset(dx, dy))
        )

    def positions_in_order(self) -> List[Position]:
        """
        List visited cells sorted by visitation index.

        Returns:
            Positions ordered 0, 1, 2, ... (gaps are not filled in)
        """
        ys, xs = np.nonzero(self._grid != UNVISITED)
        cells = sorted(zip(self._grid[ys, xs].tolist(), xs.tolist(), ys.tolist()))
        return [Position(x, y) for _, x, y in cells]

    def indices(self) -> np.ndarray:
        """Sorted array of the visitation indices currently on the grid."""
        values = self._grid[self._grid != UNVISITED]
        return np.sort(values)

    def snapshot(self) -> np.ndarray:
        """Copy of the grid; mutating it does not touch the engine."""
        return self._grid.copy()


class Tower:
    """
    One Hanoi peg holding disks bottom-to-top.

    Disk sizes strictly decrease from bottom to top. push() enforces this
    and raises on a violation, so callers must check can_place() first.
    """

    def __init__(self, tower_id: int):
        self.tower_id = tower_id
        self._disks: List[int] = []

    @property
    def is_empty(self) -> bool:
        return not self._disks

    @property
    def size(self) -> int:
        return len(self._disks)

    @property
    def top(self) -> Optional[int]:
        """Size of the top disk, or None if the tower is empty."""
        return self._disks[-1] if self._disks else None

    def can_place(self, disk: int) -> bool:
        """True if disk may sit on top of this tower."""
        return self.is_empty or disk < self._disks[-1]

    def push(self, disk: int) -> None:
        if disk <= 0:
            raise ValueError(f"Disk size must be positive, got {disk}")
        if not self.can_place(disk):
            raise ValueError(f"Cannot place disk {disk} on disk {self.top} (tower {self.tower_id})")
        self._disks.append(disk)

    def pop(self) -> int:
        if not self._disks:
            raise IndexError(f"Tower {self.tower_id} is empty")
        return self._disks.pop()

    def clear(self) -> None:
        self._disks.clear()

    def is_descending(self) -> bool:
        """Check that sizes strictly decrease from bottom to top."""
        return all(a > b for a, b in zip(self._disks, self._disks[1:]))

    def snapshot(self) -> Tuple[int, ...]:
        return tuple(self._disks)

    def __str__(self) -> str:
        if not self._disks:
            return f"Tower {self.tower_id + 1}: empty"
        return f"Tower {self.tower_id + 1}: [{' '.join(str(d) for d in self._disks)}]"
