"""
Knight's Tour Engine - Depth-first backtracking tour construction.

The tour lives in a VisitGrid (cell -> visitation index) mirrored by a
path list (index -> cell), so path[i] always holds the cell marked i.

Move ordering:
    "fixed"       Try the 8 offsets in KNIGHT_OFFSETS order (default)
    "warnsdorff"  Try legal targets with the fewest onward options first,
                  then the illegal offsets; every node still makes 8
                  attempts, only their order changes

Plain fixed-order backtracking can take a very long time on 7x7 and 8x8
boards; use "warnsdorff" there.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..base import PuzzleEngine
from ..board import KNIGHT_OFFSETS, VisitGrid, is_knight_offset
from ..errors import ValidationFault
from ..factory import register_puzzle
from ..move import KnightMove, Position
from ..summary import KnightSummary

logger = logging.getLogger(__name__)

MIN_BOARD_SIZE = 5
MAX_BOARD_SIZE = 8

ORDERINGS = ("fixed", "warnsdorff")
STEP_MODES = ("search", "manual")

# Fixed-order backtracking from this size up can take hours
SLOW_FIXED_SIZE = 7


@dataclass
class _SearchFrame:
    """One node of the explicit-stack search driven by step()."""
    position: Position
    offsets: List[Tuple[int, int]]
    next_index: int = 0

    @property
    def exhausted(self) -> bool:
        return self.next_index >= len(self.offsets)


@register_puzzle
class KnightEngine(PuzzleEngine):
    """
    Knight's Tour puzzle engine.

    Args:
        ordering: Offset ordering for solve() and step(), see module docs
        step_mode: "search" makes step() run one attempt of the
            backtracking search; "manual" makes it try a single knight
            move from the current cell without backtracking

    Example:
        engine = KnightEngine()
        engine.initialize(5, 0, 0)
        engine.solve()              # True
        engine.visit_order[0, 0]    # 0
    """
    name = "knight"
    description = "Knight's Tour - Visit every square exactly once with a knight"

    def __init__(self, ordering: str = "fixed", step_mode: str = "search"):
        super().__init__()
        if ordering not in ORDERINGS:
            raise ValidationFault(f"Unknown ordering: {ordering}. Available: {', '.join(ORDERINGS)}")
        if step_mode not in STEP_MODES:
            raise ValidationFault(f"Unknown step mode: {step_mode}. Available: {', '.join(STEP_MODES)}")

        self.ordering = ordering
        self.step_mode = step_mode

        self._grid: Optional[VisitGrid] = None
        self._start: Optional[Position] = None
        self._path: List[Position] = []

        self._search_active = False
        self._search_stack: List[_SearchFrame] = []

    def initialize(self, board_size: int, start_x: int, start_y: int) -> None:
        """
        Start a new tour with the knight on (start_x, start_y).

        Args:
            board_size: Board dimension (5-8)
            start_x: Start column
            start_y: Start row

        Raises:
            ValidationFault: If the size is out of range or the start
                cell lies off the board
        """
        for label, value in (("Board size", board_size), ("Start x", start_x), ("Start y", start_y)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValidationFault(f"{label} must be an integer, got {value!r}")
        if not MIN_BOARD_SIZE <= board_size <= MAX_BOARD_SIZE:
            raise ValidationFault(
                f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, got {board_size}"
            )
        if not (0 <= start_x < board_size and 0 <= start_y < board_size):
            raise ValidationFault(f"Start position ({start_x},{start_y}) is off a {board_size}x{board_size} board")

        self._lifecycle.initialize()
        self._grid = VisitGrid(board_size)
        self._start = Position(start_x, start_y)
        self._restart_tour()
        self._stop_search()
        logger.info(f"Knight initialized: {board_size}x{board_size} from {self._start}, ordering={self.ordering}")
        if self.ordering == "fixed" and board_size >= SLOW_FIXED_SIZE:
            logger.warning(
                f"Fixed-order search on {board_size}x{board_size} may run for a very long time; "
                "use ordering=\"warnsdorff\" for a fast tour"
            )

    # Manual play

    def move(self, from_x: int, from_y: int, to_x: int, to_y: int) -> bool:
        """
        Jump from the knight's current cell to an unvisited cell.

        Args:
            from_x, from_y: Must be the cell holding the latest index
            to_x, to_y: Unvisited target one knight jump away

        Returns:
            True if the move was made; False (no change) otherwise

        Raises:
            StateFault: If called before initialize()
        """
        self._lifecycle.require_initialized("move the knight")
        if self._lifecycle.solved:
            return False

        source = Position(from_x, from_y)
        target = Position(to_x, to_y)

        if not (self._grid.in_bounds(source) and self._grid.in_bounds(target)):
            logger.debug(f"Knight move {source} -> {target} rejected: off the board")
            return False
        if self._grid.get(source) != self.total_moves - 1:
            logger.debug(f"Knight move rejected: knight is not on {source}")
            return False
        if not self._grid.is_free(target):
            logger.debug(f"Knight move rejected: {target} already visited")
            return False
        if not is_knight_offset(*source.delta(target)):
            logger.debug(f"Knight move {source} -> {target} rejected: not an L-shaped jump")
            return False

        self._visit(target)
        self._lifecycle.record_step()
        self._stop_search()

        if self._tour_complete() and self.is_valid_solution():
            self._lifecycle.mark_completed()
            logger.info(f"Knight's tour completed manually in {self.steps} steps")
        return True

    def possible_moves(self) -> List[Position]:
        """Unvisited cells one jump from the knight, in fixed offset order."""
        if self._grid is None:
            return []
        current = self.current_position
        return [
            current.offset(dx, dy) for dx, dy in KNIGHT_OFFSETS
            if self._grid.is_free(current.offset(dx, dy))
        ]

    def warnsdorff_moves(self) -> List[Position]:
        """
        possible_moves() sorted by ascending onward-move count.

        Ties keep fixed offset order.
        """
        return sorted(self.possible_moves(), key=self._grid.onward_degree) if self._grid else []

    # Automatic play

    def solve(self) -> bool:
        """
        Restart the tour from the start cell and backtrack to completion.

        Returns:
            True if every cell was visited
        """
        if not self._lifecycle.can_step():
            return False

        self._restart_tour()
        self._stop_search()

        found = self._tour_from(self._start)
        if found:
            self._lifecycle.mark_completed()
            logger.info(f"Knight's tour {self.board_size}x{self.board_size} found in {self.steps} steps")
        else:
            logger.info(f"Knight's tour from {self._start}: search space exhausted after {self.steps} steps")
        return found

    def _tour_from(self, position: Position) -> bool:
        if self._tour_complete():
            return True

        for dx, dy in self._ordered_offsets(position):
            self._lifecycle.record_step()
            target = position.offset(dx, dy)
            if self._grid.is_free(target):
                self._visit(target)
                if self._tour_from(target):
                    return True
                self._unvisit_last()

        return False

    def step(self) -> bool:
        """
        Perform one unit of work in the configured step mode.

        search: try the next offset of the deepest search node (one step;
            the knight advances if the target is free), or backtrack one
            cell when that node has no offsets left. The first call after
            initialize() or a manual move restarts the tour.
        manual: move the knight to the first target of the configured
            ordering through move().

        Returns:
            True if progress was made; False if solved, stuck or exhausted
        """
        if not self._lifecycle.can_step():
            return False

        if self.step_mode == "manual":
            return self._manual_step()
        return self._search_step()

    def _manual_step(self) -> bool:
        targets = self.warnsdorff_moves() if self.ordering == "warnsdorff" else self.possible_moves()
        if not targets:
            logger.debug(f"Knight stuck at {self.current_position}")
            return False
        current = self.current_position
        return self.move(current.x, current.y, targets[0].x, targets[0].y)

    def _search_step(self) -> bool:
        if not self._search_active:
            self._restart_tour()
            self._search_stack = [self._frame_at(self._start)]
            self._search_active = True

        frame = self._search_stack[-1]

        if frame.exhausted:
            self._search_stack.pop()
            if not self._search_stack:
                self._stop_search()
                logger.info(f"Knight step search exhausted after {self.steps} steps")
                return False
            self._unvisit_last()
            return True

        dx, dy = frame.offsets[frame.next_index]
        frame.next_index += 1
        self._lifecycle.record_step()

        target = frame.position.offset(dx, dy)
        if self._grid.is_free(target):
            self._visit(target)
            if self._tour_complete():
                self._stop_search()
                self._lifecycle.mark_completed()
                logger.info(f"Knight's tour found by stepping in {self.steps} steps")
            else:
                self._search_stack.append(self._frame_at(target))
        return True

    def _frame_at(self, position: Position) -> _SearchFrame:
        return _SearchFrame(position=position, offsets=self._ordered_offsets(position))

    def _ordered_offsets(self, position: Position) -> List[Tuple[int, int]]:
        """All 8 offsets in the order the search should try them."""
        if self.ordering == "fixed":
            return list(KNIGHT_OFFSETS)

        def rank(offset: Tuple[int, int]) -> Tuple[int, int]:
            target = position.offset(*offset)
            if self._grid.is_free(target):
                return (0, self._grid.onward_degree(target))
            return (1, 0)

        return sorted(KNIGHT_OFFSETS, key=rank)

    def _stop_search(self) -> None:
        self._search_active = False
        self._search_stack = []

    # Queries

    def is_valid_solution(self) -> bool:
        """
        Every cell visited once, consecutive indices one knight jump apart.
        """
        if self._grid is None:
            return False

        cells = self.board_size * self.board_size
        if self._grid.visited_count() != cells:
            return False
        if not np.array_equal(self._grid.indices(), np.arange(cells)):
            return False

        ordered = self._grid.positions_in_order()
        return all(
            is_knight_offset(*a.delta(b))
            for a, b in zip(ordered, ordered[1:])
        )

    @property
    def board_size(self) -> int:
        return self._grid.size if self._grid else 0

    @property
    def start(self) -> Optional[Position]:
        return self._start

    @property
    def total_moves(self) -> int:
        """Cells visited so far, the start cell included."""
        return len(self._path)

    @property
    def current_position(self) -> Optional[Position]:
        return self._path[-1] if self._path else None

    @property
    def visit_order(self) -> np.ndarray:
        """Copy of the [y][x] grid of visitation indices (-1 = unvisited)."""
        if self._grid is None:
            return np.empty((0, 0), dtype=np.int32)
        return self._grid.snapshot()

    @property
    def path(self) -> List[Position]:
        return list(self._path)

    @property
    def moves(self) -> List[KnightMove]:
        """Move history derived from consecutive path cells."""
        return [
            KnightMove(source=a, target=b, index=i + 1)
            for i, (a, b) in enumerate(zip(self._path, self._path[1:]))
        ]

    def reset(self) -> None:
        self._lifecycle.reset()
        self._grid = None
        self._start = None
        self._path = []
        self._stop_search()
        logger.info("Knight reset")

    def create_summary(self, completed: bool) -> KnightSummary:
        common = self._summary_common(completed)
        return KnightSummary(
            board_size=self.board_size,
            start_x=self._start.x,
            start_y=self._start.y,
            total_moves=self.total_moves,
            **common
        )

    # Tour bookkeeping

    def _restart_tour(self) -> None:
        self._grid.clear()
        self._path = []
        self._visit(self._start)

    def _visit(self, position: Position) -> None:
        self._grid.mark(position, len(self._path))
        self._path.append(position)

    def _unvisit_last(self) -> None:
        self._grid.unmark(self._path.pop())

    def _tour_complete(self) -> bool:
        return self.total_moves == self.board_size * self.board_size
