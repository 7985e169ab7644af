"""
N-Queens Engine - Row-by-row backtracking placement on an NxN board.

Board representation: queens[row] holds the occupied column or None, so
two queens can never share a row.
"""

import logging
from typing import List, Optional

import numpy as np

from ..base import PuzzleEngine
from ..errors import ValidationFault
from ..factory import register_puzzle
from ..summary import QueensSummary

logger = logging.getLogger(__name__)

MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 12


@register_puzzle
class QueensEngine(PuzzleEngine):
    """
    N-Queens puzzle engine.

    Supports manual play (place_queen/remove_queen), a full backtracking
    solve(), and a single-click step() that advances the same search one
    column attempt at a time. Stepping until completion reaches the same
    board and the same step count as solve().

    Example:
        engine = QueensEngine()
        engine.initialize(4)
        engine.solve()          # True
        engine.queens           # [1, 3, 0, 2]
    """
    name = "queens"
    description = "N-Queens - Place N queens so that no two attack each other"

    def __init__(self):
        super().__init__()
        self._board_size = 0
        self._queens: List[Optional[int]] = []

        # Incremental search state used by step()
        self._search_active = False
        self._cursor_row = 0
        self._next_col: List[int] = []

    def initialize(self, board_size: int) -> None:
        """
        Start a new game on an empty board.

        Args:
            board_size: Board dimension N (4-12)

        Raises:
            ValidationFault: If board_size is not an int in range
        """
        if isinstance(board_size, bool) or not isinstance(board_size, int):
            raise ValidationFault(f"Board size must be an integer, got {board_size!r}")
        if not MIN_BOARD_SIZE <= board_size <= MAX_BOARD_SIZE:
            raise ValidationFault(
                f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, got {board_size}"
            )

        self._lifecycle.initialize()
        self._board_size = board_size
        self._clear_board()
        self._stop_search()
        logger.info(f"Queens initialized: {board_size}x{board_size}")

    # Manual play

    def place_queen(self, row: int, col: int) -> bool:
        """
        Place a queen, replacing any queen already in that row.

        Args:
            row: Row index
            col: Column index

        Returns:
            True if placed; False (board unchanged) if out of bounds,
            attacked by another queen, or the puzzle is already solved

        Raises:
            StateFault: If called before initialize()
        """
        self._lifecycle.require_initialized("place a queen")
        if self._lifecycle.solved or not self._in_bounds(row, col):
            return False

        if not self.is_safe_position(row, col):
            logger.debug(f"Queen at ({row},{col}) rejected: square is attacked")
            return False

        self._queens[row] = col
        self._lifecycle.record_step()
        self._stop_search()

        if self.queen_count == self._board_size and self.is_valid_solution():
            self._lifecycle.mark_completed()
            logger.info(f"Queens solved manually in {self.steps} steps")
        return True

    def remove_queen(self, row: int, col: int) -> bool:
        """
        Clear the row if its queen sits at col.

        Returns:
            True if a queen was removed

        Raises:
            StateFault: If called before initialize()
        """
        self._lifecycle.require_initialized("remove a queen")
        if self._lifecycle.solved or not self._in_bounds(row, col):
            return False
        if self._queens[row] != col:
            return False

        self._queens[row] = None
        self._lifecycle.record_step()
        self._stop_search()
        return True

    def is_safe_position(self, row: int, col: int) -> bool:
        """
        Check that no queen in another row shares col or a diagonal.

        The queen currently in row (if any) is ignored since placing
        there replaces it.
        """
        for r, c in enumerate(self._queens):
            if r == row or c is None:
                continue
            if c == col or abs(c - col) == abs(r - row):
                return False
        return True

    # Automatic play

    def solve(self) -> bool:
        """
        Clear the board and run column-major backtracking from row 0.

        Every column tried counts as one step, safe or not.

        Returns:
            True if all rows were filled
        """
        if not self._lifecycle.can_step():
            return False

        self._clear_board()
        self._stop_search()

        found = self._place_from(0)
        if found:
            self._lifecycle.mark_completed()
            logger.info(f"Queens {self._board_size}x{self._board_size} solved in {self.steps} steps")
        else:
            logger.info(f"Queens {self._board_size}x{self._board_size}: no solution")
        return found

    def _place_from(self, row: int) -> bool:
        if row >= self._board_size:
            return True

        for col in range(self._board_size):
            self._lifecycle.record_step()
            if self.is_safe_position(row, col):
                self._queens[row] = col
                if self._place_from(row + 1):
                    return True
                self._queens[row] = None

        return False

    def step(self) -> bool:
        """
        Advance the backtracking search by one unit.

        A unit is either one column attempt in the current row (counted
        as a step; the queen is placed if safe and the search moves to
        the next row) or, when the row has no untried columns left, a
        backtrack that lifts the queen from the previous row.

        The first step after initialize() or any manual edit clears the
        board and starts the search from row 0.

        Returns:
            True if progress was made; False if solved or exhausted
        """
        if not self._lifecycle.can_step():
            return False

        if not self._search_active:
            self._start_search()

        row = self._cursor_row
        col = self._next_col[row]

        if col >= self._board_size:
            self._next_col[row] = 0
            if row == 0:
                self._stop_search()
                logger.info("Queens step search exhausted without a solution")
                return False
            self._cursor_row = row - 1
            self._queens[row - 1] = None
            return True

        self._next_col[row] = col + 1
        self._lifecycle.record_step()

        if self.is_safe_position(row, col):
            self._queens[row] = col
            if row == self._board_size - 1:
                self._stop_search()
                self._lifecycle.mark_completed()
                logger.info(f"Queens solved by stepping in {self.steps} steps")
            else:
                self._cursor_row = row + 1
        return True

    def _start_search(self) -> None:
        self._clear_board()
        self._search_active = True
        self._cursor_row = 0
        self._next_col = [0] * self._board_size

    def _stop_search(self) -> None:
        self._search_active = False
        self._cursor_row = 0
        self._next_col = []

    # Queries

    def is_valid_solution(self) -> bool:
        """
        Board full and no two queens share a column or diagonal.
        """
        if not self._lifecycle.initialized:
            return False
        if any(c is None for c in self._queens):
            return False

        for i in range(self._board_size):
            for j in range(i + 1, self._board_size):
                if self._queens[i] == self._queens[j]:
                    return False
                if abs(self._queens[i] - self._queens[j]) == j - i:
                    return False
        return True

    @property
    def board_size(self) -> int:
        return self._board_size

    @property
    def queens(self) -> List[Optional[int]]:
        """Copy of queen columns per row (None = empty row)."""
        return list(self._queens)

    @property
    def queen_count(self) -> int:
        return sum(1 for c in self._queens if c is not None)

    @property
    def board(self) -> np.ndarray:
        """
        Boolean NxN matrix, True where a queen stands.

        Returns:
            Fresh array built from the current placement
        """
        grid = np.zeros((self._board_size, self._board_size), dtype=bool)
        for row, col in enumerate(self._queens):
            if col is not None:
                grid[row, col] = True
        return grid

    def reset(self) -> None:
        self._lifecycle.reset()
        self._board_size = 0
        self._queens = []
        self._stop_search()
        logger.info("Queens reset")

    def create_summary(self, completed: bool) -> QueensSummary:
        return QueensSummary(board_size=self._board_size, **self._summary_common(completed))

    def _clear_board(self) -> None:
        self._queens = [None] * self._board_size

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._board_size and 0 <= col < self._board_size
