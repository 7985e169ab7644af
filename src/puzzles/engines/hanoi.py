"""
Tower of Hanoi Engine - Three-peg disk stacks with a precomputed optimal plan.

Disks start on tower 0 (largest at the bottom) and must end on tower 2.
Manual moves and scripted replay of the optimal plan both go through
move_disk(), so they share one validation path and can be interleaved.
"""

import logging
from typing import List, Tuple

from ..base import PuzzleEngine
from ..board import Tower
from ..errors import ValidationFault
from ..factory import register_puzzle
from ..move import HanoiMove
from ..summary import HanoiSummary

logger = logging.getLogger(__name__)

MIN_DISKS = 3
MAX_DISKS = 10

TOWER_COUNT = 3
SOURCE_TOWER = 0
AUXILIARY_TOWER = 1
TARGET_TOWER = 2


def build_optimal_plan(num_disks: int, source: int = SOURCE_TOWER,
                       target: int = TARGET_TOWER,
                       auxiliary: int = AUXILIARY_TOWER) -> List[HanoiMove]:
    """
    Generate the canonical 2^n - 1 move sequence.

    Moves n-1 disks out of the way onto the auxiliary tower, moves disk n,
    then moves the n-1 disks back on top of it.

    Args:
        num_disks: Number of disks to transfer
        source: Tower the disks start on
        target: Tower the disks must end on
        auxiliary: Remaining tower

    Returns:
        Ordered list of moves
    """
    plan: List[HanoiMove] = []

    def transfer(n: int, frm: int, to: int, via: int) -> None:
        if n == 1:
            plan.append(HanoiMove(frm, to, 1))
            return
        transfer(n - 1, frm, via, to)
        plan.append(HanoiMove(frm, to, n))
        transfer(n - 1, via, to, frm)

    if num_disks > 0:
        transfer(num_disks, source, target, auxiliary)
    return plan


@register_puzzle
class HanoiEngine(PuzzleEngine):
    """
    Tower of Hanoi puzzle engine.

    step() replays the next move of the optimal plan; solve() restacks
    the disks on tower 0 and replays the whole plan. move_disk() is the
    free-form move used for manual play.

    Example:
        engine = HanoiEngine()
        engine.initialize(3)
        engine.move_disk(0, 2)      # True
        engine.move_disk(0, 2)      # False: disk 2 onto disk 1
    """
    name = "hanoi"
    description = "Tower of Hanoi - Move the disk stack from the first peg to the last"

    def __init__(self):
        super().__init__()
        self._num_disks = 0
        self._towers: List[Tower] = [Tower(i) for i in range(TOWER_COUNT)]
        self._moves: List[HanoiMove] = []
        self._optimal_solution: List[HanoiMove] = []
        self._plan_index = 0

    def initialize(self, num_disks: int) -> None:
        """
        Stack num_disks disks on tower 0 and precompute the optimal plan.

        Raises:
            ValidationFault: If num_disks is not an int in 3-10
        """
        if isinstance(num_disks, bool) or not isinstance(num_disks, int):
            raise ValidationFault(f"Number of disks must be an integer, got {num_disks!r}")
        if not MIN_DISKS <= num_disks <= MAX_DISKS:
            raise ValidationFault(f"Number of disks must be between {MIN_DISKS} and {MAX_DISKS}, got {num_disks}")

        self._lifecycle.initialize()
        self._num_disks = num_disks
        self._restack()
        self._optimal_solution = build_optimal_plan(num_disks)
        logger.info(f"Hanoi initialized: {num_disks} disks, optimal plan of {len(self._optimal_solution)} moves")

    def move_disk(self, from_tower: int, to_tower: int) -> bool:
        """
        Move the top disk of from_tower onto to_tower.

        Args:
            from_tower: Source tower index (0-2)
            to_tower: Destination tower index (0-2)

        Returns:
            True if the disk moved. False, with towers untouched, when an
            index is invalid, the towers are the same, the source is
            empty, the disk is larger than the destination's top disk, or
            the puzzle is already solved.

        Raises:
            StateFault: If called before initialize()
        """
        self._lifecycle.require_initialized("move a disk")
        if self._lifecycle.solved:
            return False
        if not (0 <= from_tower < TOWER_COUNT and 0 <= to_tower < TOWER_COUNT) or from_tower == to_tower:
            logger.debug(f"Hanoi move {from_tower}->{to_tower} rejected: invalid towers")
            return False

        source = self._towers[from_tower]
        dest = self._towers[to_tower]
        if source.is_empty:
            logger.debug(f"Hanoi move rejected: tower {from_tower} is empty")
            return False
        if not dest.can_place(source.top):
            logger.debug(f"Hanoi move rejected: disk {source.top} onto disk {dest.top}")
            return False

        disk = source.pop()
        dest.push(disk)
        self._moves.append(HanoiMove(from_tower, to_tower, disk))
        self._lifecycle.record_step()

        if self._all_on_target():
            self._lifecycle.mark_completed()
            logger.info(f"Hanoi solved in {len(self._moves)} moves (minimum {self.get_minimum_moves()})")
        return True

    def step(self) -> bool:
        """
        Replay the next move of the optimal plan.

        The plan index only advances when the move is accepted, so a
        manual move that makes the planned move illegal stalls replay
        instead of skipping it. Once stalled, every later call returns
        False until solve() (which restacks the disks and replays the
        whole plan) or reset() is called.

        Returns:
            False once the plan is exhausted, the puzzle is solved, or
            the planned move is currently illegal
        """
        if not self._lifecycle.can_step():
            return False
        if self._plan_index >= len(self._optimal_solution):
            return False

        planned = self._optimal_solution[self._plan_index]
        if not self.move_disk(planned.from_tower, planned.to_tower):
            logger.warning(f"Planned move #{self._plan_index + 1} ({planned}) is not legal in the current position")
            return False
        self._plan_index += 1
        return True

    def solve(self) -> bool:
        """
        Restack all disks on tower 0 and replay the whole optimal plan.

        Move history is cleared first, so afterwards len(moves) equals
        get_minimum_moves(). The step counter keeps accumulating.
        """
        if not self._lifecycle.can_step():
            return False

        self._restack()
        for planned in self._optimal_solution:
            self.move_disk(planned.from_tower, planned.to_tower)
        self._plan_index = len(self._optimal_solution)

        if not self._lifecycle.solved:
            self._lifecycle.mark_completed()
        return True

    # Queries

    def get_minimum_moves(self) -> int:
        """2^num_disks - 1."""
        return (1 << self._num_disks) - 1

    def is_optimal_solution(self) -> bool:
        return len(self._moves) == self.get_minimum_moves()

    def is_valid_solution(self) -> bool:
        """Tower 2 holds every disk, largest at the bottom."""
        if not self._lifecycle.initialized:
            return False
        expected = tuple(range(self._num_disks, 0, -1))
        return self._towers[TARGET_TOWER].snapshot() == expected

    def is_valid_configuration(self) -> bool:
        """
        Check the stacking invariant across all towers.

        Returns:
            True if the towers hold num_disks disks in total and each
            tower decreases strictly from bottom to top
        """
        total = sum(tower.size for tower in self._towers)
        return total == self._num_disks and all(tower.is_descending() for tower in self._towers)

    @property
    def num_disks(self) -> int:
        return self._num_disks

    @property
    def towers(self) -> Tuple[Tuple[int, ...], ...]:
        """Disk sizes per tower, bottom-to-top."""
        return tuple(tower.snapshot() for tower in self._towers)

    @property
    def moves(self) -> List[HanoiMove]:
        return list(self._moves)

    @property
    def optimal_solution(self) -> List[HanoiMove]:
        return list(self._optimal_solution)

    @property
    def plan_index(self) -> int:
        """Index of the next optimal move step() will replay."""
        return self._plan_index

    def reset(self) -> None:
        self._lifecycle.reset()
        self._num_disks = 0
        for tower in self._towers:
            tower.clear()
        self._moves = []
        self._optimal_solution = []
        self._plan_index = 0
        logger.info("Hanoi reset")

    def create_summary(self, completed: bool) -> HanoiSummary:
        return HanoiSummary(
            num_disks=self._num_disks,
            movements=len(self._moves),
            minimum_moves=self.get_minimum_moves(),
            optimal=self.is_optimal_solution(),
            **self._summary_common(completed)
        )

    def _restack(self) -> None:
        for tower in self._towers:
            tower.clear()
        for size in range(self._num_disks, 0, -1):
            self._towers[SOURCE_TOWER].push(size)
        self._moves = []
        self._plan_index = 0

    def _all_on_target(self) -> bool:
        return self._towers[TARGET_TOWER].size == self._num_disks
