"""
Test script for the Knight's Tour engine.

Covers:
1. Fixed-order backtracking on 5x5
2. Warnsdorff ordering on 6x6-8x8
3. Step modes (search and manual)
4. Manual move validation

Usage:
    python test_knight.py
"""

import sys
import logging
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.puzzles import KnightEngine, Position, UNVISITED


# Tour found from (0,0) on 5x5 with the fixed offset order, indexed [y][x]
EXPECTED_5X5_TOUR = [
    [0, 13, 18, 7, 24],
    [5, 8, 1, 12, 17],
    [14, 19, 6, 23, 2],
    [9, 4, 21, 16, 11],
    [20, 15, 10, 3, 22],
]


def assert_valid_tour(visit_order: np.ndarray):
    size = visit_order.shape[0]
    assert sorted(visit_order.flatten().tolist()) == list(range(size * size))
    cells = {int(v): (x, y) for (y, x), v in np.ndenumerate(visit_order)}
    for i in range(size * size - 1):
        (x1, y1), (x2, y2) = cells[i], cells[i + 1]
        assert sorted((abs(x2 - x1), abs(y2 - y1))) == [1, 2], f"Jump {i}->{i + 1} is not a knight move"


def test_solve_five_from_corner():
    """5x5 from (0,0) with fixed ordering finds the known tour."""
    print("\n" + "="*60)
    print("TEST: Solve 5x5 from corner")
    print("="*60)

    engine = KnightEngine()
    engine.initialize(5, 0, 0)
    assert engine.solve()

    print(f"  Steps: {engine.steps}")
    print(engine.visit_order)
    assert engine.total_moves == 25
    assert engine.is_valid_solution()
    assert engine.visit_order.tolist() == EXPECTED_5X5_TOUR
    assert engine.steps == 70624
    assert_valid_tour(engine.visit_order)
    print("  [PASS] 5x5 solve")


def test_solve_warnsdorff_larger_boards():
    """Warnsdorff ordering tours 6x6, 7x7 and 8x8 quickly."""
    print("\n" + "="*60)
    print("TEST: Warnsdorff 6..8")
    print("="*60)

    for size in (6, 7, 8):
        engine = KnightEngine(ordering="warnsdorff")
        engine.initialize(size, 0, 0)
        assert engine.solve(), f"No tour on {size}x{size}"
        assert engine.is_valid_solution()
        assert_valid_tour(engine.visit_order)
        print(f"  {size}x{size}: {engine.steps} steps")
        assert engine.steps == size * size - 1

    engine = KnightEngine(ordering="warnsdorff")
    engine.initialize(8, 3, 5)
    assert engine.solve()
    assert engine.visit_order[5, 3] == 0
    print("  [PASS] Warnsdorff")


def test_search_step_matches_solve():
    """Stepping the search reproduces solve()'s tour and step count."""
    print("\n" + "="*60)
    print("TEST: Search step vs solve")
    print("="*60)

    engine = KnightEngine(step_mode="search")
    engine.initialize(5, 0, 0)
    calls = 0
    while engine.step():
        calls += 1
    print(f"  {calls} step calls, {engine.steps} attempts")
    assert engine.is_solved()
    assert engine.visit_order.tolist() == EXPECTED_5X5_TOUR
    assert engine.steps == 70624

    engine = KnightEngine(ordering="warnsdorff")
    engine.initialize(6, 1, 1)
    while engine.step():
        pass
    solver = KnightEngine(ordering="warnsdorff")
    solver.initialize(6, 1, 1)
    solver.solve()
    assert (engine.visit_order == solver.visit_order).all()
    assert engine.steps == solver.steps
    print("  [PASS] Search step vs solve")


def test_manual_step_mode():
    """Manual step mode makes one greedy move per call."""
    print("\n" + "="*60)
    print("TEST: Manual step mode")
    print("="*60)

    engine = KnightEngine(ordering="warnsdorff", step_mode="manual")
    engine.initialize(8, 0, 0)
    while engine.step():
        pass
    print(f"  Visited {engine.total_moves} cells in {engine.steps} steps")
    assert engine.is_solved()
    assert engine.steps == 63
    assert_valid_tour(engine.visit_order)

    engine = KnightEngine(step_mode="manual")
    engine.initialize(5, 0, 0)
    assert engine.step()
    assert engine.current_position == Position(2, 1)
    assert engine.total_moves == 2
    print("  [PASS] Manual step mode")


def test_manual_moves():
    """move() accepts only legal jumps from the knight's current cell."""
    print("\n" + "="*60)
    print("TEST: Manual moves")
    print("="*60)

    engine = KnightEngine()
    engine.initialize(5, 0, 0)

    assert not engine.move(0, 0, 1, 1)        # not an L
    assert not engine.move(0, 0, -2, 1)       # off board
    assert not engine.move(1, 2, 3, 3)        # knight is not there
    assert engine.steps == 0
    assert engine.total_moves == 1

    assert engine.move(0, 0, 1, 2)
    assert engine.visit_order[2, 1] == 1
    assert not engine.move(0, 0, 2, 1)        # from a stale cell
    assert not engine.move(1, 2, 0, 0)        # back to a visited cell
    assert engine.move(1, 2, 3, 3)
    assert engine.steps == 2
    assert engine.total_moves == 3

    history = engine.moves
    print(f"  History: {[str(m) for m in history]}")
    assert [m.index for m in history] == [1, 2]
    assert history[0].source == Position(0, 0)
    assert history[1].target == Position(3, 3)
    print("  [PASS] Manual moves")


def test_manual_tour_completes():
    """Replaying a full tour by hand marks the puzzle solved."""
    print("\n" + "="*60)
    print("TEST: Manual tour")
    print("="*60)

    cells = {v: (x, y) for y, row in enumerate(EXPECTED_5X5_TOUR) for x, v in enumerate(row)}
    engine = KnightEngine()
    engine.initialize(5, 0, 0)
    for i in range(24):
        (x1, y1), (x2, y2) = cells[i], cells[i + 1]
        assert engine.move(x1, y1, x2, y2)
    assert engine.is_solved()
    assert engine.steps == 24
    assert not engine.step()
    print("  [PASS] Manual tour")


def test_possible_and_warnsdorff_moves():
    """Candidate lists from the current cell."""
    print("\n" + "="*60)
    print("TEST: Candidate moves")
    print("="*60)

    engine = KnightEngine()
    engine.initialize(5, 0, 0)
    assert engine.possible_moves() == [Position(2, 1), Position(1, 2)]

    engine.initialize(5, 2, 2)
    moves = engine.possible_moves()
    assert len(moves) == 8
    ranked = engine.warnsdorff_moves()
    assert sorted(ranked, key=lambda p: (p.x, p.y)) == sorted(moves, key=lambda p: (p.x, p.y))
    print(f"  Warnsdorff order from center: {[str(p) for p in ranked]}")
    print("  [PASS] Candidate moves")


def test_terminal_state_and_snapshots():
    """Solved tours are frozen; snapshots are copies."""
    print("\n" + "="*60)
    print("TEST: Terminal state")
    print("="*60)

    engine = KnightEngine(ordering="warnsdorff")
    engine.initialize(6, 0, 0)
    engine.solve()
    steps = engine.steps
    grid = engine.visit_order

    assert not engine.step()
    assert not engine.solve()
    assert engine.steps == steps
    assert (engine.visit_order == grid).all()

    grid[:] = UNVISITED
    path = engine.path
    path.clear()
    assert engine.is_valid_solution()
    assert engine.total_moves == 36
    print("  [PASS] Terminal state")



class _RecordingHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.WARNING)
        self.records = []

    def emit(self, record):
        self.records.append(record)


def test_fixed_ordering_warns_on_large_boards():
    """Fixed ordering on 7x7 and up logs a warning; smaller or Warnsdorff does not."""
    print("\n" + "="*60)
    print("TEST: Slow search warning")
    print("="*60)

    knight_logger = logging.getLogger("src.puzzles.engines.knight")
    handler = _RecordingHandler()
    knight_logger.addHandler(handler)
    try:
        KnightEngine().initialize(6, 0, 0)
        KnightEngine(ordering="warnsdorff").initialize(8, 0, 0)
        assert handler.records == []

        KnightEngine().initialize(7, 0, 0)
        assert len(handler.records) == 1
        assert "warnsdorff" in handler.records[0].getMessage()
    finally:
        knight_logger.removeHandler(handler)
    print("  [PASS] Slow search warning")

def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# KNIGHT TESTS")
    print("#"*60)

    tests = [
        ("Solve 5x5", test_solve_five_from_corner),
        ("Warnsdorff", test_solve_warnsdorff_larger_boards),
        ("Search step", test_search_step_matches_solve),
        ("Manual step", test_manual_step_mode),
        ("Manual moves", test_manual_moves),
        ("Manual tour", test_manual_tour_completes),
        ("Candidates", test_possible_and_warnsdorff_moves),
        ("Terminal state", test_terminal_state_and_snapshots),
        ("Slow search warning", test_fixed_ordering_warns_on_large_boards),
    ]

    failed = 0
    for name, test in tests:
        try:
            test()
        except AssertionError as e:
            failed += 1
            print(f"  [FAIL] {name}: {e}")

    print()
    if failed:
        print(f"{failed} test(s) FAILED!")
        return 1
    print("All tests PASSED!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
