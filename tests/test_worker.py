"""
Test script for the background puzzle worker and settings persistence.

Usage:
    python test_worker.py
"""

import sys
import json
import tempfile
from pathlib import Path

from PyQt5.QtCore import QCoreApplication, Qt

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.puzzles import HanoiEngine, KnightEngine, KnightSummary, QueensEngine
from src.puzzle_worker import PuzzleWorker
from src.settings import DEFAULT_SETTINGS, load_settings, puzzle_params, save_settings


def _app() -> QCoreApplication:
    return QCoreApplication.instance() or QCoreApplication([])


def test_worker_solve_inline():
    """run() called directly solves and emits the summary."""
    print("\n" + "="*60)
    print("TEST: Worker solve (inline)")
    print("="*60)

    _app()
    engine = QueensEngine()
    engine.initialize(8)

    statuses = []
    results = []
    worker = PuzzleWorker(engine)
    worker.status_changed.connect(statuses.append)
    worker.finished_with_result.connect(lambda solved, summary: results.append((solved, summary)))
    worker.run()

    print(f"  Statuses: {statuses}")
    assert statuses == ["Running", "Solved"]
    assert len(results) == 1
    solved, summary = results[0]
    assert solved
    assert summary.board_size == 8
    assert summary.completed
    assert not worker.is_running
    print("  [PASS] Worker solve (inline)")


def test_worker_step_mode():
    """Step mode emits one step_made per successful step."""
    print("\n" + "="*60)
    print("TEST: Worker step mode")
    print("="*60)

    _app()
    engine = HanoiEngine()
    engine.initialize(3)

    counters = []
    results = []
    worker = PuzzleWorker(engine, mode="step")
    worker.step_made.connect(counters.append)
    worker.finished_with_result.connect(lambda solved, summary: results.append(solved))
    worker.run()

    assert counters == list(range(1, 8))
    assert results == [True]

    engine.initialize(5)
    limited = PuzzleWorker(engine, mode="step", max_steps=4)
    limited.finished_with_result.connect(lambda solved, summary: results.append(solved))
    limited.run()
    assert engine.plan_index == 4
    assert results[-1] is False
    print("  [PASS] Worker step mode")


def test_worker_reports_errors():
    """Faults from the engine surface through error_occurred."""
    print("\n" + "="*60)
    print("TEST: Worker errors")
    print("="*60)

    _app()
    errors = []
    results = []
    worker = PuzzleWorker(KnightEngine())
    worker.error_occurred.connect(errors.append)
    worker.finished_with_result.connect(lambda solved, summary: results.append(solved))
    worker.run()

    print(f"  Errors: {errors}")
    assert len(errors) == 1
    assert "not been initialized" in errors[0]
    assert results == []

    try:
        PuzzleWorker(QueensEngine(), mode="forever")
    except ValueError:
        pass
    else:
        raise AssertionError("Unknown mode should be rejected")
    print("  [PASS] Worker errors")


def test_worker_thread():
    """A real background thread solves a Warnsdorff 8x8 tour."""
    print("\n" + "="*60)
    print("TEST: Worker thread")
    print("="*60)

    _app()
    engine = KnightEngine(ordering="warnsdorff")
    engine.initialize(8, 0, 0)

    results = []
    worker = PuzzleWorker(engine)
    worker.finished_with_result.connect(
        lambda solved, summary: results.append((solved, summary)), Qt.DirectConnection
    )
    worker.start()
    assert worker.wait(30000), "Worker did not finish"

    assert len(results) == 1
    solved, summary = results[0]
    assert solved
    assert isinstance(summary, KnightSummary)
    assert summary.total_moves == 64
    assert engine.is_valid_solution()
    print("  [PASS] Worker thread")


def test_settings_roundtrip():
    """Settings merge over defaults and survive bad files."""
    print("\n" + "="*60)
    print("TEST: Settings")
    print("="*60)

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "config.json"
        assert load_settings(path) == DEFAULT_SETTINGS

        settings = load_settings(path)
        settings["knight_ordering"] = "warnsdorff"
        settings["hanoi_disks"] = 7
        save_settings(settings, path)

        loaded = load_settings(path)
        assert loaded["knight_ordering"] == "warnsdorff"
        assert loaded["hanoi_disks"] == 7
        assert loaded["queens_size"] == DEFAULT_SETTINGS["queens_size"]

        path.write_text(json.dumps({"queens_size": 10}), encoding="utf-8")
        partial = load_settings(path)
        assert partial["queens_size"] == 10
        assert partial["knight_start"] == [0, 0]

        path.write_text(json.dumps({"hanoi_disks": "seven", "extra": 1}), encoding="utf-8")
        typed = load_settings(path)
        assert typed["hanoi_disks"] == DEFAULT_SETTINGS["hanoi_disks"]
        assert typed["extra"] == 1

        path.write_text("{not json", encoding="utf-8")
        assert load_settings(path) == DEFAULT_SETTINGS

    params, options = puzzle_params(DEFAULT_SETTINGS, "knight")
    assert params == (8, 0, 0)
    assert options == {"ordering": "fixed"}
    assert puzzle_params(DEFAULT_SETTINGS, "hanoi") == ((5,), {})
    try:
        puzzle_params(DEFAULT_SETTINGS, "sudoku")
        assert False, "unknown puzzle accepted"
    except ValueError:
        pass
    print("  [PASS] Settings")


def main():
    """Run all tests."""
    print("\n" + "#"*60)
    print("# WORKER TESTS")
    print("#"*60)

    tests = [
        ("Worker solve", test_worker_solve_inline),
        ("Worker step mode", test_worker_step_mode),
        ("Worker errors", test_worker_reports_errors),
        ("Worker thread", test_worker_thread),
        ("Settings", test_settings_roundtrip),
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
