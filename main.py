"""
Puzzle Arcade - Entry Point

Builds a puzzle engine, runs it on the puzzle worker thread, and prints
the final board together with the game summary.

Example:
    python main.py queens --size 8
    python main.py knight --size 8 --start 0 0 --ordering warnsdorff
    python main.py hanoi --disks 4 --step
"""

import sys
import json
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from PyQt5.QtCore import QCoreApplication

from src.puzzles import (
    PuzzleEngine,
    PuzzleSummary,
    create_puzzle,
    get_puzzle_info,
    get_puzzle_names,
)
from src.puzzle_worker import PuzzleWorker
from src.settings import SETTINGS_FILE, load_settings, puzzle_params


logger = logging.getLogger(__name__)


def configure_logging(debug: bool, log_file: Optional[str] = None) -> None:
    """Set up console (and optional file) logging."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )


def build_parser() -> argparse.ArgumentParser:
    epilog = "\n".join(f"  {info['name']:<8} {info['description']}" for info in get_puzzle_info())
    parser = argparse.ArgumentParser(
        description="Puzzle Arcade - N-Queens, Knight's Tour and Tower of Hanoi engines",
        epilog=f"puzzles:\n{epilog}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("puzzle", nargs="?", choices=get_puzzle_names(),
                        help="Puzzle to run (default from settings)")
    parser.add_argument("--size", type=int, help="Board size (queens, knight)")
    parser.add_argument("--start", type=int, nargs=2, metavar=("X", "Y"),
                        help="Knight start cell")
    parser.add_argument("--disks", type=int, help="Number of Hanoi disks")
    parser.add_argument("--ordering", choices=["fixed", "warnsdorff"],
                        help="Knight move ordering (fixed is the exhaustive search and can run for "
                        "hours on boards of 7x7 and up; warnsdorff finishes at once)")
    parser.add_argument("--step", action="store_true",
                        help="Drive the engine with step() instead of solve()")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="Stop a --step run after this many steps")
    parser.add_argument("--config", type=Path, default=SETTINGS_FILE,
                        help="Settings file (default: config.json)")
    parser.add_argument("--log-file", default=None, help="Also log to this file")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def build_engine(args: argparse.Namespace, settings: dict) -> PuzzleEngine:
    """
    Create and initialize the requested engine.

    CLI arguments override saved settings.

    Raises:
        ValueError: If the puzzle is unknown (ValidationFault if the
            parameters are out of range)
    """
    puzzle = args.puzzle or settings["default_puzzle"]
    params, options = puzzle_params(settings, puzzle)

    if puzzle == "hanoi":
        if args.disks is not None:
            params = (args.disks,)
    else:
        size, *start = params
        if args.size is not None:
            size = args.size
        if puzzle == "knight":
            if args.start is not None:
                start = list(args.start)
            if args.ordering is not None:
                options["ordering"] = args.ordering
        params = (size, *start)

    return create_puzzle(puzzle, *params, **options)


def render(engine: PuzzleEngine) -> str:
    """Text rendering of the engine's final state."""
    if engine.name == "queens":
        return "\n".join(
            " ".join("Q" if col == c else "." for c in range(engine.board_size))
            for col in engine.queens
        )
    if engine.name == "knight":
        return "\n".join(
            " ".join(f"{v:3d}" if v >= 0 else "  ." for v in row)
            for row in engine.visit_order.tolist()
        )
    return "\n".join(
        f"Tower {i + 1}: {list(disks)}" for i, disks in enumerate(engine.towers)
    )


def run(engine: PuzzleEngine, mode: str, step_delay_ms: int,
        max_steps: Optional[int]) -> Optional[PuzzleSummary]:
    """
    Run the engine on a PuzzleWorker and wait for its result.

    Returns:
        The summary emitted by the worker, or None if it failed
    """
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    outcome = {}

    worker = PuzzleWorker(engine, mode=mode, step_delay_ms=step_delay_ms, max_steps=max_steps)
    worker.status_changed.connect(lambda status: logger.info(f"Worker status: {status}"))
    worker.finished_with_result.connect(lambda solved, summary: outcome.update(summary=summary))
    worker.error_occurred.connect(lambda msg: logger.error(f"Worker error: {msg}"))
    worker.finished.connect(app.quit)

    worker.start()
    app.exec_()
    worker.wait()
    return outcome.get("summary")


def main() -> int:
    args = build_parser().parse_args()
    settings = load_settings(args.config)
    configure_logging(args.debug or settings.get("debug_enabled", False), args.log_file)

    try:
        engine = build_engine(args, settings)
    except ValueError as e:
        logger.error(f"Invalid parameters: {e}")
        return 2

    mode = "step" if args.step else "solve"
    summary = run(engine, mode, settings.get("step_delay_ms", 0), args.max_steps)
    if summary is None:
        return 1

    print(render(engine))
    print(json.dumps(summary.to_dict(), indent=2))
    return 0 if summary.completed else 1


if __name__ == "__main__":
    sys.exit(main())
