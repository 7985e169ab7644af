"""
Puzzles Package - Combinatorial puzzle engines with a shared lifecycle.

Three independent engines (N-Queens, Knight's Tour, Tower of Hanoi)
expose the same initialize/step/solve/reset contract so a UI, CLI or
test harness can drive them manually or automatically.

Public API:
    - PuzzleEngine: Abstract capability interface
    - PuzzleLifecycle: Steps/solved/timestamp bookkeeping owned by each engine
    - QueensEngine, KnightEngine, HanoiEngine: Concrete engines
    - Position, KnightMove, HanoiMove: Immutable move records
    - PuzzleSummary and subclasses: End-of-game results for storage
    - ValidationFault, StateFault: Raised faults
    - create_puzzle(): Factory function
    - get_puzzle_names(): List available puzzles
    - get_puzzle_class(): Look up an engine class by name
    - get_puzzle_info(): Get puzzle metadata

Usage:
    from src.puzzles import create_puzzle

    engine = create_puzzle("hanoi")
    engine.initialize(3)
    while engine.step():
        print(engine.towers)

    summary = engine.create_summary(engine.is_solved())
    record = summary.to_dict()
"""

# Core data structures
from .lifecycle import PuzzleLifecycle
from .move import Position, KnightMove, HanoiMove
from .board import KNIGHT_OFFSETS, UNVISITED, VisitGrid, Tower
from .summary import PuzzleSummary, QueensSummary, KnightSummary, HanoiSummary
from .errors import PuzzleError, ValidationFault, StateFault

# Engine framework
from .base import PuzzleEngine
from .factory import (
    create_puzzle,
    get_puzzle_names,
    get_puzzle_class,
    get_puzzle_info,
    get_default_puzzle_name,
    register_puzzle,
)

# Import engines to register them
from .engines import QueensEngine, KnightEngine, HanoiEngine, build_optimal_plan

__all__ = [
    # Data structures
    "PuzzleLifecycle",
    "Position",
    "KnightMove",
    "HanoiMove",
    "KNIGHT_OFFSETS",
    "UNVISITED",
    "VisitGrid",
    "Tower",
    "PuzzleSummary",
    "QueensSummary",
    "KnightSummary",
    "HanoiSummary",
    # Errors
    "PuzzleError",
    "ValidationFault",
    "StateFault",
    # Engine framework
    "PuzzleEngine",
    "create_puzzle",
    "get_puzzle_names",
    "get_puzzle_class",
    "get_puzzle_info",
    "get_default_puzzle_name",
    "register_puzzle",
    # Engines
    "QueensEngine",
    "KnightEngine",
    "HanoiEngine",
    "build_optimal_plan",
]
