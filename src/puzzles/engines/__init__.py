"""
Engines Package - Concrete puzzle engine implementations.

Import this module to register all built-in engines.
"""

from .queens import QueensEngine
from .knight import KnightEngine
from .hanoi import HanoiEngine, build_optimal_plan

__all__ = [
    "QueensEngine",
    "KnightEngine",
    "HanoiEngine",
    "build_optimal_plan",
]
