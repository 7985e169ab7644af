"""
Puzzle Factory Module - Registry and factory for engine instantiation.
"""

from typing import Dict, List, Type, Any

from .base import PuzzleEngine


# Global registry of puzzle engines, keyed by PuzzleEngine.name
_PUZZLES: Dict[str, Type[PuzzleEngine]] = {}


def register_puzzle(cls: Type[PuzzleEngine]) -> Type[PuzzleEngine]:
    """
    Decorator to register a puzzle engine class.

    Usage:
        @register_puzzle
        class MyEngine(PuzzleEngine):
            name = "my_puzzle"
            ...

    Raises:
        ValueError: If another class already uses the same name
    """
    existing = _PUZZLES.get(cls.name)
    if existing is not None and existing is not cls:
        raise ValueError(f"Puzzle name {cls.name!r} already registered by {existing.__name__}")
    _PUZZLES[cls.name] = cls
    return cls


def get_puzzle_class(name: str) -> Type[PuzzleEngine]:
    """
    Look up an engine class by name.

    Raises:
        ValueError: If puzzle name not found
    """
    if name not in _PUZZLES:
        available = ", ".join(_PUZZLES.keys())
        raise ValueError(f"Unknown puzzle: {name}. Available: {available}")
    return _PUZZLES[name]


def create_puzzle(name: str, *params: int, **kwargs: Any) -> PuzzleEngine:
    """
    Create an engine by name, optionally initializing it.

    Args:
        name: Puzzle name ("queens", "knight", "hanoi")
        *params: If given, passed to initialize()
        **kwargs: Engine constructor options (e.g. ordering="warnsdorff")

    Returns:
        Engine instance, initialized if params were given

    Raises:
        ValueError: If puzzle name not found
        ValidationFault: If params are out of range
    """
    engine = get_puzzle_class(name)(**kwargs)
    if params:
        engine.initialize(*params)
    return engine


def get_puzzle_names() -> List[str]:
    """List registered puzzle names in registration order."""
    return list(_PUZZLES.keys())


def get_puzzle_info() -> List[Dict[str, str]]:
    """
    Get name and description for all registered puzzles.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    return [
        {"name": cls.name, "description": cls.description}
        for cls in _PUZZLES.values()
    ]


def get_default_puzzle_name() -> str:
    """
    Get the default puzzle name.

    Returns:
        "queens" if available, else first registered
    """
    if "queens" in _PUZZLES:
        return "queens"
    return next(iter(_PUZZLES), "")
