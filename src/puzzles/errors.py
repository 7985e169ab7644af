"""
Errors Module - Fault taxonomy shared by all puzzle engines.

Rule violations (a diagonal clash, an oversized disk, a non-knight jump)
are not errors: engines report them by returning False. Only the two
faults below are raised.
"""


class PuzzleError(Exception):
    """Base class for puzzle engine faults."""


class ValidationFault(PuzzleError, ValueError):
    """Parameters outside the documented domain at initialize time."""


class StateFault(PuzzleError, RuntimeError):
    """Operation requested before the engine was initialized."""
