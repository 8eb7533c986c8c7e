"""Exceptions raised by the pattern engine.

All of them derive from ``ValueError`` so callers that only care about
"bad input" can catch that, while the engine front ends can tell the
cases apart.
"""


class PatternError(ValueError):
    """Base class for every validation failure in mandalagen."""


class InvalidSizeError(PatternError):
    """Canvas width or height is not a positive number of pixels."""


class EmptyPaletteError(PatternError):
    """A palette with zero colors was handed to the engine."""


class InvalidArgumentError(PatternError):
    """An argument is outside the range an operation accepts."""


class UnknownPatternKindError(InvalidArgumentError):
    """A pattern kind string does not name one of the known kinds."""
