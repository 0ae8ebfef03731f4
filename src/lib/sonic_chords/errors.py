"""
Exception types raised by the engine.
Each one is also a built-in exception so callers may catch either.
"""


class SonicChordsError(Exception):
    """Base class for all engine errors."""


class UnknownIdentifierError(SonicChordsError, KeyError):
    """A note, mode, naming scheme or strategy name is not known."""

    def __str__(self):
        # KeyError quotes its argument, keep the plain message instead
        return str(self.args[0]) if self.args else ""


class MalformedScaleError(SonicChordsError, ValueError):
    """A scale handed to the chord engine is not 7 well-formed notes."""


class QualityResolutionError(SonicChordsError, RuntimeError):
    """A resolver template met an interval combination with no quality."""


class PreconditionError(SonicChordsError, ValueError):
    """An argument violates a documented precondition."""


class SpiralRangeError(SonicChordsError, IndexError):
    """A linear index ran off either end of the note table."""
