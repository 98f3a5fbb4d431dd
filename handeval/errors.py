"""
Error taxonomy for hand evaluation.

Every error derives from ValueError, so callers that already guard card
parsing with ``except ValueError`` keep working. All of them are raised
synchronously on malformed input, before any compiled kernel runs.
"""


class HandEvalError(ValueError):
    """Base class for all hand evaluation errors."""


class InvalidNotation(HandEvalError):
    """Card text is not a recognised rank+suit notation."""


class InvalidCode(HandEvalError):
    """Numeric card code (or card index) outside the 52-card domain."""


class DuplicateCard(HandEvalError):
    """The same card appears more than once in one hand."""


class UnsupportedHandSize(HandEvalError):
    """Hand has a card count outside 5..7."""


class InvalidRankInput(HandEvalError):
    """Low evaluator input is not exactly 5 ranks in [1, 14]."""


class OutOfRange(HandEvalError):
    """Strength (or low strength) value outside the known domain."""
