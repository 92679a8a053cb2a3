"""Error types raised by the keypad core.

Both concrete errors subclass CalculatorError (itself a ValueError), so a
caller can catch the family in one clause and still branch on `kind`.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable error classification."""

    INVALID_CHARACTER = "invalid-character"
    MALFORMED_EXPRESSION = "malformed-expression"


class CalculatorError(ValueError):
    """Base class for every error the core raises."""

    kind: ErrorKind


class InvalidCharacterError(CalculatorError):
    """A character outside digits, '.', '+-*/' and whitespace."""

    kind = ErrorKind.INVALID_CHARACTER

    def __init__(self, character: str, position: int) -> None:
        self.character = character
        self.position = position
        super().__init__(f"Invalid character in expression: {character!r} at position {position}")


class MalformedExpressionError(CalculatorError):
    """An operator is missing an operand, or a numeral is not a number."""

    kind = ErrorKind.MALFORMED_EXPRESSION

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid expression: {reason}")
