"""Scan a calculator expression into Number and Op tokens.

The subtraction/negation ambiguity is resolved here: a '-' with nothing or an
operator before it is a sign marker and is folded into the following numeral
instead of being emitted as an operator.
"""

from __future__ import annotations

import logging

from keypad.errors import InvalidCharacterError, MalformedExpressionError
from keypad.glyphs import normalize_glyphs
from keypad.models import OPERATOR_CHARS, Number, Op, Operator, Token

logger = logging.getLogger("keypad.tokenizer")

_NUMERAL_CHARS = frozenset("0123456789.")


def _numeral(digits: str, negative: bool) -> Number:
    try:
        value = float(digits)
    except ValueError:
        raise MalformedExpressionError(f"{digits!r} is not a number") from None
    return Number(-value if negative else value)


def tokenize(expression: str) -> list[Token]:
    """Convert an expression string into an ordered list of tokens.

    Display glyphs are normalised first, so text copied straight from the
    calculator display is accepted.

    Raises:
        InvalidCharacterError: on anything but digits, '.', '+-*/' or whitespace.
        MalformedExpressionError: on a numeral like '1.2.3'.
    """
    tokens: list[Token] = []
    digits = ""
    # Pending sign markers; repeated markers toggle the sign.
    signed = False
    negative = False

    def flush() -> None:
        nonlocal digits, signed, negative
        if digits:
            tokens.append(_numeral(digits, negative))
        elif signed:
            # A sign with no digits becomes a bare '-' for the evaluator to reject.
            tokens.append(Op(Operator.SUB))
        digits = ""
        signed = negative = False

    for position, char in enumerate(normalize_glyphs(expression)):
        if char in _NUMERAL_CHARS:
            digits += char
        elif char in OPERATOR_CHARS:
            if char == "-" and not digits and (signed or not tokens or isinstance(tokens[-1], Op)):
                signed = True
                negative = not negative
                continue
            flush()
            tokens.append(Op(Operator(char)))
        elif char.isspace():
            continue
        else:
            raise InvalidCharacterError(char, position)

    flush()
    logger.debug("tokenized %r -> %s", expression, " ".join(str(t) for t in tokens))
    return tokens
