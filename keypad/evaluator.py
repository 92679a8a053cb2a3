"""Evaluate a token sequence with two-tier precedence.

One forward pass builds an accumulator of terms. '*' and '/' pop the last
term and push the combined value in place, so they bind tighter than '+' and
'-', which only contribute (possibly negated) terms. The result is the sum of
the accumulator.
"""

from __future__ import annotations

import logging
import math
import operator
from functools import reduce
from typing import Optional, Sequence

from keypad.errors import CalculatorError, MalformedExpressionError
from keypad.glyphs import strip_equals
from keypad.models import Evaluation, Number, Op, Operator, Token
from keypad.tokenizer import tokenize

logger = logging.getLogger("keypad.evaluator")


def _divide(left: float, right: float) -> float:
    """IEEE-754 division: x/0 is a signed infinity, 0/0 is NaN."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


_TIGHT_OPS = {
    Operator.MUL: operator.mul,
    Operator.DIV: _divide,
}


def _operand_after(tokens: Sequence[Token], i: int, op: Operator) -> float:
    """Return the number at tokens[i + 1] or raise."""
    nxt = tokens[i + 1] if i + 1 < len(tokens) else None
    match nxt:
        case Number(value=value):
            return value
        case None:
            raise MalformedExpressionError(f'expected a number after "{op.value}", got end of input')
        case _:
            raise MalformedExpressionError(f'expected a number after "{op.value}", got "{nxt}"')


def evaluate(tokens: Sequence[Token]) -> float:
    """Evaluate tokens produced by tokenize().

    Raises:
        MalformedExpressionError: when an operator is missing an operand.
    """
    processed: list[float] = []
    i = 0
    while i < len(tokens):
        match tokens[i]:
            case Number(value=value):
                processed.append(value)
            case Op(operator=Operator.ADD):
                # Addition is the final sum; '+' only separates terms.
                if i == 0 or not isinstance(tokens[i - 1], Number):
                    raise MalformedExpressionError('expected a number before "+"')
                _operand_after(tokens, i, Operator.ADD)
            case Op(operator=Operator.SUB):
                processed.append(-_operand_after(tokens, i, Operator.SUB))
                i += 1
            case Op(operator=op):
                if not processed or not isinstance(tokens[i - 1], Number):
                    raise MalformedExpressionError(f'expected numbers around "{op.value}"')
                right = _operand_after(tokens, i, op)
                processed.append(_TIGHT_OPS[op](processed.pop(), right))
                i += 1
            case token:
                raise MalformedExpressionError(f"unexpected token {token!r}")
        i += 1

    result = reduce(operator.add, processed, 0.0)
    logger.debug("accumulator %s -> %r", processed, result)
    return result


def calc(expression: str) -> float:
    """Evaluate a calculator expression string.

    Raises InvalidCharacterError or MalformedExpressionError.
    """
    return evaluate(tokenize(expression))


def calc_result(expression: str, *, timestamp: Optional[str] = None) -> Evaluation:
    """Evaluate an expression without raising; the outcome carries any error.

    A trailing '=' (as left on the display after an answer) is ignored.
    """
    extra = {"timestamp": timestamp} if timestamp else {}
    try:
        value = calc(strip_equals(expression))
    except CalculatorError as e:
        logger.debug("evaluation of %r failed: %s", expression, e)
        return Evaluation(expression=expression, error=e.kind, message=str(e), **extra)
    return Evaluation(expression=expression, value=value, **extra)
