"""keypad: expression core for a four-function calculator.

Turns calculator input such as "3 + 4 × 2" or "7 × −2" into a float, giving
* and / precedence over + and - and telling unary minus apart from
subtraction. No parentheses, no powers, plain IEEE-754 floats.

Usage:
    python -m keypad eval "10 ÷ 2 − 3"   # Evaluate one expression
    python -m keypad repl                # Interactive calculator

    >>> from keypad import calc
    >>> calc("3+4×2")
    11.0
"""

from keypad.errors import CalculatorError, ErrorKind, InvalidCharacterError, MalformedExpressionError
from keypad.evaluator import calc, calc_result, evaluate
from keypad.models import Evaluation, Number, Op, Operator, Token
from keypad.tokenizer import tokenize

__all__ = [
    "CalculatorError", "ErrorKind", "InvalidCharacterError", "MalformedExpressionError",
    "calc", "calc_result", "evaluate", "tokenize",
    "Evaluation", "Number", "Op", "Operator", "Token",
]
