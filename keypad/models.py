"""Data models for the keypad calculator core.

Operator enum, the two token variants (Number, Op), and the Evaluation
record, the typed structures that flow through tokenizer → evaluator →
history → CLI.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Union

from keypad.errors import ErrorKind


class Operator(str, Enum):
    """The four binary operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def binds_tight(self) -> bool:
        """True for the high-precedence tier (* and /)."""
        return self in (Operator.MUL, Operator.DIV)


OPERATOR_CHARS = "".join(op.value for op in Operator)


@dataclass(frozen=True)
class Number:
    """A numeric token."""

    value: float

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class Op:
    """An operator token."""

    operator: Operator

    def __str__(self) -> str:
        return self.operator.value


Token = Union[Number, Op]


def _timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def _encode_float(value: Optional[float]) -> Union[float, str, None]:
    """JSON-safe float: NaN and infinities become strings."""
    if value is None:
        return None
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return value


def _decode_float(raw) -> Optional[float]:
    if raw is None:
        return None
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValueError(f"not a number: {raw!r}")
    return float(raw)


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one expression: a value or an error, never both."""

    expression: str
    value: Optional[float] = None
    error: Optional[ErrorKind] = None
    message: str = ""
    timestamp: str = field(default_factory=_timestamp)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "expression": self.expression,
            "value": _encode_float(self.value),
            "error": self.error.value if self.error else None,
            "message": self.message,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, d: dict) -> Evaluation:
        """Deserialize from a JSON dict (one history line)."""
        error = d.get("error")
        return cls(
            expression=d.get("expression", ""),
            value=_decode_float(d.get("value")),
            error=ErrorKind(error) if error else None,
            message=d.get("message", ""),
            timestamp=d.get("timestamp", ""),
        )
