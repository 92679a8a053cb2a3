"""Display glyph normalisation.

The calculator display shows '×', '÷' and '−' (U+2212 MINUS SIGN); the
evaluator only understands their ASCII counterparts.
"""

from __future__ import annotations

DISPLAY_GLYPHS: dict[str, str] = {
    "×": "*",  # MULTIPLICATION SIGN
    "÷": "/",  # DIVISION SIGN
    "−": "-",  # MINUS SIGN
}

_TRANSLATION = str.maketrans(DISPLAY_GLYPHS)


def normalize_glyphs(expression: str) -> str:
    """Replace display operator glyphs with '*', '/' and '-'."""
    return expression.translate(_TRANSLATION)


def strip_equals(expression: str) -> str:
    """Drop a trailing '=' the way the display appends it after an answer."""
    text = expression.rstrip()
    if text.endswith("="):
        text = text[:-1]
    return text
