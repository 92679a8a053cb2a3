"""Environment-driven settings for the keypad CLI.

Everything has a default, so keypad runs with an empty environment. The core
(tokenizer/evaluator) never reads settings; only the front end does.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_PRECISION = 12
# Beyond 17 significant digits a double has nothing left to show.
_MAX_PRECISION = 17

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger("keypad.settings")


def default_history_path() -> Path:
    return Path.home() / ".keypad" / "history.jsonl"


@dataclass
class Settings:
    """Resolved configuration for one CLI invocation."""

    history_path: Path
    history_enabled: bool = True
    precision: int = DEFAULT_PRECISION
    log_level: str = "WARNING"


def _parse_precision(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_PRECISION
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring KEYPAD_PRECISION=%r: not an integer", raw)
        return DEFAULT_PRECISION
    return clamp_precision(value)


def clamp_precision(value: int) -> int:
    """Keep precision within what a double can display."""
    return max(1, min(value, _MAX_PRECISION))


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from KEYPAD_* environment variables.

    Args:
        environ: Mapping to read instead of os.environ (used by tests).
    """
    env = os.environ if environ is None else environ

    history = env.get("KEYPAD_HISTORY")
    history_path = Path(history).expanduser() if history else default_history_path()

    no_history = env.get("KEYPAD_NO_HISTORY", "")
    level = env.get("KEYPAD_LOG_LEVEL", "WARNING").upper()
    if level not in _LEVELS:
        logger.warning("Ignoring KEYPAD_LOG_LEVEL=%r", level)
        level = "WARNING"

    return Settings(
        history_path=history_path,
        history_enabled=no_history in ("", "0"),
        precision=_parse_precision(env.get("KEYPAD_PRECISION")),
        log_level=level,
    )
