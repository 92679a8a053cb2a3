"""Evaluation history: one JSON object per line.

Stored at ~/.keypad/history.jsonl by default (see keypad.settings). Lines that
fail to parse are skipped on load rather than aborting the whole read.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from keypad.models import Evaluation

logger = logging.getLogger("keypad.history")


class HistoryStore:
    """Append-only log of Evaluation records."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def append(self, evaluation: Evaluation) -> None:
        """Write one evaluation as a JSON line, creating the file if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(evaluation.to_dict(), allow_nan=False)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    def load(self, limit: Optional[int] = None) -> list[Evaluation]:
        """Read stored evaluations, oldest first.

        Args:
            limit: Keep only the most recent N entries.

        Raises:
            ValueError: if limit is negative.
        """
        if limit is not None and limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []

        entries: list[Evaluation] = []
        for lineno, line in enumerate(text.splitlines(), 1):
            line = line.strip()
            if not line:
                continue
            try:
                entries.append(Evaluation.from_dict(json.loads(line)))
            except (json.JSONDecodeError, ValueError, TypeError, AttributeError) as e:
                logger.warning("Skipping history line %d in %s: %s", lineno, self.path, e)

        if limit is not None:
            entries = entries[-limit:] if limit else []
        return entries

    def clear(self) -> int:
        """Delete all entries. Returns how many were removed."""
        count = len(self.load())
        if self.path.exists():
            self.path.unlink()
        return count
