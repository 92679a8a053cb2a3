"""Keypad rendering: value formatting, Rich tables, markdown history report.

Everything that turns core results into something a person reads lives here,
so the core stays free of presentation concerns.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from keypad.models import Evaluation, Number, Op, Token
from keypad.settings import DEFAULT_PRECISION


def fmt_value(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Format a result the way the calculator display shows it.

    Integral values drop the fractional part; non-finite values use the
    display's Infinity/NaN spelling.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == int(value) and abs(value) < 10 ** precision:
        # -0.0 shows as 0
        return str(int(value))
    return f"{value:.{precision}g}"


def _fmt_outcome(e: Evaluation, precision: int) -> str:
    if e.ok and e.value is not None:
        return fmt_value(e.value, precision)
    return e.message or (e.error.value if e.error else "--")


def render_tokens(tokens: Sequence[Token], console: Console) -> None:
    """Render a Rich table of a token sequence."""
    if not tokens:
        console.print("[yellow]No tokens.[/yellow]")
        return

    table = Table(title="Tokens", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Kind", min_width=8)
    table.add_column("Value", justify="right", min_width=10)
    table.add_column("Precedence", style="dim")

    for i, token in enumerate(tokens):
        match token:
            case Number(value=value):
                table.add_row(str(i), "[green]number[/green]", repr(value), "")
            case Op(operator=op):
                tier = "high" if op.binds_tight else "low"
                table.add_row(str(i), "[cyan]operator[/cyan]", op.value, tier)

    console.print(table)


def render_history(
    entries: Sequence[Evaluation],
    console: Console,
    precision: int = DEFAULT_PRECISION,
) -> None:
    """Render stored evaluations, oldest first."""
    if not entries:
        console.print("[yellow]No history yet. Evaluate an expression first.[/yellow]")
        return

    table = Table(title="History", show_header=True, header_style="bold")
    table.add_column("Time", style="dim")
    table.add_column("Expression", min_width=16)
    table.add_column("Result", justify="right", min_width=10)

    for e in entries:
        outcome = escape(_fmt_outcome(e, precision))
        if not e.ok:
            outcome = f"[red]{outcome}[/red]"
        table.add_row(e.timestamp or "--", escape(e.expression), outcome)

    console.print()
    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Markdown report generation
# ---------------------------------------------------------------------------

def _md_escape(text: str) -> str:
    return text.replace("|", "\\|")


def generate_report(
    entries: Sequence[Evaluation],
    out: Path,
    precision: int = DEFAULT_PRECISION,
) -> Path:
    """Write a markdown table of evaluations to `out`.

    Returns the path written.
    """
    lines: list[str] = []
    lines.append("# Keypad History")
    lines.append("")
    lines.append(f"*Generated {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}*")
    lines.append("")

    if not entries:
        lines.append("No evaluations recorded.")
    else:
        failed = sum(1 for e in entries if not e.ok)
        lines.append(f"{len(entries)} evaluations, {failed} failed.")
        lines.append("")
        lines.append("| # | Timestamp | Expression | Result |")
        lines.append("|---|-----------|------------|--------|")
        for i, e in enumerate(entries, 1):
            outcome = _fmt_outcome(e, precision)
            if not e.ok:
                outcome = f"**{outcome}**"
            lines.append(
                f"| {i} | `{e.timestamp}` | `{_md_escape(e.expression)}` | {_md_escape(outcome)} |"
            )

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return out
