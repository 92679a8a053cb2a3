"""CLI for the keypad calculator core.

Usage:
    python -m keypad eval "3 + 4 × 2"             # Evaluate one expression
    python -m keypad eval "10 ÷ 4" --precision 3  # Fewer significant digits
    python -m keypad tokens "7 × −2"              # Show the token stream
    python -m keypad repl                         # Interactive calculator
    python -m keypad history --limit 20           # Recent evaluations
    python -m keypad report                       # Write HISTORY.md
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from keypad.errors import CalculatorError
from keypad.evaluator import calc_result, evaluate
from keypad.glyphs import strip_equals
from keypad.history import HistoryStore
from keypad.models import OPERATOR_CHARS, Evaluation, Number
from keypad.render import fmt_value, generate_report, render_history, render_tokens
from keypad.settings import Settings, clamp_precision, load_settings
from keypad.tokenizer import tokenize

app = typer.Typer(
    name="keypad",
    help="Four-function calculator expression evaluator",
    no_args_is_help=True,
)
console = Console(stderr=True)

# Lines starting with one of these continue from the previous answer.
_CONTINUE_CHARS = frozenset(OPERATOR_CHARS + "×÷") - {"-"}
_QUIT_WORDS = {"q", "quit", "exit"}
_CLEAR_WORDS = {"c", "clear"}


def _setup_logging(level: str) -> None:
    logger = logging.getLogger("keypad")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log tokenizer/evaluator internals"),
) -> None:
    """Load settings from KEYPAD_* environment variables."""
    settings = load_settings()
    if verbose:
        settings.log_level = "DEBUG"
    _setup_logging(settings.log_level)
    ctx.obj = settings


def _record(settings: Settings, evaluation: Evaluation, enabled: bool = True) -> None:
    if enabled and settings.history_enabled:
        HistoryStore(settings.history_path).append(evaluation)


@app.command("eval")
def cmd_eval(
    ctx: typer.Context,
    expression: str = typer.Argument(help="Expression, e.g. '3 + 4 × 2'"),
    precision: Optional[int] = typer.Option(None, "--precision", "-p", help="Significant digits to display"),
    as_json: bool = typer.Option(False, "--json", help="Print the evaluation record as JSON"),
    no_history: bool = typer.Option(False, "--no-history", help="Don't record this evaluation"),
) -> None:
    """Evaluate an expression and print the result."""
    settings: Settings = ctx.obj
    digits = clamp_precision(precision) if precision is not None else settings.precision

    result = calc_result(expression)
    _record(settings, result, enabled=not no_history)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    elif result.ok:
        typer.echo(fmt_value(result.value, digits))

    if not result.ok:
        if not as_json:
            console.print(f"[red]Error:[/red] {escape(result.message)}")
        raise typer.Exit(1)


@app.command("tokens")
def cmd_tokens(
    expression: str = typer.Argument(help="Expression to tokenize"),
) -> None:
    """Show the token sequence the evaluator would see."""
    try:
        tokens = tokenize(strip_equals(expression))
    except CalculatorError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    render_tokens(tokens, console)


@app.command("repl")
def cmd_repl(ctx: typer.Context) -> None:
    """Interactive calculator.

    A line starting with + * / × ÷ continues from the last answer; anything
    else starts a new calculation. 'c' forgets the answer, 'q' quits.
    """
    settings: Settings = ctx.obj
    answer: Optional[float] = None

    while True:
        try:
            line = console.input("[bold]>[/bold] ").strip()
        except EOFError:
            break
        if not line or line.lower() in _QUIT_WORDS:
            break
        if line.lower() in _CLEAR_WORDS:
            answer = None
            console.print("[dim]cleared[/dim]")
            continue

        line = strip_equals(line)
        if answer is not None and line and line[0] in _CONTINUE_CHARS:
            expression = f"{fmt_value(answer, settings.precision)} {line}"
            try:
                result = Evaluation(expression=expression, value=evaluate([Number(answer), *tokenize(line)]))
            except CalculatorError as e:
                result = Evaluation(expression=expression, error=e.kind, message=str(e))
        else:
            result = calc_result(line)

        _record(settings, result)
        if result.ok:
            answer = result.value
            typer.echo(fmt_value(answer, settings.precision))
        else:
            console.print(f"[red]Error:[/red] {escape(result.message)}")


@app.command("history")
def cmd_history(
    ctx: typer.Context,
    limit: int = typer.Option(20, "--limit", "-n", min=0, help="Show the N most recent entries"),
    clear: bool = typer.Option(False, "--clear", help="Delete all stored history"),
) -> None:
    """List stored evaluations."""
    settings: Settings = ctx.obj
    store = HistoryStore(settings.history_path)
    if clear:
        removed = store.clear()
        console.print(f"Removed {removed} entries from {settings.history_path}")
        return
    render_history(store.load(limit=limit), console, settings.precision)


@app.command("report")
def cmd_report(
    ctx: typer.Context,
    output: Path = typer.Option(Path("HISTORY.md"), "--output", "-o", help="Markdown file to write"),
) -> None:
    """Write a markdown report of the stored history."""
    settings: Settings = ctx.obj
    entries = HistoryStore(settings.history_path).load()
    path = generate_report(entries, output, settings.precision)
    console.print(f"Report written to {path}")


if __name__ == "__main__":
    app()
