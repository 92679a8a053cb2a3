"""CLI tests via Typer's CliRunner. History goes to a temp file per test."""

import json

import pytest
from typer.testing import CliRunner

from keypad.__main__ import app
from keypad.history import HistoryStore

runner = CliRunner()


@pytest.fixture
def history_path(tmp_path, monkeypatch):
    path = tmp_path / "history.jsonl"
    monkeypatch.setenv("KEYPAD_HISTORY", str(path))
    monkeypatch.delenv("KEYPAD_NO_HISTORY", raising=False)
    monkeypatch.delenv("KEYPAD_PRECISION", raising=False)
    return path


# --- eval (7 tests) ---

def test_eval_prints_result(history_path):
    result = runner.invoke(app, ["eval", "3 + 4 × 2"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "11"


def test_eval_strips_equals(history_path):
    result = runner.invoke(app, ["eval", "10 ÷ 4 ="])
    assert result.exit_code == 0
    assert result.stdout.strip() == "2.5"


def test_eval_precision(history_path):
    result = runner.invoke(app, ["eval", "2/3", "--precision", "3"])
    assert result.stdout.strip() == "0.667"


def test_eval_error_exit_code(history_path):
    result = runner.invoke(app, ["eval", "3+"])
    assert result.exit_code == 1
    assert "Invalid expression" in result.output


def test_eval_json(history_path):
    result = runner.invoke(app, ["eval", "5/0", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["value"] == "inf"
    assert data["error"] is None


def test_eval_records_history(history_path):
    runner.invoke(app, ["eval", "1+1"])
    runner.invoke(app, ["eval", "abc"])
    runner.invoke(app, ["eval", "2+2", "--no-history"])
    entries = HistoryStore(history_path).load()
    assert [e.expression for e in entries] == ["1+1", "abc"]


def test_history_disabled_by_env(history_path, monkeypatch):
    monkeypatch.setenv("KEYPAD_NO_HISTORY", "1")
    runner.invoke(app, ["eval", "1+1"])
    assert not history_path.exists()


# --- tokens (2 tests) ---

def test_tokens_table(history_path):
    result = runner.invoke(app, ["tokens", "7 × −2"])
    assert result.exit_code == 0
    assert "Tokens" in result.output
    assert "-2.0" in result.output


def test_tokens_invalid(history_path):
    result = runner.invoke(app, ["tokens", "1 + x"])
    assert result.exit_code == 1
    assert "Invalid character" in result.output


# --- repl (3 tests) ---

def test_repl_continues_from_answer(history_path):
    result = runner.invoke(app, ["repl"], input="3 + 4\n× 2\nq\n")
    assert result.exit_code == 0
    assert result.stdout.split()[-2:] == ["7", "14"]


def test_repl_minus_starts_fresh(history_path):
    result = runner.invoke(app, ["repl"], input="10\n-4 + 1\n")
    assert result.exit_code == 0
    assert result.stdout.split()[-1] == "-3"


def test_repl_survives_errors(history_path):
    result = runner.invoke(app, ["repl"], input="abc\nc\n÷ 2\n6 ÷ 2\n")
    assert result.exit_code == 0
    assert "Invalid character" in result.output
    # "÷ 2" after clearing has no answer to continue from
    assert "Invalid expression" in result.output
    assert result.stdout.split()[-1] == "3"


# --- history / report (5 tests) ---

def test_history_lists_entries(history_path):
    runner.invoke(app, ["eval", "6 × 7"])
    result = runner.invoke(app, ["history"])
    assert result.exit_code == 0
    assert "42" in result.output


def test_history_negative_limit_rejected(history_path):
    runner.invoke(app, ["eval", "1"])
    result = runner.invoke(app, ["history", "--limit", "-1"])
    assert result.exit_code == 2


def test_history_skips_bad_lines(history_path):
    runner.invoke(app, ["eval", "6 × 7"])
    with open(history_path, "a", encoding="utf-8") as f:
        f.write('{"expression": "x", "value": [1]}\n')
    result = runner.invoke(app, ["history"])
    assert result.exit_code == 0
    assert "42" in result.output


def test_history_clear(history_path):
    runner.invoke(app, ["eval", "1"])
    result = runner.invoke(app, ["history", "--clear"])
    assert result.exit_code == 0
    assert "Removed 1" in result.output
    assert HistoryStore(history_path).load() == []


def test_report_written(history_path, tmp_path):
    runner.invoke(app, ["eval", "10÷2−3"])
    out = tmp_path / "report.md"
    result = runner.invoke(app, ["report", "--output", str(out)])
    assert result.exit_code == 0
    assert "| 2 |" in out.read_text(encoding="utf-8")
