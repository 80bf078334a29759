"""Tests for small CLI helpers: exit code labels and command suggestions."""

from todolist.utils import exit_codes
from todolist.utils.typer_helpers import suggest_commands


def test_describe_known_codes():
    assert exit_codes.describe(exit_codes.SUCCESS) == "ok"
    assert exit_codes.describe(exit_codes.ERROR_NOT_FOUND) == "task not found"


def test_describe_unknown_code():
    assert exit_codes.describe(42) == "exit 42"


def test_suggest_commands_close_match():
    assert suggest_commands("lst", ["add", "list", "toggle"]) == ["list"]


def test_suggest_commands_nothing_close():
    assert suggest_commands("zzz", ["add", "list"]) == []
