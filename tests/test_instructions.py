"""Tests for instruction parsing."""

import pytest

from instructions import Kind, parse_instruction, parse_line, split_tokens


@pytest.mark.parametrize("token,kind,count", [
    ("F3", Kind.FORWARD, 3),
    ("B12", Kind.BACKWARD, 12),
    ("F0", Kind.FORWARD, 0),
    ("L", Kind.TURN_LEFT, 0),
    ("R", Kind.TURN_RIGHT, 0),
])
def test_valid_tokens(token: str, kind: Kind, count: int) -> None:
    instr = parse_instruction(token)
    assert instr.kind is kind
    assert instr.count == count
    assert instr.token == token


@pytest.mark.parametrize("token", ["Z9", "f3", "l", "F", "F-1", "F 3", "LR", "", "exit", "F٣", "B١٢"])
def test_invalid_tokens(token: str) -> None:
    assert parse_instruction(token).kind is Kind.INVALID


def test_split_strips_fields() -> None:
    assert split_tokens("F2, L ,B1,  R,F3") == ["F2", "L", "B1", "R", "F3"]


def test_split_trailing_fields() -> None:
    assert split_tokens("F1,") == ["F1"]
    assert split_tokens("F1,,") == ["F1"]
    assert split_tokens("F1, ") == ["F1", ""]
    assert split_tokens("F1,,R") == ["F1", "", "R"]
    assert split_tokens("") == []


@pytest.mark.parametrize("line", ["exit", "EXIT", "Exit", "exit\n"])
def test_exit_line(line: str) -> None:
    instrs = parse_line(line)
    assert [i.kind for i in instrs] == [Kind.EXIT]


def test_exit_inside_a_list_is_invalid() -> None:
    kinds = [i.kind for i in parse_line("F1, exit")]
    assert kinds == [Kind.FORWARD, Kind.INVALID]


def test_padded_exit_is_not_exit() -> None:
    assert parse_line(" exit")[0].kind is Kind.INVALID
