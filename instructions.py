"""
instructions.py – parse one line of user input into vehicle instructions.

Grammar (case-sensitive, one token per comma-separated field)::

    F<digits>   move forward
    B<digits>   move backward
    L           turn left
    R           turn right

Anything else is an invalid instruction. The whole line ``exit`` (any case)
ends the session.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import List

EXIT_COMMAND = "exit"

_MOVE_RE = re.compile(r"^([FB])([0-9]+)$")


class Kind(Enum):
    FORWARD = auto()
    BACKWARD = auto()
    TURN_LEFT = auto()
    TURN_RIGHT = auto()
    EXIT = auto()
    INVALID = auto()


@dataclass(frozen=True)
class Instruction:
    kind: Kind
    token: str
    count: int = 0


def split_tokens(line: str) -> List[str]:
    """Split on commas and strip each field.

    Trailing empty fields are dropped before stripping, so ``"F1,"`` gives one
    token while ``"F1, "`` gives an empty second token.
    """
    fields = line.split(",")
    while fields and fields[-1] == "":
        fields.pop()
    return [f.strip() for f in fields]


def parse_instruction(token: str) -> Instruction:
    m = _MOVE_RE.match(token)
    if m:
        kind = Kind.FORWARD if m.group(1) == "F" else Kind.BACKWARD
        return Instruction(kind, token, int(m.group(2)))
    if token == "L":
        return Instruction(Kind.TURN_LEFT, token)
    if token == "R":
        return Instruction(Kind.TURN_RIGHT, token)
    return Instruction(Kind.INVALID, token)


def parse_line(line: str) -> List[Instruction]:
    line = line.rstrip("\r\n")
    if line.lower() == EXIT_COMMAND:
        return [Instruction(Kind.EXIT, line)]
    return [parse_instruction(tok) for tok in split_tokens(line)]
