from __future__ import annotations
from dataclasses import dataclass

from environment import Cell, Grid, Heading, HEADING_DELTAS

DEFAULT_START = (5, 5)
DEFAULT_HEADING = Heading.UP


@dataclass(frozen=True)
class MoveResult:
    """Outcome of a single instruction, printable as `(x,y,H)` or `(x,y,H)*`."""
    x: int
    y: int
    heading: Heading
    collision: bool = False
    steps: int = 0
    collected: bool = False

    def __str__(self) -> str:
        marker = "*" if self.collision else ""
        return f"({self.x},{self.y},{self.heading.value}){marker}"


class Vehicle:
    """Car on a Grid. Position is only ever updated to a free cell."""

    def __init__(self, grid: Grid, x: int = DEFAULT_START[0], y: int = DEFAULT_START[1],
                 heading: Heading = DEFAULT_HEADING):
        if not grid.is_free(x, y):
            raise ValueError(f"Start cell ({x},{y}) is out of bounds or blocked")
        self.grid = grid
        self.x = x
        self.y = y
        self.heading = heading

    @property
    def position(self) -> Cell:
        return Cell(self.x, self.y)

    # ------------------------------------------------------------------
    def turn_left(self) -> MoveResult:
        self.heading = self.heading.turned(-1)
        return self.position_output()

    def turn_right(self) -> MoveResult:
        self.heading = self.heading.turned(1)
        return self.position_output()

    # ------------------------------------------------------------------
    def move_forward(self, n: int) -> MoveResult:
        return self._move(n, 1)

    def move_backward(self, n: int) -> MoveResult:
        return self._move(n, -1)

    def _move(self, n: int, sign: int) -> MoveResult:
        """Step up to n cells; stop early on a collision or on the collectible."""
        steps = 0
        for _ in range(n):
            nx, ny = self.next_position(sign)
            if not self.can_move_to(nx, ny):
                return self.position_output(collision=True, steps=steps)
            self.x, self.y = nx, ny
            steps += 1
            if self.grid.collectible_reached(self.position):
                return self.position_output(steps=steps, collected=True)
        return self.position_output(steps=steps)

    def next_position(self, step: int):
        dx, dy = HEADING_DELTAS[self.heading]
        return self.x + dx * step, self.y + dy * step

    def can_move_to(self, x: int, y: int) -> bool:
        return self.grid.is_free(x, y)

    # ------------------------------------------------------------------
    def position_output(self, collision: bool = False, steps: int = 0,
                        collected: bool = False) -> MoveResult:
        return MoveResult(self.x, self.y, self.heading, collision, steps, collected)
