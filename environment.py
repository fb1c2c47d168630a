from __future__ import annotations
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

# Default scenario size
GRID_WIDTH = 15
GRID_HEIGHT = 10

# Cell glyphs used by Grid.render
EMPTY = "."
OBSTACLE = "X"
COLLECTIBLE = "O"


@dataclass(frozen=True)
class Cell:
    x: int
    y: int


class Heading(Enum):
    UP = "U"
    RIGHT = "R"
    DOWN = "D"
    LEFT = "L"

    def turned(self, steps: int) -> "Heading":
        """Rotate by `steps` quarter turns, positive is clockwise."""
        order = list(Heading)
        return order[(order.index(self) + steps) % len(order)]

    @property
    def glyph(self) -> str:
        return HEADING_GLYPHS[self]


# Unit step per heading; y grows upwards
HEADING_DELTAS: Dict[Heading, Tuple[int, int]] = {
    Heading.UP: (0, 1),
    Heading.RIGHT: (1, 0),
    Heading.DOWN: (0, -1),
    Heading.LEFT: (-1, 0),
}

HEADING_GLYPHS: Dict[Heading, str] = {
    Heading.UP: "^",
    Heading.RIGHT: ">",
    Heading.DOWN: "V",
    Heading.LEFT: "<",
}

# Default layout: three wall segments and two single obstacles.
# (5, 12) lies outside the default 10-row grid and is kept as-is.
DEFAULT_WALLS: List[Tuple[int, int, int, int]] = [
    (3, 8, 5, 8),
    (6, 8, 8, 8),
    (2, 10, 4, 10),
]
DEFAULT_OBSTACLES: List[Tuple[int, int]] = [(4, 6), (5, 12)]


class Grid:
    """Bounded grid with static obstacles and a single collectible.

    Coordinates are 1-based: x runs 1..width left to right, y runs 1..height
    bottom to top.
    """

    def __init__(self, width: int = GRID_WIDTH, height: int = GRID_HEIGHT,
                 walls: Iterable[Tuple[int, int, int, int]] = (),
                 obstacles: Iterable[Tuple[int, int]] = (),
                 rng: Optional[random.Random] = None):
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.obstacles = set()
        for x1, y1, x2, y2 in walls:
            self.add_wall(x1, y1, x2, y2)
        for x, y in obstacles:
            self.add_obstacle(x, y)
        # layout first, so the collectible never lands on an obstacle
        self.collectible = self.spawn_collectible()

    # ------------------------------------------------------------------
    def add_wall(self, x1: int, y1: int, x2: int, y2: int):
        """Add every cell of a horizontal or vertical segment, endpoints included."""
        if x1 == x2:
            for y in range(min(y1, y2), max(y1, y2) + 1):
                self.obstacles.add(Cell(x1, y))
        elif y1 == y2:
            for x in range(min(x1, x2), max(x1, x2) + 1):
                self.obstacles.add(Cell(x, y1))
        else:
            raise ValueError(f"Wall ({x1},{y1})-({x2},{y2}) is neither horizontal nor vertical")

    def add_obstacle(self, x: int, y: int):
        self.obstacles.add(Cell(x, y))

    # ------------------------------------------------------------------
    def has_obstacle(self, x: int, y: int) -> bool:
        return Cell(x, y) in self.obstacles

    def within_bounds(self, x: int, y: int) -> bool:
        return 1 <= x <= self.width and 1 <= y <= self.height

    def is_free(self, x: int, y: int) -> bool:
        """True if a vehicle may occupy (x, y)."""
        return self.within_bounds(x, y) and not self.has_obstacle(x, y)

    def free_cells(self) -> List[Cell]:
        return [Cell(x, y)
                for y in range(1, self.height + 1)
                for x in range(1, self.width + 1)
                if not self.has_obstacle(x, y)]

    # ------------------------------------------------------------------
    def spawn_collectible(self) -> Cell:
        """Sample uniform in-bounds cells until one is obstacle-free.

        Raises ValueError when every cell is blocked, since sampling could
        never terminate.
        """
        if not self.free_cells():
            raise ValueError(
                f"No free cell left on the {self.width}x{self.height} grid to place a collectible")
        while True:
            x = self.rng.randint(1, self.width)
            y = self.rng.randint(1, self.height)
            if not self.has_obstacle(x, y):
                return Cell(x, y)

    def reset_collectible(self) -> Cell:
        self.collectible = self.spawn_collectible()
        return self.collectible

    def collectible_reached(self, position: Cell) -> bool:
        return position == self.collectible

    # ------------------------------------------------------------------
    def render(self, position: Cell, heading: Heading, score: int) -> str:
        """Draw the board with the highest row first so that up is up.

        Later paints win: obstacle, then collectible, then the vehicle.
        """
        canvas = np.full((self.height, self.width), EMPTY, dtype="<U1")
        for cell in self.obstacles:
            if self.within_bounds(cell.x, cell.y):
                canvas[cell.y - 1, cell.x - 1] = OBSTACLE
        canvas[self.collectible.y - 1, self.collectible.x - 1] = COLLECTIBLE
        canvas[position.y - 1, position.x - 1] = heading.glyph

        rows = ["".join(row) for row in canvas[::-1]]
        return "\n".join(["", f"-- Score: {score} --", "", *rows, ""])


def default_grid(rng: Optional[random.Random] = None) -> Grid:
    """15x10 grid with the stock wall layout."""
    return Grid(GRID_WIDTH, GRID_HEIGHT, DEFAULT_WALLS, DEFAULT_OBSTACLES, rng=rng)
