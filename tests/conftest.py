"""Shared fixtures: the stock grid with the collectible parked out of the way."""

import random

import pytest

from environment import Cell, Grid, default_grid
from vehicle import Vehicle

# Bottom-right corner, off every path the tests drive through
PARKED = Cell(15, 1)


@pytest.fixture
def grid() -> Grid:
    g = default_grid(random.Random(1234))
    g.collectible = PARKED
    return g


@pytest.fixture
def car(grid: Grid) -> Vehicle:
    return Vehicle(grid)


def _scripted(lines):
    it = iter(lines)

    def read_line() -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read_line


@pytest.fixture
def scripted():
    """Factory for a read_line callable that yields the given lines, then EOF."""
    return _scripted
