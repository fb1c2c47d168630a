"""Tests for car movement and collision rules."""

import pytest

from environment import Cell, Grid, Heading
from vehicle import Vehicle


def test_turns_keep_position(car: Vehicle) -> None:
    assert str(car.turn_right()) == "(5,5,R)"
    assert str(car.turn_right()) == "(5,5,D)"
    assert str(car.turn_left()) == "(5,5,R)"
    assert str(car.turn_left()) == "(5,5,U)"
    assert str(car.turn_left()) == "(5,5,L)"
    assert car.position == Cell(5, 5)


@pytest.mark.parametrize("heading", list(Heading))
def test_left_right_are_inverse(grid: Grid, heading: Heading) -> None:
    car = Vehicle(grid, 5, 5, heading)
    car.turn_left()
    car.turn_right()
    assert car.heading is heading
    car.turn_right()
    car.turn_left()
    assert car.heading is heading


def test_forward_unobstructed(car: Vehicle) -> None:
    car.turn_right()
    result = car.move_forward(3)
    assert str(result) == "(8,5,R)"
    assert not result.collision
    assert result.steps == 3


def test_backward_keeps_heading(car: Vehicle) -> None:
    result = car.move_backward(2)
    assert str(result) == "(5,3,U)"
    assert car.heading is Heading.UP


def test_zero_steps_is_a_no_op(car: Vehicle) -> None:
    assert str(car.move_forward(0)) == "(5,5,U)"


def test_forward_stops_at_wall(car: Vehicle) -> None:
    """Wall row y=8 spans x=3..8, so heading up from (5,5) stops at y=7."""
    result = car.move_forward(10)
    assert str(result) == "(5,7,U)*"
    assert result.collision
    assert result.steps == 2


def test_obstacle_adjacent_leaves_position(grid: Grid) -> None:
    car = Vehicle(grid, 4, 5, Heading.UP)
    result = car.move_forward(1)
    assert str(result) == "(4,5,U)*"
    assert car.position == Cell(4, 5)


def test_boundary_leaves_position(grid: Grid) -> None:
    car = Vehicle(grid, 1, 3, Heading.LEFT)
    assert str(car.move_forward(1)) == "(1,3,L)*"
    assert car.position == Cell(1, 3)

    car = Vehicle(grid, 1, 3, Heading.RIGHT)
    assert str(car.move_backward(5)) == "(1,3,R)*"


def test_top_edge_collision(grid: Grid) -> None:
    car = Vehicle(grid, 10, 9, Heading.UP)
    assert str(car.move_forward(4)) == "(10,10,U)*"


def test_move_halts_on_collectible(grid: Grid) -> None:
    grid.collectible = Cell(7, 5)
    car = Vehicle(grid, 5, 5, Heading.RIGHT)
    result = car.move_forward(6)
    assert str(result) == "(7,5,R)"
    assert result.collected
    assert not result.collision
    assert result.steps == 2


def test_collision_marker_differs_from_success(grid: Grid) -> None:
    car = Vehicle(grid, 5, 7, Heading.UP)
    blocked = car.move_forward(1)
    car.turn_left()
    car.turn_right()
    ok = car.move_forward(0)
    assert str(blocked) == "(5,7,U)*"
    assert str(ok) == "(5,7,U)"


def test_start_on_obstacle_rejected(grid: Grid) -> None:
    with pytest.raises(ValueError):
        Vehicle(grid, 4, 6)
    with pytest.raises(ValueError):
        Vehicle(grid, 0, 1)
