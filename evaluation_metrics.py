import json
import pandas as pd
import numpy as np
from pathlib import Path
from typing import Dict, List, Optional
from dataclasses import dataclass, asdict
from queue import PriorityQueue
from environment import Cell, Grid, HEADING_DELTAS

@dataclass
class EvaluationMetrics:
    turns: int
    instructions: int
    invalid_instructions: int
    collisions: int
    items_collected: int
    cells_travelled: int
    revisit_rate: float
    average_steps_per_item: Optional[float]
    optimal_cells_for_items: Optional[int]
    path_efficiency: Optional[float]

ACTION_LOG_COLUMNS = ["turn", "token", "kind", "x", "y", "heading",
                      "steps", "is_collision", "collected", "valid"]

def _manhattan_distance(a: Cell, b: Cell) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)

def _get_neighbors(grid: Grid, cell: Cell) -> List[Cell]:
    neighbors = []
    for dx, dy in HEADING_DELTAS.values():
        nx, ny = cell.x + dx, cell.y + dy
        if grid.is_free(nx, ny):
            neighbors.append(Cell(nx, ny))
    return neighbors

def shortest_path_length(grid: Grid, start: Cell, goal: Cell) -> Optional[int]:
    """Fewest unit moves from start to goal using A* search, None if unreachable."""
    frontier = PriorityQueue()
    # Use a counter to ensure unique ordering when priorities are equal
    counter = 0
    frontier.put((0, counter, start))
    counter += 1

    cost_so_far = {start: 0}

    while not frontier.empty():
        current = frontier.get()[2]

        if current == goal:
            return cost_so_far[current]

        for next_cell in _get_neighbors(grid, current):
            new_cost = cost_so_far[current] + 1
            if next_cell not in cost_so_far or new_cost < cost_so_far[next_cell]:
                cost_so_far[next_cell] = new_cost
                priority = new_cost + _manhattan_distance(next_cell, goal)
                frontier.put((priority, counter, next_cell))
                counter += 1
    return None

def calculate_metrics(rows: List[Dict], pickups: List[Dict]) -> EvaluationMetrics:
    """Summarise a session's action log.

    `rows` holds one dict per executed token (see ACTION_LOG_COLUMNS).
    `pickups` holds one dict per collected item with the optimal and the
    travelled cell count from the moment the item was placed.
    """
    action_log = pd.DataFrame(rows, columns=ACTION_LOG_COLUMNS)

    instructions = len(action_log)
    turns = int(action_log["turn"].nunique()) if instructions else 0
    invalid = int((~action_log["valid"].astype(bool)).sum())
    collisions = int(action_log["is_collision"].astype(bool).sum())
    collected = int(action_log["collected"].astype(bool).sum())
    travelled = int(action_log["steps"].sum())

    # revisit_rate = fraction of cells where the car stopped after moving more than once
    moves = action_log[action_log["steps"] > 0]
    vc = moves.groupby(["x", "y"]).size()
    revisit_rate = float((vc > 1).sum() / vc.size) if vc.size else 0.0

    avg_steps = None
    opt_total = None
    efficiency = None
    if pickups:
        pk = pd.DataFrame(pickups, columns=["optimal_length", "travelled"])
        avg_steps = float(pk["travelled"].mean())
        reachable = pk.dropna(subset=["optimal_length"])
        if not reachable.empty:
            opt_total = int(reachable["optimal_length"].sum())
            walked = int(reachable["travelled"].sum())
            efficiency = opt_total / walked if walked else None

    return EvaluationMetrics(
        turns=turns,
        instructions=instructions,
        invalid_instructions=invalid,
        collisions=collisions,
        items_collected=collected,
        cells_travelled=travelled,
        revisit_rate=revisit_rate,
        average_steps_per_item=avg_steps,
        optimal_cells_for_items=opt_total,
        path_efficiency=efficiency,
    )

def save_metrics(metrics: EvaluationMetrics, output_path: Path):
    d = asdict(metrics)
    # convert numpy types
    for k,v in d.items():
        if isinstance(v,(np.integer,)): d[k]=int(v)
        if isinstance(v,(np.floating,)): d[k]=float(v)
    output_path.write_text(json.dumps(d, indent=2))
