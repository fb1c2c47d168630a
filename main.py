#!/usr/bin/env python3
"""
main.py – interactive driver for the grid car simulation.

A car sits on a 15×10 grid with a few walls. Each turn the player types a
comma-separated list of instructions; the car executes them one by one, the
board is redrawn after every instruction and picking up the collectible
scores a point.

Execute with e.g.::
    python main.py
    python main.py --seed 7
    python main.py --cfg config/default.yml --overrides '{"start": [2, 2]}'
    python main.py --metrics-out session_metrics.json --log-level DEBUG

Instructions::
    F<n>   forward n cells        B<n>   backward n cells
    L      turn left              R      turn right
    exit   quit (whole line, any case)
"""

from __future__ import annotations
import argparse, logging, pathlib, random, sys, json, yaml
from typing import Callable, Dict, List, Optional
from environment import (Grid, Heading, GRID_WIDTH, GRID_HEIGHT,
                         DEFAULT_WALLS, DEFAULT_OBSTACLES)
from vehicle import Vehicle, MoveResult, DEFAULT_START, DEFAULT_HEADING
from instructions import Instruction, Kind, parse_line
from evaluation_metrics import (EvaluationMetrics, calculate_metrics, save_metrics,
                                shortest_path_length)

# ---------------------------------------------------------------------------
# Default scenario – override via YAML or --overrides {}
# ---------------------------------------------------------------------------
DEFAULTS = {
    "width":     GRID_WIDTH,
    "height":    GRID_HEIGHT,
    "walls":     DEFAULT_WALLS,
    "obstacles": DEFAULT_OBSTACLES,
    "start":     list(DEFAULT_START),
    "heading":   DEFAULT_HEADING.value,
    "seed":      None,     # None → fresh entropy every run
}

PROMPT = "Enter instructions (e.g., 'F2, L, B1, R, F3') or type 'exit' to quit:"


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------
class Session:
    """One game: owns the grid, the car, the score and the action log."""

    def __init__(self, grid: Grid, vehicle: Vehicle,
                 read_line: Optional[Callable[[], str]] = None,
                 write: Optional[Callable[[str], None]] = None):
        self.grid = grid
        self.vehicle = vehicle
        self.read_line = read_line or input
        self.write = write or print
        self.score = 0
        self.turn = 0
        self.rows: List[Dict] = []
        self.pickups: List[Dict] = []
        self._travelled = 0
        self._optimal = self._optimal_to_collectible()

    # ------------------------------------------------------------------
    def _optimal_to_collectible(self) -> Optional[int]:
        return shortest_path_length(self.grid, self.vehicle.position, self.grid.collectible)

    def draw(self):
        self.write(self.grid.render(self.vehicle.position, self.vehicle.heading, self.score))

    # ------------------------------------------------------------------
    def execute(self, instr: Instruction) -> Optional[MoveResult]:
        """Apply one instruction to the car; None for an invalid one."""
        car = self.vehicle
        if instr.kind is Kind.FORWARD:
            return car.move_forward(instr.count)
        if instr.kind is Kind.BACKWARD:
            return car.move_backward(instr.count)
        if instr.kind is Kind.TURN_LEFT:
            return car.turn_left()
        if instr.kind is Kind.TURN_RIGHT:
            return car.turn_right()
        return None

    def step(self, instr: Instruction) -> str:
        """Execute one token, check for a pickup and redraw the board."""
        result = self.execute(instr)
        output = str(result) if result is not None else f"Invalid instruction: {instr.token}"
        steps = result.steps if result is not None else 0
        logging.debug("turn %d: %s -> %s", self.turn, instr.token, output)

        self._travelled += steps
        collected = self.grid.collectible_reached(self.vehicle.position)
        if collected:
            self.score += 1
            self.pickups.append({"optimal_length": self._optimal,
                                 "travelled": self._travelled})
            self.grid.reset_collectible()
            self._travelled = 0
            self._optimal = self._optimal_to_collectible()
            logging.info("Item collected at (%d,%d), score=%d, next item at (%d,%d)",
                         self.vehicle.x, self.vehicle.y, self.score,
                         self.grid.collectible.x, self.grid.collectible.y)
            self.write(f"You collected an item! New score: {self.score}")

        self.rows.append({
            "turn"        : self.turn,
            "token"       : instr.token,
            "kind"        : instr.kind.name,
            "x"           : self.vehicle.x,
            "y"           : self.vehicle.y,
            "heading"     : self.vehicle.heading.value,
            "steps"       : steps,
            "is_collision": bool(result is not None and result.collision),
            "collected"   : collected,
            "valid"       : result is not None,
        })

        self.draw()
        return output

    def process_line(self, line: str) -> Optional[str]:
        """Run every token of a line; returns the joined results, or None on exit."""
        instructions = parse_line(line)
        if instructions and instructions[0].kind is Kind.EXIT:
            return None
        self.turn += 1
        outputs = [self.step(instr) for instr in instructions]
        return ", ".join(outputs)

    # ------------------------------------------------------------------
    def run(self) -> EvaluationMetrics:
        logging.info("Session started: %dx%d grid, car at (%d,%d,%s), item at (%d,%d)",
                     self.grid.width, self.grid.height,
                     self.vehicle.x, self.vehicle.y, self.vehicle.heading.value,
                     self.grid.collectible.x, self.grid.collectible.y)
        self.draw()
        while True:
            self.write(PROMPT)
            try:
                line = self.read_line()
            except EOFError:
                logging.info("End of input, leaving session")
                break
            summary = self.process_line(line)
            if summary is None:
                break
            self.write(summary)

        metrics = self.metrics()
        logging.info("Session finished: score=%d after %d turns (%d instructions, %d collisions)",
                     self.score, metrics.turns, metrics.instructions, metrics.collisions)
        return metrics

    def metrics(self) -> EvaluationMetrics:
        return calculate_metrics(self.rows, self.pickups)


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------
def _as_int(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return value

def _cells(value, size: int, name: str) -> List[tuple]:
    """Turn a list of coordinate lists from YAML/JSON into int tuples."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{name} must be a list, got {value!r}")
    cells = []
    for item in value:
        if not isinstance(item, (list, tuple)) or len(item) != size:
            raise ValueError(f"{name} entries must be lists of {size} integers, got {item!r}")
        cells.append(tuple(_as_int(v, name) for v in item))
    return cells

def build_session(cfg: Dict, read_line: Optional[Callable[[], str]] = None,
                  write: Optional[Callable[[str], None]] = None,
                  rng: Optional[random.Random] = None) -> Session:
    """Create grid, car and session from a config dict (see DEFAULTS).

    Raises ValueError for any malformed or inconsistent scenario value.
    """
    seed = cfg.get("seed")
    if seed is not None:
        _as_int(seed, "seed")
    if rng is None:
        rng = random.Random(seed) if seed is not None else random.Random()
    grid = Grid(_as_int(cfg.get("width"), "width"), _as_int(cfg.get("height"), "height"),
                walls=_cells(cfg.get("walls"), 4, "walls"),
                obstacles=_cells(cfg.get("obstacles"), 2, "obstacles"),
                rng=rng)
    x, y = _cells([cfg.get("start")], 2, "start")[0]
    heading = cfg.get("heading")
    if not isinstance(heading, str):
        raise ValueError(f"heading must be one of U, R, D, L, got {heading!r}")
    vehicle = Vehicle(grid, x, y, Heading(heading))
    return Session(grid, vehicle, read_line=read_line, write=write)


# ---------------------------------------------------------------------------
# CLI + entry‑point
# ---------------------------------------------------------------------------

def _load_cfg(path: str) -> Dict:
    """Load YAML scenario and merge it over DEFAULTS."""
    with open(path, encoding='utf-8') as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Scenario file {path} must contain a mapping")
    return {**DEFAULTS, **cfg}

def _apply_overrides(cfg: Dict, overrides: str|None) -> Dict:
    """Apply command-line overrides to the config."""
    if overrides:
        extra = json.loads(overrides)
        if not isinstance(extra, dict):
            raise ValueError(f"--overrides must be a JSON object, got {overrides}")
        cfg.update(extra)
    return cfg

def main(argv=None):
    parser = argparse.ArgumentParser(description="Drive a car around a grid and collect items.")
    parser.add_argument("--cfg", help="YAML scenario file (defaults to the built-in layout)")
    parser.add_argument("--overrides", help="JSON string of cfg overrides")
    parser.add_argument("--seed", type=int, help="seed for collectible placement")
    parser.add_argument("--metrics-out", help="write session metrics as JSON to this path")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(levelname)s | %(message)s")

    try:
        cfg = _load_cfg(args.cfg) if args.cfg else dict(DEFAULTS)
        cfg = _apply_overrides(cfg, args.overrides)
        if args.seed is not None:
            cfg["seed"] = args.seed
        session = build_session(cfg)
    except (ValueError, OSError, yaml.YAMLError) as e:
        logging.error(f"Invalid scenario: {e}")
        sys.exit(1)

    metrics = session.run()
    if args.metrics_out:
        save_metrics(metrics, pathlib.Path(args.metrics_out))
        logging.info("✓ Saved session metrics to %s", args.metrics_out)

if __name__ == "__main__":
    main()
