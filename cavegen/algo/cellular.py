import logging
from array import array
from typing import Optional
from cavegen.core.grid import Grid, CellState
from cavegen.core.config import CellAutomataConfig, EvaluationRule
from cavegen.algo.base import Generator, GeneratorType, UISurface

logger = logging.getLogger(__name__)


class CellAutomataGenerator(Generator):
    """
    Classic cave smoothing: random noise, then repeated neighbour-count passes.

    With the EXTENDED rule a cell also becomes a wall when its 5x5
    neighbourhood is (almost) empty, which breaks up large open areas.
    The four cells at offset (+-2, +-2) are left out of that wider count.
    """

    RULE_NAMES = ["Basic", "Extended"]
    SPINNER_DELTA = 0.05
    FAST_SPINNER_DELTA = 0.1

    def __init__(self, config: Optional[CellAutomataConfig] = None, seed=None, rng=None):
        super().__init__(config or CellAutomataConfig(), seed=seed, rng=rng)

    def kind(self) -> GeneratorType:
        return GeneratorType.CELL_AUTOMATA

    def start(self, grid: Grid):
        self.config.validate()
        self.step_count = 0
        self.noise(grid)

    def generate(self, grid: Grid):
        # One smoothing pass; callers iterate step() for more
        self.step(grid)

    def noise(self, grid: Grid):
        cfg = self.config
        for row in range(grid.rows):
            for col in range(grid.cols):
                if not cfg.simulate_borders and grid.is_border(row, col):
                    grid.set(row, col, CellState.WALL)
                elif self.rng.random() <= cfg.wall_probability:
                    grid.set(row, col, CellState.WALL)
                else:
                    grid.set(row, col, CellState.EMPTY)

    def step(self, grid: Grid):
        old_cells = grid.snapshot()
        margin = 0 if self.config.simulate_borders else 1

        for row in range(margin, grid.rows - margin):
            for col in range(margin, grid.cols - margin):
                wall = self.evaluate(row, col, grid, old_cells)
                grid.set(row, col, CellState.WALL if wall else CellState.EMPTY)

        self.step_count += 1
        logger.debug("Smoothing pass %d done, floor cells: %d",
                     self.step_count, grid.count(CellState.EMPTY))

    def evaluate(self, row: int, col: int, grid: Grid, old_cells: array) -> bool:
        """True when the cell at (row, col) should become a wall."""
        if self.config.rule == EvaluationRule.EXTENDED:
            return self.extended_evaluation(row, col, grid, old_cells)
        return self.basic_evaluation(row, col, grid, old_cells)

    def basic_evaluation(self, row: int, col: int, grid: Grid, old_cells: array) -> bool:
        walls = self.count_neighbourhood(row, col, grid, old_cells, 1, self.config.include_self)
        return walls >= self.config.min_walls

    def extended_evaluation(self, row: int, col: int, grid: Grid, old_cells: array) -> bool:
        if self.basic_evaluation(row, col, grid, old_cells):
            return True
        walls = self.count_neighbourhood(row, col, grid, old_cells, 2, self.config.include_self)
        return walls <= 1

    @staticmethod
    def count_neighbourhood(row: int, col: int, grid: Grid, old_cells: array,
                            distance: int, count_self: bool) -> int:
        walls = 0
        for d_row in range(-distance, distance + 1):
            for d_col in range(-distance, distance + 1):
                # Corners of the 5x5 block are not part of the wide neighbourhood
                if distance == 2 and abs(d_row) == 2 and abs(d_col) == 2:
                    continue
                if d_row == 0 and d_col == 0 and not count_self:
                    continue
                n_row, n_col = row + d_row, col + d_col
                # Off-grid cells simply don't count
                if not grid.valid_coords(n_row, n_col):
                    continue
                if old_cells[n_row * grid.width + n_col] == CellState.WALL:
                    walls += 1
        return walls

    def render_gui(self, ui: UISurface):
        cfg = self.config
        _, cfg.wall_probability = ui.input_float(
            "Initial wall probability [0..1]", cfg.wall_probability,
            self.SPINNER_DELTA, self.FAST_SPINNER_DELTA)
        _, cfg.min_walls = ui.input_int(
            "Neighbouring walls required for next iteration", cfg.min_walls)
        _, cfg.include_self = ui.checkbox("Count current cell?", cfg.include_self)
        _, cfg.simulate_borders = ui.checkbox("Simulate borders?", cfg.simulate_borders)
        changed, index = ui.combo("Algorithm", int(cfg.rule), self.RULE_NAMES)
        if changed:
            cfg.rule = EvaluationRule(index)
