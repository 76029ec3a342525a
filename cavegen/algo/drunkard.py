import logging
from typing import Optional, Tuple
from cavegen.core.grid import Grid, CellState
from cavegen.core.config import DrunkardWalkConfig
from cavegen.algo.base import Generator, GeneratorType, GenerationError, UISurface

logger = logging.getLogger(__name__)


class DrunkardWalkGenerator(Generator):
    def __init__(self, config: Optional[DrunkardWalkConfig] = None, seed=None, rng=None):
        super().__init__(config or DrunkardWalkConfig(), seed=seed, rng=rng)
        self.position: Optional[Tuple[int, int]] = None
        self.floor_count = 0

    def kind(self) -> GeneratorType:
        return GeneratorType.DRUNKARD_WALK

    def start(self, grid: Grid):
        self.config.validate()
        self.step_count = 0
        grid.fill(CellState.WALL)

        # Prefer an interior cell; tiny grids have none
        if grid.rows >= 3 and grid.cols >= 3:
            row = self.rng.randint(1, grid.rows - 2)
            col = self.rng.randint(1, grid.cols - 2)
        else:
            row = self.rng.randint(0, grid.rows - 1)
            col = self.rng.randint(0, grid.cols - 1)

        grid.set(row, col, CellState.EMPTY)
        self.position = (row, col)
        self.floor_count = 1

    def step(self, grid: Grid):
        if self.walk(grid):
            self.floor_count += 1

    def walk(self, grid: Grid) -> bool:
        """Moves one cell. Returns True if a wall was carved."""
        if self.position is None:
            raise GenerationError("DrunkardWalkGenerator.step() called before start()")
        if grid.num_cells() < 2:
            raise GenerationError("Drunkard walk needs a grid with at least two cells")

        row, col = self.position
        if not grid.valid_coords(row, col):
            raise GenerationError(f"Walker at ({row}, {col}) is outside a {grid.cols}x{grid.rows} grid")

        # Resample until the move stays on the map
        while True:
            d_row, d_col = self.rng.choice(Grid.CARDINALS)
            if grid.valid_coords(row + d_row, col + d_col):
                break

        row += d_row
        col += d_col
        self.position = (row, col)
        self.step_count += 1

        if grid.is_wall(row, col):
            grid.set(row, col, CellState.EMPTY)
            return True
        return False

    def generate(self, grid: Grid):
        if self.position is None:
            raise GenerationError("DrunkardWalkGenerator.generate() called before start()")
        self.config.validate()

        # Running count instead of rescanning the whole grid every step.
        # Re-synced once here in case the grid was edited since start().
        total = grid.num_cells()
        self.floor_count = grid.count(CellState.EMPTY)
        target = self.config.expected_ratio

        while self.floor_count / total < target:
            self.step(grid)

        logger.debug("Drunkard walk reached %.3f floor after %d steps",
                     self.floor_count / total, self.step_count)

    def render_gui(self, ui: UISurface):
        _, self.config.expected_ratio = ui.input_float(
            "Expected empty ratio (0..1)", self.config.expected_ratio, 0.05, 0.1)
