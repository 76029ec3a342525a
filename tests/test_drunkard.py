import unittest
import random
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cavegen.core.grid import Grid, CellState
from cavegen.core.config import DrunkardWalkConfig, ConfigError
from cavegen.core.analysis import MapAnalyzer
from cavegen.algo.base import GeneratorType, GenerationError
from cavegen.algo.drunkard import DrunkardWalkGenerator


class TestDrunkardWalk(unittest.TestCase):
    def test_start_single_interior_cell(self):
        grid = Grid(10, 8)
        grid.fill(CellState.EMPTY)
        gen = DrunkardWalkGenerator(seed=5)
        gen.start(grid)

        self.assertEqual(grid.count(CellState.EMPTY), 1)
        row, col = gen.position
        self.assertEqual(grid.get(row, col), CellState.EMPTY)
        self.assertFalse(grid.is_border(row, col))

    def test_step_moves_one_cell(self):
        grid = Grid(10, 10)
        gen = DrunkardWalkGenerator(seed=9)
        gen.start(grid)

        for _ in range(200):
            r0, c0 = gen.position
            gen.step(grid)
            r1, c1 = gen.position
            self.assertEqual(abs(r1 - r0) + abs(c1 - c0), 1)
            self.assertTrue(grid.valid_coords(r1, c1))
            self.assertEqual(grid.get(r1, c1), CellState.EMPTY)

    def test_generate_reaches_ratio_connected(self):
        for seed, (w, h), ratio in [(1, (20, 15), 0.3), (2, (40, 30), 0.55), (3, (3, 3), 0.5)]:
            grid = Grid(w, h)
            gen = DrunkardWalkGenerator(DrunkardWalkConfig(expected_ratio=ratio), rng=random.Random(seed))
            gen.start(grid)
            start = gen.position
            gen.generate(grid)

            self.assertGreaterEqual(MapAnalyzer.floor_ratio(grid), ratio)
            regions = MapAnalyzer.find_regions(grid)
            self.assertEqual(len(regions), 1, f"{w}x{h} walk should stay in one region")
            self.assertIn(start, regions[0])

    def test_generate_on_thin_grid(self):
        grid = Grid(2, 1)
        gen = DrunkardWalkGenerator(DrunkardWalkConfig(expected_ratio=0.9), seed=4)
        gen.start(grid)
        gen.generate(grid)
        self.assertEqual(grid.count(CellState.EMPTY), 2)

    def test_running_count_matches_grid(self):
        grid = Grid(30, 20)
        gen = DrunkardWalkGenerator(seed=8)
        gen.start(grid)
        gen.generate(grid)
        self.assertEqual(gen.floor_count, grid.count(CellState.EMPTY))

    def test_determinism(self):
        grid1, grid2 = Grid(25, 25), Grid(25, 25)
        for grid in (grid1, grid2):
            gen = DrunkardWalkGenerator(seed=77)
            gen.start(grid)
            gen.generate(grid)
        self.assertEqual(grid1.cells.tobytes(), grid2.cells.tobytes())

    def test_single_cell_grid_rejected(self):
        grid = Grid(1, 1)
        gen = DrunkardWalkGenerator(seed=1)
        gen.start(grid)
        with self.assertRaises(GenerationError):
            gen.step(grid)

    def test_step_before_start(self):
        with self.assertRaises(GenerationError):
            DrunkardWalkGenerator().step(Grid(5, 5))
        with self.assertRaises(GenerationError):
            DrunkardWalkGenerator().generate(Grid(5, 5))

    def test_full_ratio_rejected(self):
        with self.assertRaises(ConfigError):
            DrunkardWalkConfig(expected_ratio=1.0)

    def test_kind_and_gui(self):
        gen = DrunkardWalkGenerator()
        self.assertEqual(gen.kind(), GeneratorType.DRUNKARD_WALK)

        class UI:
            def input_float(self, label, value, step=0.0, step_fast=0.0):
                return True, 0.4

        gen.render_gui(UI())
        self.assertEqual(gen.config.expected_ratio, 0.4)


if __name__ == '__main__':
    unittest.main()
