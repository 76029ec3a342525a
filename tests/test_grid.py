import unittest
import sys
import os

# Add project root to path so we can import cavegen
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cavegen.core.grid import Grid, CellState

class TestGrid(unittest.TestCase):
    def test_initialization(self):
        w, h = 10, 6
        grid = Grid(w, h)
        self.assertEqual(len(grid.cells), w * h)
        self.assertEqual(grid.num_cells(), w * h)
        self.assertEqual(grid.rows, h)
        self.assertEqual(grid.cols, w)
        # Starts as solid rock
        self.assertEqual(grid.count(CellState.WALL), w * h)

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            Grid(0, 5)
        with self.assertRaises(ValueError):
            Grid(5, -1)

    def test_coordinates(self):
        grid = Grid(5, 4)
        self.assertEqual(grid.as_index(2, 3), 13) # 2 * 5 + 3

        with self.assertRaises(IndexError):
            grid.as_index(-1, 0)
        with self.assertRaises(IndexError):
            grid.as_index(4, 0)
        with self.assertRaises(IndexError):
            grid.as_index(0, 5)

        self.assertTrue(grid.valid_coords(3, 4))
        self.assertFalse(grid.valid_coords(3, 5))

    def test_get_set(self):
        grid = Grid(3, 3)
        grid.set(1, 2, CellState.EMPTY)
        self.assertEqual(grid.get(1, 2), CellState.EMPTY)
        self.assertFalse(grid.is_wall(1, 2))
        self.assertTrue(grid.is_wall(2, 1))

    def test_snapshot_is_a_copy(self):
        grid = Grid(3, 3)
        snap = grid.snapshot()
        grid.set(0, 0, CellState.EMPTY)
        self.assertEqual(snap[0], CellState.WALL)

    def test_fill_and_border(self):
        grid = Grid(4, 3)
        grid.fill(CellState.EMPTY)
        self.assertEqual(grid.count(CellState.EMPTY), 12)
        self.assertTrue(grid.is_border(0, 1))
        self.assertTrue(grid.is_border(1, 3))
        self.assertFalse(grid.is_border(1, 1))

    def test_neighbors(self):
        grid = Grid(3, 3)
        self.assertEqual(len(list(grid.get_neighbors(1, 1))), 4)

        corner = list(grid.get_neighbors(0, 0))
        self.assertEqual(len(corner), 2)
        self.assertIn((0, 1), corner)
        self.assertIn((1, 0), corner)

    def test_text_round_trip(self):
        text = "###\n#.#\n###"
        grid = Grid.from_text(text)
        self.assertEqual(grid.width, 3)
        self.assertEqual(grid.get(1, 1), CellState.EMPTY)
        self.assertEqual(grid.to_text(), text)

    def test_from_text_ragged(self):
        with self.assertRaises(ValueError):
            Grid.from_text("###\n##")

    def test_from_text_empty(self):
        for text in ("", "  \n \n"):
            with self.assertRaises(ValueError):
                Grid.from_text(text)

if __name__ == '__main__':
    unittest.main()
