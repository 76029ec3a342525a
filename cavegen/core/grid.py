from array import array
from enum import IntEnum
from typing import Iterator, List, Tuple


class CellState(IntEnum):
    EMPTY = 0
    WALL = 1


class Grid:
    # 4-connected offsets as (d_row, d_col)
    NORTH = (-1, 0)
    SOUTH = (1, 0)
    EAST = (0, 1)
    WEST = (0, -1)
    CARDINALS = (EAST, WEST, SOUTH, NORTH)

    __slots__ = ('width', 'height', 'cells')

    def __init__(self, width: int, height: int):
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        # 1 byte per cell, everything starts as rock
        self.cells = array('B', [CellState.WALL] * (width * height))

    @property
    def rows(self) -> int:
        return self.height

    @property
    def cols(self) -> int:
        return self.width

    def num_cells(self) -> int:
        return self.width * self.height

    def valid_coords(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def as_index(self, row: int, col: int) -> int:
        if self.valid_coords(row, col):
            return row * self.width + col
        raise IndexError(f"Coordinate (row={row}, col={col}) out of bounds")

    def get(self, row: int, col: int) -> CellState:
        return CellState(self.cells[self.as_index(row, col)])

    def set(self, row: int, col: int, state: CellState):
        self.cells[self.as_index(row, col)] = state

    def is_wall(self, row: int, col: int) -> bool:
        return self.cells[self.as_index(row, col)] == CellState.WALL

    def is_border(self, row: int, col: int) -> bool:
        return row == 0 or col == 0 or row == self.height - 1 or col == self.width - 1

    def fill(self, state: CellState):
        self.cells = array('B', [state] * (self.width * self.height))

    def snapshot(self) -> array:
        """Copy of the raw cell array, indexed with as_index()."""
        return array('B', self.cells)

    def count(self, state: CellState) -> int:
        return self.cells.count(state)

    def coords(self) -> Iterator[Tuple[int, int]]:
        for row in range(self.height):
            for col in range(self.width):
                yield row, col

    def get_neighbors(self, row: int, col: int) -> Iterator[Tuple[int, int]]:
        """
        Yields (row, col) of the in-bounds 4-connected neighbours.
        Does NOT look at cell states.
        """
        for d_row, d_col in self.CARDINALS:
            n_row, n_col = row + d_row, col + d_col
            if self.valid_coords(n_row, n_col):
                yield n_row, n_col

    def to_text(self, wall: str = '#', empty: str = '.') -> str:
        lines: List[str] = []
        for row in range(self.height):
            start = row * self.width
            lines.append(''.join(
                wall if v == CellState.WALL else empty
                for v in self.cells[start:start + self.width]
            ))
        return '\n'.join(lines)

    @classmethod
    def from_text(cls, text: str, wall: str = '#') -> 'Grid':
        """Builds a grid from to_text() style rows. Handy for fixtures."""
        rows = [line.strip() for line in text.strip().splitlines()]
        if not rows:
            raise ValueError("empty grid text")
        grid = cls(len(rows[0]), len(rows))
        for r, line in enumerate(rows):
            if len(line) != grid.width:
                raise ValueError(f"Row {r} has length {len(line)}, expected {grid.width}")
            for c, ch in enumerate(line):
                grid.set(r, c, CellState.WALL if ch == wall else CellState.EMPTY)
        return grid
