from collections import deque
from typing import Dict, List, Set, Tuple
from cavegen.core.grid import Grid, CellState


class MapAnalyzer:
    @staticmethod
    def floor_ratio(grid: Grid) -> float:
        return grid.count(CellState.EMPTY) / grid.num_cells()

    @staticmethod
    def find_regions(grid: Grid) -> List[Set[Tuple[int, int]]]:
        """
        Flood-fills the 4-connected EMPTY regions.
        Returns a list of sets of (row, col), largest first.
        """
        seen = bytearray(grid.num_cells())
        regions: List[Set[Tuple[int, int]]] = []

        for row, col in grid.coords():
            idx = row * grid.width + col
            if seen[idx] or grid.cells[idx] != CellState.EMPTY:
                continue

            region = set()
            queue = deque([(row, col)])
            seen[idx] = 1
            while queue:
                r, c = queue.popleft()
                region.add((r, c))
                for nr, nc in grid.get_neighbors(r, c):
                    n_idx = nr * grid.width + nc
                    if not seen[n_idx] and grid.cells[n_idx] == CellState.EMPTY:
                        seen[n_idx] = 1
                        queue.append((nr, nc))
            regions.append(region)

        regions.sort(key=len, reverse=True)
        return regions

    @staticmethod
    def calculate_stats(grid: Grid) -> Dict[str, float]:
        floor = grid.count(CellState.EMPTY)
        regions = MapAnalyzer.find_regions(grid)
        total = grid.num_cells()
        return {
            "floor": floor,
            "walls": total - floor,
            "floor_ratio": floor / total,
            "regions": len(regions),
            "largest_region": len(regions[0]) if regions else 0,
        }
