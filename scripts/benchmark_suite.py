import sys
import os
import time

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from cavegen.core.grid import Grid
from cavegen.core.analysis import MapAnalyzer
from cavegen.core.config import BSPConfig
from cavegen.algo.cellular import CellAutomataGenerator
from cavegen.algo.drunkard import DrunkardWalkGenerator
from cavegen.algo.bsp import BSPGenerator


def benchmark_size(width: int, height: int):
    print(f"\n--- Benchmarking {width}x{height} ({width*height:,} cells) ---")

    generators = [
        ("Cellular Automata (4 passes)", CellAutomataGenerator(seed=42), 4),
        ("Drunkard Walk", DrunkardWalkGenerator(seed=42), 1),
        ("BSP", BSPGenerator(BSPConfig(min_width=12, min_height=12, min_room_width=4,
                                       min_room_height=4, max_room_width=10, max_room_height=10),
                             seed=42), 1),
    ]

    print(f"{'ALGORITHM':<30} | {'TIME (s)':<10} | {'FLOOR':<8} | {'REGIONS':<8}")
    print("-" * 66)
    for name, gen, passes in generators:
        grid = Grid(width, height)
        t0 = time.time()
        gen.start(grid)
        for _ in range(passes):
            gen.generate(grid)
        duration = time.time() - t0

        stats = MapAnalyzer.calculate_stats(grid)
        print(f"{name:<30} | {duration:<10.4f} | {stats['floor_ratio']:<8.1%} | {stats['regions']:<8}")


def run_suite():
    sizes = [
        (80, 60),
        (200, 150),
        (400, 300),
    ]
    for w, h in sizes:
        benchmark_size(w, h)


if __name__ == "__main__":
    run_suite()
