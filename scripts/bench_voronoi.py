import time

import numpy as np

from voronoi_sweep import Cell, voronoi
from voronoi_sweep.sampling import random_points

BOX_SIZE = 800.0


def bench(num_points: int, rng: np.random.Generator, repeats: int = 5) -> float:
    cell = Cell.square(BOX_SIZE)
    points = random_points(num_points, BOX_SIZE, rng)
    best = float("inf")
    for _ in range(repeats):
        t0 = time.perf_counter()
        voronoi(points, cell)
        best = min(best, time.perf_counter() - t0)
    return best


if __name__ == "__main__":
    rng = np.random.default_rng(0)
    for n in (1, 100, 1000):
        print(f"points/{n}: {bench(n, rng) * 1e3:.2f} ms")
