"""
Runtime analysis experiments for block flattening.
Measures flattening time on synthetic rasters of increasing size.
"""

import csv
import os
import time
from typing import List, Optional, Tuple

import numpy as np

from blockflat.main import DEFAULT_TOLERANCE, flatten_raster
from blockflat.synthetic import generate_synthetic_raster

FIELDNAMES = ['width', 'height', 'pixels', 'time_ms', 'leaf_count', 'splits']


def measure_runtime(width: int, height: int,
                    tolerance: int = DEFAULT_TOLERANCE,
                    num_runs: int = 3,
                    seed: int = 0) -> Tuple[float, int, int]:
    """
    Measure average flattening time for one synthetic raster.

    Args:
        width: Raster width
        height: Raster height
        tolerance: Variance tolerance passed to the flattener
        num_runs: Number of runs to average
        seed: Seed for the synthetic raster

    Returns:
        Tuple of (avg_time_ms, leaf_count, splits)
    """
    raster = generate_synthetic_raster(width, height, seed=seed)

    times = []
    leaf_count = 0
    splits = 0

    for _ in range(num_runs):
        start_time = time.time()
        result = flatten_raster(raster, tolerance)
        times.append((time.time() - start_time) * 1000)
        leaf_count = result.leaf_count
        splits = result.splits

    return float(np.mean(times)), leaf_count, splits


def run_runtime_experiments(sizes: List[Tuple[int, int]],
                            output_csv: Optional[str] = "experiments/runtime_data.csv",
                            tolerance: int = DEFAULT_TOLERANCE,
                            num_runs: int = 3) -> List[dict]:
    """
    Run runtime experiments over several raster sizes.

    Args:
        sizes: List of (width, height) pairs
        output_csv: Output CSV file path, or None to skip writing
        tolerance: Variance tolerance passed to the flattener
        num_runs: Runs per size

    Returns:
        One result dict per size, keyed by FIELDNAMES
    """
    print("=" * 70)
    print("RUNTIME ANALYSIS EXPERIMENTS")
    print("=" * 70)
    print(f"\nSizes: {sizes}")
    print(f"Tolerance: {tolerance}")
    print(f"Runs per size: {num_runs} (for averaging)")

    results = []

    for i, (w, h) in enumerate(sizes):
        print(f"\n[{i+1}/{len(sizes)}] Testing {w} x {h}...")

        avg_time, leaf_count, splits = measure_runtime(w, h, tolerance, num_runs)

        results.append({
            'width': w,
            'height': h,
            'pixels': w * h,
            'time_ms': avg_time,
            'leaf_count': leaf_count,
            'splits': splits,
        })

        print(f"  Time: {avg_time:.2f} ms")
        print(f"  Leaf regions: {leaf_count}")

    if results and output_csv:
        out_dir = os.path.dirname(output_csv)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)

        with open(output_csv, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
            writer.writeheader()
            writer.writerows(results)

        print(f"\n✓ Results saved to {output_csv}")

    return results


if __name__ == "__main__":
    run_runtime_experiments(
        [(64, 64), (128, 128), (256, 256), (384, 384), (512, 512), (768, 768)],
        "experiments/runtime_data.csv",
    )
