"""Test the runtime experiment helpers."""

import csv

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from blockflat.experiments.plot_results import (fit_n_log_n, load_runtime_data,
                                                plot_runtime_vs_pixels)
from blockflat.experiments.runtime_analysis import (FIELDNAMES, measure_runtime,
                                                    run_runtime_experiments)
from blockflat.synthetic import generate_synthetic_array, generate_synthetic_raster


def test_synthetic_raster_is_deterministic():
    a = generate_synthetic_raster(50, 30, seed=42)
    b = generate_synthetic_raster(50, 30, seed=42)

    assert (a.width, a.height) == (50, 30)
    assert a.pixels == b.pixels
    assert generate_synthetic_array(50, 30, seed=42).shape == (30, 50, 4)


def test_measure_runtime():
    avg_ms, leaf_count, splits = measure_runtime(32, 24, num_runs=2)

    assert avg_ms >= 0
    assert leaf_count == splits + 1


def test_run_runtime_experiments_writes_csv(tmp_path):
    csv_path = tmp_path / "runtime" / "data.csv"

    results = run_runtime_experiments([(16, 16), (32, 16)], str(csv_path), num_runs=1)

    assert [r['pixels'] for r in results] == [256, 512]
    with open(csv_path, newline='') as f:
        rows = list(csv.DictReader(f))
    assert list(rows[0].keys()) == FIELDNAMES
    assert [int(r['pixels']) for r in rows] == [256, 512]

    pixels, times = load_runtime_data(str(csv_path))
    assert pixels.tolist() == [256, 512]
    assert len(times) == 2


def test_load_runtime_data_rejects_empty_file(tmp_path):
    csv_path = tmp_path / "empty.csv"
    csv_path.write_text(",".join(FIELDNAMES) + "\n")

    with pytest.raises(ValueError):
        load_runtime_data(str(csv_path))


def test_fit_recovers_n_log_n():
    pixels = np.array([1_000, 4_000, 16_000, 64_000, 256_000])
    times = 2e-4 * pixels * np.log(pixels) + 3.0

    a, b, r_squared = fit_n_log_n(pixels, times)

    assert a == pytest.approx(2e-4, rel=1e-3)
    assert b == pytest.approx(3.0, abs=1e-2)
    assert r_squared == pytest.approx(1.0)


def test_plot_runtime_vs_pixels(tmp_path):
    pixels = np.array([1_000, 4_000, 16_000, 64_000])
    times = 1e-3 * pixels * np.log(pixels) + 1.0
    out = tmp_path / "runtime.png"

    plot_runtime_vs_pixels(pixels, times, str(out))

    assert out.exists() and out.stat().st_size > 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
