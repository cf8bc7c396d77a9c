"""
Plot runtime analysis results and check the N log N trend.

Recursive halving touches every pixel once per level, so on busy images the
flattening time should follow T(N) = a * N log N + b.
"""

import csv
import os

import matplotlib.pyplot as plt
import numpy as np
from scipy.optimize import curve_fit


def load_runtime_data(csv_path: str):
    """
    Read the pixel counts and mean runtimes written by runtime_analysis.

    Returns:
        Tuple of (pixels, times_ms) arrays, in file order

    Raises:
        ValueError: If the file holds no measurements
    """
    with open(csv_path, newline='') as f:
        rows = list(csv.DictReader(f))

    if not rows:
        raise ValueError(f"No runtime measurements in {csv_path}")

    pixels = np.array([int(r['pixels']) for r in rows], dtype=np.int64)
    times = np.array([float(r['time_ms']) for r in rows])
    return pixels, times


def n_log_n_model(N, a, b):
    return a * N * np.log(N) + b


def fit_n_log_n(pixels, times):
    """
    Fit the N log N model to measured data.

    Returns:
        Tuple of (a, b, r_squared)
    """
    params, _ = curve_fit(n_log_n_model, pixels.astype(float), times, p0=[1e-5, 0])
    a, b = params

    residuals = times - n_log_n_model(pixels, a, b)
    ss_res = np.sum(residuals**2)
    ss_tot = np.sum((times - np.mean(times))**2)
    r_squared = 1 - (ss_res / ss_tot) if ss_tot > 0 else 1.0

    return a, b, r_squared


def plot_runtime_vs_pixels(pixels, times, output_path: str):
    """Scatter measured runtimes with the fitted N log N curve."""
    a, b, r_squared = fit_n_log_n(pixels, times)

    pixels_smooth = np.linspace(pixels.min(), pixels.max(), 100)
    times_fitted = n_log_n_model(pixels_smooth, a, b)

    fig = plt.figure(figsize=(10, 6))

    plt.scatter(pixels, times, s=100, alpha=0.7, color='blue',
                label='Measured runtime', zorder=3)
    plt.plot(pixels_smooth, times_fitted, 'r-', linewidth=2,
             label=f'N log N fit (R² = {r_squared:.4f})', zorder=2)

    plt.xlabel('Number of Pixels (N)', fontsize=12)
    plt.ylabel('Runtime (milliseconds)', fontsize=12)
    plt.title('Block Flattening Runtime vs Image Size', fontsize=14)
    plt.grid(True, alpha=0.3)
    plt.legend(fontsize=11)

    eq_text = f'T(N) = {a:.2e} × N log(N) + {b:.2f}'
    plt.text(0.05, 0.95, eq_text, transform=plt.gca().transAxes,
             fontsize=10, verticalalignment='top',
             bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.5))

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"✓ Saved plot to {output_path}")

    return a, b, r_squared


def main():
    csv_path = "experiments/runtime_data.csv"
    print(f"Loading data from {csv_path}...")

    try:
        pixels, times = load_runtime_data(csv_path)
    except FileNotFoundError:
        print(f"✗ Error: {csv_path} not found. Run runtime_analysis.py first.")
        return

    os.makedirs("outputs/plots", exist_ok=True)
    a, b, r_squared = plot_runtime_vs_pixels(pixels, times, "outputs/plots/runtime_vs_pixels.png")

    print(f"\nFitted Model: T(N) = {a:.2e} × N log(N) + {b:.2f}")
    print(f"R-squared: {r_squared:.6f}")


if __name__ == "__main__":
    main()
