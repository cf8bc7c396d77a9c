"""
Main pipeline for block flattening.
Integrates all steps: decoding, adaptive partitioning, reconstruction and encoding.
"""

import argparse
import sys
import time
from dataclasses import dataclass
from typing import List, Optional

from blockflat.partition import PartitionEngine
from blockflat.preprocessing import load_raster, save_raster
from blockflat.raster import BlockflatError, Raster

DEFAULT_TOLERANCE = 128
DEFAULT_PNG_LEVEL = 9


@dataclass
class FlattenResult:
    """Flattened raster plus partition diagnostics."""

    raster: Raster
    leaf_count: int  # Number of flat blocks painted
    splits: int


def _elapsed_ms(start: float) -> float:
    return (time.time() - start) * 1000


def flatten_raster(raster: Raster,
                   tolerance: int = DEFAULT_TOLERANCE,
                   max_splits: Optional[int] = None,
                   verbose: bool = False) -> FlattenResult:
    """
    Flatten a raster into blocks of uniform colour.

    Args:
        raster: Source raster, left untouched
        tolerance: Largest variance score accepted for a block
        max_splits: Optional cap on the number of split steps
        verbose: Print progress and timings

    Returns:
        FlattenResult with the new raster and partition counts
    """
    if verbose:
        print(f"Flattening {raster.width} x {raster.height} raster:")
        print(f"  Tolerance: {tolerance}")

    start = time.time()
    engine = PartitionEngine(raster)
    engine.compress(tolerance, max_splits=max_splits)
    if verbose:
        print(f"  Partitioned in {_elapsed_ms(start):.2f} ms")

    start = time.time()
    output = engine.reconstruct()
    if verbose:
        print(f"  Reconstructed in {_elapsed_ms(start):.2f} ms")
        print(f"  Leaf regions: {engine.leaf_count} ({engine.splits} splits)")

    return FlattenResult(raster=output, leaf_count=engine.leaf_count, splits=engine.splits)


def flatten_image(input_path: str,
                  output_path: str,
                  tolerance: int = DEFAULT_TOLERANCE,
                  level: int = DEFAULT_PNG_LEVEL,
                  optimize: bool = True,
                  max_splits: Optional[int] = None,
                  verbose: bool = True) -> FlattenResult:
    """
    Complete flattening pipeline from image file to PNG file.

    Args:
        input_path: Path to any image OpenCV can decode
        output_path: Path of the PNG to write
        tolerance: Largest variance score accepted for a block
        level: PNG deflate level (0-9)
        optimize: Run the lossless PNG optimization pass
        max_splits: Optional cap on the number of split steps
        verbose: Print progress and timings

    Returns:
        FlattenResult for the written image
    """
    start = time.time()
    raster = load_raster(input_path)
    if verbose:
        print(f"Image loaded: {raster.width} x {raster.height} (W x H) "
              f"in {_elapsed_ms(start):.2f} ms")

    result = flatten_raster(raster, tolerance, max_splits=max_splits, verbose=verbose)

    start = time.time()
    size = save_raster(result.raster, output_path, level=level, optimize=optimize)
    if verbose:
        print(f"Saved {output_path} ({size:,} bytes) in {_elapsed_ms(start):.2f} ms")

    return result


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="blockflat",
        description="Flatten an image into uniform blocks so it compresses better as PNG.")
    parser.add_argument("input", type=str, help="input image file")
    parser.add_argument("output", type=str, help="output PNG file")
    parser.add_argument("--tolerance", type=_non_negative_int, default=DEFAULT_TOLERANCE)
    parser.add_argument("--level", type=int, choices=range(10), default=DEFAULT_PNG_LEVEL,
                        metavar="0-9", help="PNG deflate level")
    parser.add_argument("--max_splits", type=_non_negative_int, default=None)
    parser.add_argument("--no_optimize", action="store_true")
    parser.add_argument("--quiet", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        flatten_image(args.input, args.output,
                      tolerance=args.tolerance,
                      level=args.level,
                      optimize=not args.no_optimize,
                      max_splits=args.max_splits,
                      verbose=not args.quiet)
    except BlockflatError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
