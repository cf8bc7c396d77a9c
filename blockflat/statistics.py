"""
Per-region colour statistics.
Integer channel means and the unnormalized variance score that drives splitting.
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from blockflat.raster import Raster
from blockflat.region import Region


def _region_block(raster: Raster, region: Region) -> np.ndarray:
    """Region pixels widened to int64 so sums and squares cannot overflow."""
    if not region.fits(raster):
        raise ValueError(f"{region!r} lies outside {raster!r}")
    rows, cols = region.slices()
    return raster.as_array()[rows, cols].astype(np.int64)


def _channel_means(block: np.ndarray) -> np.ndarray:
    count = block.shape[0] * block.shape[1]
    # Truncating integer division, per channel
    return block.sum(axis=(0, 1)) // count


def region_mean(raster: Raster, region: Region) -> Tuple[int, int, int, int]:
    """
    Compute the per-channel mean colour of a region.

    Args:
        raster: Source raster
        region: Area to average, must lie inside the raster

    Returns:
        Tuple of 4 channel means, each truncated to an integer

    Raises:
        ValueError: If the region extends past the raster
    """
    means = _channel_means(_region_block(raster, region))
    return tuple(int(m) for m in means)


def variance_score(raster: Raster, region: Region) -> int:
    """
    Compute the aggregate variance score of a region.

    The score is the sum over every pixel and channel of the squared
    difference from that channel's integer mean. It is not divided by the
    area, so rankings and the stopping tolerance share one absolute scale.
    It is zero exactly when every pixel in the region is identical.

    Args:
        raster: Source raster
        region: Area to score

    Returns:
        Non-negative integer score

    Raises:
        ValueError: If the region extends past the raster
    """
    block = _region_block(raster, region)
    diff = block - _channel_means(block)
    return int(np.sum(diff * diff))


@dataclass(frozen=True)
class ScoredRegion:
    """Queue entry: a region and its variance score, computed once."""

    region: Region
    variance: int

    @classmethod
    def score(cls, raster: Raster, region: Region) -> 'ScoredRegion':
        return cls(region=region, variance=variance_score(raster, region))
