"""
Reconstruction of a flattened raster from leaf regions.
"""

from typing import Iterable

import numpy as np

from blockflat.raster import Raster
from blockflat.statistics import ScoredRegion, region_mean


def reconstruct(raster: Raster, queue: Iterable[ScoredRegion]) -> Raster:
    """
    Paint each leaf region with its mean colour.

    Means are always taken from the source raster, which is never written.
    The leaves must be disjoint; pixels not covered by any leaf stay zero.

    Args:
        raster: Original source raster
        queue: Scored leaf regions, in any order

    Returns:
        New raster with the same dimensions as the source

    Raises:
        ValueError: If a leaf extends past the source raster
    """
    out = np.zeros(raster.shape, dtype=np.uint8)

    for entry in queue:
        rows, cols = entry.region.slices()
        out[rows, cols] = region_mean(raster, entry.region)

    return Raster.from_array(out)
