"""
Greedy max-variance partitioning of a raster into flat blocks.

The engine keeps a queue of scored regions that always forms a disjoint
cover of the raster. Each split step replaces the worst region with the two
halves whose combined variance is lowest.
"""

import numbers
from typing import Iterator, Optional, Tuple

from blockflat.partition_queue import PartitionQueue
from blockflat.raster import InvalidTolerance, Raster, UnsplittableRegion
from blockflat.reconstruct import reconstruct
from blockflat.region import Region
from blockflat.statistics import ScoredRegion


def choose_split(raster: Raster, region: Region) -> Tuple[ScoredRegion, ScoredRegion]:
    """
    Pick the pair of children that replaces a region.

    When both axes can be cut, all four halves are scored and the pair with
    the smaller summed variance wins; equal sums go to the vertical pair.

    Args:
        raster: Source raster
        region: Region to split, at least 2 pixels along one axis

    Returns:
        Two scored children that exactly partition the region

    Raises:
        UnsplittableRegion: If the region is 1x1
    """
    if region.can_split_x:
        left, right = (ScoredRegion.score(raster, r) for r in region.vertical_halves())

        if region.can_split_y:
            top, bottom = (ScoredRegion.score(raster, r) for r in region.horizontal_halves())

            if top.variance + bottom.variance < left.variance + right.variance:
                return top, bottom

        return left, right

    if region.can_split_y:
        top, bottom = (ScoredRegion.score(raster, r) for r in region.horizontal_halves())
        return top, bottom

    raise UnsplittableRegion(f"Cannot split 1x1 region {region!r}")


class PartitionEngine:
    """
    Adaptive partitioner over a single read-only raster.

    Seeded with one region covering the whole raster. Call compress() to
    split until every region is within tolerance, then reconstruct() to get
    the flattened image.
    """

    def __init__(self, raster: Raster):
        self.raster = raster
        self.queue: PartitionQueue[ScoredRegion] = PartitionQueue()
        self.queue.push(ScoredRegion.score(raster, Region.covering(raster)))
        self.splits = 0

    @property
    def leaf_count(self) -> int:
        """Number of regions currently in the queue."""
        return len(self.queue)

    @property
    def max_variance(self) -> int:
        return self.queue.peek_max().variance

    def leaves(self) -> Iterator[Region]:
        """Iterate over the current regions in no particular order."""
        return (entry.region for entry in self.queue)

    def split_step(self) -> None:
        """
        Replace the highest-variance region by its best pair of halves.

        Raises:
            UnsplittableRegion: If the head of the queue is a 1x1 region.
                The queue is left unchanged.
        """
        head = self.queue.peek_max()
        if not head.region.is_splittable:
            raise UnsplittableRegion(
                f"Region {head.region!r} with variance {head.variance} cannot be split")

        self.queue.pop_max()
        first, second = choose_split(self.raster, head.region)
        self.queue.push(first)
        self.queue.push(second)
        self.splits += 1

    def compress(self, tolerance: int, max_splits: Optional[int] = None) -> int:
        """
        Split regions until the largest variance is at most the tolerance.

        Terminates after at most width * height - 1 splits in total.

        Args:
            tolerance: Largest variance score accepted for a leaf region
            max_splits: Optional cap on the splits performed by this call

        Returns:
            Number of splits performed by this call

        Raises:
            InvalidTolerance: If tolerance is negative or not an integer
        """
        if (isinstance(tolerance, bool) or not isinstance(tolerance, numbers.Integral)
                or tolerance < 0):
            raise InvalidTolerance(f"Tolerance must be a non-negative integer, got {tolerance!r}")

        performed = 0
        while self.max_variance > tolerance:
            if max_splits is not None and performed >= max_splits:
                break
            self.split_step()
            performed += 1

        return performed

    def reconstruct(self) -> Raster:
        """Paint every leaf region with its mean colour into a new raster."""
        return reconstruct(self.raster, self.queue)
