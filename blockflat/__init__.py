"""Adaptive block flattening of RGBA rasters."""

from blockflat.partition import PartitionEngine, choose_split
from blockflat.partition_queue import PartitionQueue
from blockflat.raster import (BlockflatError, ImageLoadError, ImageSaveError,
                              InvalidRaster, InvalidTolerance, Raster,
                              UnsplittableRegion)
from blockflat.reconstruct import reconstruct
from blockflat.region import Region
from blockflat.statistics import ScoredRegion, region_mean, variance_score

__all__ = [
    "BlockflatError",
    "ImageLoadError",
    "ImageSaveError",
    "InvalidRaster",
    "InvalidTolerance",
    "PartitionEngine",
    "PartitionQueue",
    "Raster",
    "Region",
    "ScoredRegion",
    "UnsplittableRegion",
    "choose_split",
    "reconstruct",
    "region_mean",
    "variance_score",
]
