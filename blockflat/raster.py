"""
Raster container for block flattening.
Holds a row-major RGBA8 pixel buffer plus the error types raised by the package.
"""

import numbers
from dataclasses import dataclass

import numpy as np

CHANNELS = 4


class BlockflatError(Exception):
    """Base class for every error raised by blockflat."""


class InvalidRaster(BlockflatError, ValueError):
    """Raster dimensions or buffer do not describe a non-empty RGBA8 image."""


class InvalidTolerance(BlockflatError, ValueError):
    """Tolerance is not a non-negative integer."""


class UnsplittableRegion(BlockflatError, RuntimeError):
    """A 1x1 region reached the head of the partition queue."""


class ImageLoadError(BlockflatError, ValueError):
    """An image file could not be read or decoded."""


class ImageSaveError(BlockflatError, ValueError):
    """An image could not be encoded or written."""


@dataclass(frozen=True)
class Raster:
    """Immutable RGBA8 image, 4 bytes per pixel, rows stored top to bottom."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self):
        """Reject empty images and buffers of the wrong length."""
        for name in ('width', 'height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidRaster(f"Raster {name} must be an integer, got {value!r}")
            object.__setattr__(self, name, int(value))

        if self.width <= 0 or self.height <= 0:
            raise InvalidRaster(
                f"Raster must be non-empty, got {self.width} x {self.height}")

        # Copy into immutable bytes before measuring the length
        if isinstance(self.pixels, numbers.Integral):
            raise InvalidRaster(f"Pixel buffer must be a byte sequence, got {self.pixels!r}")
        try:
            pixels = bytes(self.pixels)
        except (TypeError, ValueError) as e:
            raise InvalidRaster(f"Pixel buffer is not a byte sequence: {e}") from e
        object.__setattr__(self, 'pixels', pixels)

        expected = self.width * self.height * CHANNELS
        if len(pixels) != expected:
            raise InvalidRaster(
                f"Expected {expected} bytes for {self.width} x {self.height} RGBA, "
                f"got {len(pixels)}")

    @property
    def shape(self) -> tuple:
        """Array shape (height, width, channels)."""
        return (self.height, self.width, CHANNELS)

    @property
    def area(self) -> int:
        """Number of pixels."""
        return self.width * self.height

    def as_array(self) -> np.ndarray:
        """
        View the pixel buffer as an (H, W, 4) uint8 array.

        The view shares memory with the immutable buffer and is read-only.
        """
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.shape)

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'Raster':
        """
        Build a raster from an (H, W, 4) uint8 array.

        Args:
            array: Pixel array in RGBA channel order

        Returns:
            New raster owning a copy of the data

        Raises:
            InvalidRaster: If the array is not (H, W, 4) uint8
        """
        if array.ndim != 3 or array.shape[2] != CHANNELS:
            raise InvalidRaster(f"Expected (H, W, 4) array, got shape {array.shape}")
        if array.dtype != np.uint8:
            raise InvalidRaster(f"Expected uint8 pixels, got {array.dtype}")

        h, w = array.shape[:2]
        return cls(width=w, height=h, pixels=np.ascontiguousarray(array).tobytes())

    def __repr__(self) -> str:
        return f"Raster(width={self.width}, height={self.height})"
