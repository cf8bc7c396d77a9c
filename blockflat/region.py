"""
Region dataclass for adaptive block partitioning.
Represents a half-open rectangle [x_min, x_max) x [y_min, y_max) of a raster.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Region:
    """Represents a rectangular, half-open area of the raster."""

    x_min: int  # First column (inclusive)
    x_max: int  # Last column (exclusive)
    y_min: int  # First row (inclusive)
    y_max: int  # Last row (exclusive)

    def __post_init__(self):
        """Ensure the region has nonzero area."""
        if self.x_min < 0 or self.y_min < 0:
            raise ValueError(f"Negative region origin: {self!r}")
        if self.x_min >= self.x_max or self.y_min >= self.y_max:
            raise ValueError(f"Degenerate region: {self!r}")

    @classmethod
    def covering(cls, raster) -> 'Region':
        """Region spanning an entire raster."""
        return cls(0, raster.width, 0, raster.height)

    @property
    def width(self) -> int:
        """Number of columns."""
        return self.x_max - self.x_min

    @property
    def height(self) -> int:
        """Number of rows."""
        return self.y_max - self.y_min

    @property
    def area(self) -> int:
        """Number of pixels in the region."""
        return self.width * self.height

    @property
    def split_x(self) -> int:
        """Column where a vertical split would cut."""
        return (self.x_min + self.x_max) // 2

    @property
    def split_y(self) -> int:
        """Row where a horizontal split would cut."""
        return (self.y_min + self.y_max) // 2

    @property
    def can_split_x(self) -> bool:
        return self.x_min < self.split_x < self.x_max

    @property
    def can_split_y(self) -> bool:
        return self.y_min < self.split_y < self.y_max

    @property
    def is_splittable(self) -> bool:
        """False only for 1x1 regions."""
        return self.can_split_x or self.can_split_y

    def vertical_halves(self) -> Tuple['Region', 'Region']:
        """
        Split on x into a left and a right half.

        Returns:
            (left, right) regions that exactly partition this one

        Raises:
            ValueError: If the region is one column wide
        """
        sx = self.split_x
        return (Region(self.x_min, sx, self.y_min, self.y_max),
                Region(sx, self.x_max, self.y_min, self.y_max))

    def horizontal_halves(self) -> Tuple['Region', 'Region']:
        """
        Split on y into a top and a bottom half.

        Returns:
            (top, bottom) regions that exactly partition this one

        Raises:
            ValueError: If the region is one row tall
        """
        sy = self.split_y
        return (Region(self.x_min, self.x_max, self.y_min, sy),
                Region(self.x_min, self.x_max, sy, self.y_max))

    def fits(self, raster) -> bool:
        """Check that the region lies inside the raster's pixel grid."""
        return self.x_max <= raster.width and self.y_max <= raster.height

    def slices(self) -> Tuple[slice, slice]:
        """(row, column) slices for indexing an (H, W, C) array."""
        return slice(self.y_min, self.y_max), slice(self.x_min, self.x_max)

    def __repr__(self) -> str:
        return (f"Region(x={self.x_min}..{self.x_max}, "
                f"y={self.y_min}..{self.y_max})")
