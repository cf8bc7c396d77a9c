"""
Image file collaborators for block flattening.
Handles decoding files into RGBA rasters and encoding rasters back to PNG.
"""

import os
from typing import List

import cv2
import numpy as np

from blockflat.raster import ImageLoadError, ImageSaveError, Raster

# Deflate strategies tried by the lossless optimization pass
PNG_STRATEGIES = [
    cv2.IMWRITE_PNG_STRATEGY_DEFAULT,
    cv2.IMWRITE_PNG_STRATEGY_FILTERED,
    cv2.IMWRITE_PNG_STRATEGY_HUFFMAN_ONLY,
    cv2.IMWRITE_PNG_STRATEGY_RLE,
    cv2.IMWRITE_PNG_STRATEGY_FIXED,
]


def load_image(image_path: str) -> np.ndarray:
    """
    Load an image from file, keeping alpha and bit depth.

    Args:
        image_path: Path to the image file

    Returns:
        Image as numpy array (BGR/BGRA or grayscale)

    Raises:
        ImageLoadError: If the file is missing or cannot be decoded
    """
    if not os.path.isfile(image_path):
        raise ImageLoadError(f"Failed to open `{image_path}`: no such file")

    image = cv2.imread(image_path, cv2.IMREAD_UNCHANGED)

    if image is None:
        raise ImageLoadError(f"Failed to decode `{image_path}`")

    return image


def to_rgba(image: np.ndarray) -> np.ndarray:
    """
    Convert a decoded image to 8-bit RGBA.

    Args:
        image: Grayscale, BGR or BGRA image of 8 or 16 bits per channel

    Returns:
        (H, W, 4) uint8 array in RGBA order
    """
    if image.dtype == np.uint16:
        # Keep the high byte
        image = (image >> 8).astype(np.uint8)
    elif image.dtype != np.uint8:
        raise ImageLoadError(f"Unsupported pixel depth: {image.dtype}")

    # Check if grayscale
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)

    if image.shape[2] == 1:
        return cv2.cvtColor(image[:, :, 0], cv2.COLOR_GRAY2RGBA)
    elif image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
    elif image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    else:
        raise ImageLoadError(f"Unexpected number of channels: {image.shape[2]}")


def load_raster(image_path: str) -> Raster:
    """
    Decode an image file into an RGBA8 raster.

    Args:
        image_path: Path to the image file

    Returns:
        Raster with the image's dimensions
    """
    return Raster.from_array(to_rgba(load_image(image_path)))


def _to_bgra(raster: Raster) -> np.ndarray:
    return cv2.cvtColor(raster.as_array(), cv2.COLOR_RGBA2BGRA)


def encode_png(raster: Raster, level: int = 9,
               strategy: int = cv2.IMWRITE_PNG_STRATEGY_DEFAULT) -> bytes:
    """
    Encode a raster as an RGBA PNG.

    Args:
        raster: Raster to encode
        level: Deflate compression level (0-9)
        strategy: OpenCV PNG deflate strategy

    Returns:
        PNG file contents

    Raises:
        ImageSaveError: If encoding fails
    """
    if not 0 <= level <= 9:
        raise ImageSaveError(f"PNG compression level must be 0-9, got {level}")

    params = [cv2.IMWRITE_PNG_COMPRESSION, level, cv2.IMWRITE_PNG_STRATEGY, strategy]
    success, buf = cv2.imencode('.png', _to_bgra(raster), params)
    if not success:
        raise ImageSaveError("Failed to encode image to PNG")

    return buf.tobytes()


def optimize_png(raster: Raster, level: int = 9) -> bytes:
    """
    Losslessly shrink the PNG encoding of a raster.

    Every deflate strategy is tried and the smallest stream is kept.
    Pixel values are identical whichever one wins.

    Args:
        raster: Raster to encode
        level: Deflate compression level (0-9)

    Returns:
        Smallest PNG file contents found
    """
    candidates: List[bytes] = [encode_png(raster, level, s) for s in PNG_STRATEGIES]
    return min(candidates, key=len)


def save_raster(raster: Raster, output_path: str, level: int = 9, optimize: bool = True) -> int:
    """
    Save a raster to a PNG file.

    Args:
        raster: Raster to save
        output_path: Output file path
        level: Deflate compression level (0-9)
        optimize: If True, run the lossless optimization pass

    Returns:
        Number of bytes written

    Raises:
        ImageSaveError: If encoding or writing fails
    """
    data = optimize_png(raster, level) if optimize else encode_png(raster, level)

    try:
        with open(output_path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise ImageSaveError(f"Failed to write image to `{output_path}`: {e}") from e

    return len(data)
