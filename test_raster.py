"""Tests for the Raster container and its validation."""

import numpy as np
import pytest

from blockflat.raster import BlockflatError, InvalidRaster, Raster


def test_raster_roundtrip_array():
    arr = np.arange(2 * 3 * 4, dtype=np.uint8).reshape(2, 3, 4)
    raster = Raster.from_array(arr)

    assert raster.width == 3
    assert raster.height == 2
    assert raster.area == 6
    assert raster.shape == (2, 3, 4)
    np.testing.assert_array_equal(raster.as_array(), arr)


def test_array_view_is_read_only():
    raster = Raster(2, 2, bytes(16))
    view = raster.as_array()

    assert not view.flags.writeable
    with pytest.raises(ValueError):
        view[0, 0, 0] = 1


def test_mutable_buffer_is_copied():
    buf = bytearray(4)
    raster = Raster(1, 1, buf)
    buf[0] = 99

    assert isinstance(raster.pixels, bytes)
    assert raster.pixels[0] == 0


@pytest.mark.parametrize("width,height,length", [
    (0, 1, 0),
    (1, 0, 0),
    (-1, 2, 8),
    (2, 2, 15),
    (2, 2, 17),
    (2.0, 2, 16),
    (2, True, 8),
    ("2", 2, 16),
])
def test_invalid_raster(width, height, length):
    with pytest.raises(InvalidRaster):
        Raster(width, height, bytes(length))


@pytest.mark.parametrize("pixels", [
    np.array([1, 2, 3, 4], dtype=np.uint16),
    [1, 2, 3, 300],
    4,
    "abcd",
])
def test_buffer_must_hold_exact_bytes(pixels):
    with pytest.raises(InvalidRaster):
        Raster(1, 1, pixels)


def test_numpy_dimensions_become_ints():
    raster = Raster(np.int64(2), np.uint8(1), bytes(8))

    assert type(raster.width) is int and type(raster.height) is int
    assert raster.as_array().shape == (1, 2, 4)


def test_invalid_raster_is_value_error():
    with pytest.raises(ValueError):
        Raster(1, 1, b"")
    assert issubclass(InvalidRaster, BlockflatError)


def test_from_array_rejects_bad_shape_and_dtype():
    with pytest.raises(InvalidRaster):
        Raster.from_array(np.zeros((2, 2, 3), dtype=np.uint8))
    with pytest.raises(InvalidRaster):
        Raster.from_array(np.zeros((2, 2), dtype=np.uint8))
    with pytest.raises(InvalidRaster):
        Raster.from_array(np.zeros((2, 2, 4), dtype=np.uint16))
    with pytest.raises(InvalidRaster):
        Raster.from_array(np.zeros((0, 2, 4), dtype=np.uint8))


def test_from_array_non_contiguous():
    arr = np.arange(4 * 4 * 4, dtype=np.uint8).reshape(4, 4, 4)[:, ::2]
    raster = Raster.from_array(arr)
    np.testing.assert_array_equal(raster.as_array(), arr)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
