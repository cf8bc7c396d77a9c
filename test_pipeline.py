"""Test the complete flattening pipeline and command line."""

import numpy as np
import pytest

from blockflat.main import (DEFAULT_TOLERANCE, FlattenResult, flatten_image,
                            flatten_raster, main)
from blockflat.preprocessing import load_raster, save_raster
from blockflat.raster import InvalidTolerance, Raster
from blockflat.synthetic import generate_synthetic_raster


@pytest.fixture
def input_png(tmp_path):
    path = tmp_path / "input.png"
    save_raster(generate_synthetic_raster(96, 64, seed=3), str(path))
    return path


def test_flatten_raster_counts(capsys):
    raster = generate_synthetic_raster(64, 64, seed=6)

    result = flatten_raster(raster, DEFAULT_TOLERANCE, verbose=True)

    assert isinstance(result, FlattenResult)
    assert result.leaf_count == result.splits + 1
    assert (result.raster.width, result.raster.height) == (64, 64)
    assert "Leaf regions:" in capsys.readouterr().out


def test_flatten_raster_is_quiet_by_default(capsys):
    flatten_raster(Raster(4, 4, bytes(64)))
    assert capsys.readouterr().out == ""


def test_flatten_raster_one_colour_per_leaf():
    raster = generate_synthetic_raster(64, 64, seed=12)
    result = flatten_raster(raster, 10_000)

    def colours(r):
        return len(np.unique(r.as_array().reshape(-1, 4), axis=0))

    assert colours(result.raster) <= result.leaf_count


def test_flatten_raster_rejects_negative_tolerance():
    with pytest.raises(InvalidTolerance):
        flatten_raster(Raster(2, 2, bytes(16)), -5)


def test_flatten_image_writes_output(tmp_path, input_png):
    out = tmp_path / "out.png"

    result = flatten_image(str(input_png), str(out), verbose=False)

    assert out.exists()
    assert load_raster(str(out)) == result.raster


def test_main_success(tmp_path, input_png, capsys):
    out = tmp_path / "cli.png"

    assert main([str(input_png), str(out), "--tolerance", "0", "--level", "1"]) == 0
    assert load_raster(str(out)) == load_raster(str(input_png))
    assert "Leaf regions:" in capsys.readouterr().out


def test_main_quiet_without_optimize(tmp_path, input_png, capsys):
    out = tmp_path / "quiet.png"

    assert main([str(input_png), str(out), "--quiet", "--no_optimize", "--max_splits", "5"]) == 0
    assert out.exists()
    assert capsys.readouterr().out == ""


def test_main_reports_missing_input(tmp_path, capsys):
    code = main([str(tmp_path / "missing.png"), str(tmp_path / "out.png")])

    assert code == 1
    assert capsys.readouterr().err.startswith("ERROR:")


@pytest.mark.parametrize("args", [
    ["in.png"],
    ["in.png", "out.png", "--tolerance", "-1"],
    ["in.png", "out.png", "--level", "12"],
])
def test_main_rejects_bad_arguments(args):
    with pytest.raises(SystemExit) as exc:
        main(args)
    assert exc.value.code == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
