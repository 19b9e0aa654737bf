import numpy as np
import pytest

from noisimation.fields import Checkerboard, ScaleBias, make_field
from noisimation.sampler import depth_range, sample, sample_volume


class GradientField:
    def get(self, x, y, z):
        return x + 100 * y + 1000 * z


@pytest.mark.parametrize("width, height", [(1, 1), (10, 2), (3, 7), (0, 4)])
def test_sample_has_requested_dimensions(width, height):
    raster = sample(GradientField(), width, height, 0.0)
    assert raster.shape == (height, width)
    assert raster.dtype == np.uint16


def test_sample_indexes_rows_by_y_and_columns_by_x():
    raster = sample(GradientField(), 4, 3, 2.0)
    assert raster[0, 0] == 2000
    assert raster[0, 3] == 2003
    assert raster[2, 1] == 2201


def test_sample_truncates_toward_zero():
    class Fractional:
        def get(self, x, y, z):
            return 7.9

    raster = sample(Fractional(), 2, 2, 0.0)
    assert (raster == 7).all()


def test_sample_is_deterministic():
    field = ScaleBias(make_field("perlin", seed=3), scale=30000.0, bias=32767.0)
    first = sample(field, 16, 8, 4.5)
    second = sample(field, 16, 8, 4.5)
    np.testing.assert_array_equal(first, second)


def test_sample_rejects_negative_dimensions():
    with pytest.raises(ValueError):
        sample(GradientField(), -1, 2, 0.0)


def test_checkerboard_alternates_along_x():
    field = ScaleBias(Checkerboard(), scale=float(np.iinfo(np.uint16).max))
    raster = sample(field, 10, 2, 0.0)
    assert raster[0, 0] != raster[0, 1]
    assert {int(raster[0, 0]), int(raster[0, 1])} == {0, 65535}


def test_sample_volume_yields_one_raster_per_depth_in_order():
    rasters = list(sample_volume(GradientField(), 2, 2, [3.0, 1.0, 2.0]))
    assert len(rasters) == 3
    assert [int(r[0, 0]) for r in rasters] == [3000, 1000, 2000]


def test_sample_volume_of_no_depths_is_empty():
    assert list(sample_volume(GradientField(), 2, 2, [])) == []


def test_sample_volume_is_lazy(recording_field):
    volume = sample_volume(recording_field, 3, 2, [0.0, 5.0, 10.0])
    assert recording_field.depths == []

    next(volume)
    assert set(recording_field.depths) == {0.0}

    next(volume)
    assert set(recording_field.depths) == {0.0, 5.0}

    next(volume)
    assert len(recording_field.depths) == 3 * 3 * 2
    with pytest.raises(StopIteration):
        next(volume)


def test_sample_volume_is_single_pass():
    volume = sample_volume(GradientField(), 1, 1, [0.0, 1.0])
    assert len(list(volume)) == 2
    assert list(volume) == []


def test_depth_range_includes_both_ends():
    assert depth_range(0.0, 10.0, 3) == [0.0, 5.0, 10.0]
    assert depth_range(0.0, 10.0, 0) == []


def test_depth_range_rejects_negative_slices():
    with pytest.raises(ValueError):
        depth_range(0.0, 1.0, -1)


class _Values:
    def __init__(self, values):
        self.values = values

    def get(self, x, y, z):
        return self.values[int(x)]


def test_sample_saturates_out_of_range_values():
    field = _Values([-3.0, 65536.5, -0.9, 65535.9, float("nan"), float("inf")])
    raster = sample(field, 6, 1, 0.0)
    assert raster[0].tolist() == [0, 65535, 0, 65535, 0, 65535]


def test_unbiased_noise_keeps_negative_half_black():
    field = ScaleBias(make_field("open_simplex", seed=4), scale=65535.0)
    raw = np.array([[field.get(float(x), float(y), 3.0) for x in range(32)] for y in range(32)])
    raster = sample(field, 32, 32, 3.0)
    assert (raw < 0).any()
    assert (raster[raw < 0] == 0).all()
