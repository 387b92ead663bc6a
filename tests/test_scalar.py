import warnings

import numpy as np
import pytest

from htm_date.exceptions import InvalidConfiguration, InvalidInput
from htm_date.scalar import ScalarEncoder


def test_non_periodic_layout():
    enc = ScalarEncoder(min_val=0, max_val=1, w=3, radius=1.0, forced=True)
    assert enc.width == 6
    np.testing.assert_array_equal(enc.encode(0), [1, 1, 1, 0, 0, 0])
    np.testing.assert_array_equal(enc.encode(1), [0, 0, 0, 1, 1, 1])
    assert enc.get_bucket_index(0) == 0
    assert enc.get_bucket_index(1) == 3


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.0, [1, 1, 1, 1, 1, 0, 0, 0, 0, 0]),
        (1.0, [0, 0, 0, 0, 0, 1, 1, 1, 1, 1]),
        (2.0 / 3.0, [0, 0, 0, 1, 1, 1, 1, 1, 0, 0]),
    ],
)
def test_ramp_values(value, expected):
    enc = ScalarEncoder(min_val=0, max_val=1, w=5, radius=1.0, forced=True)
    assert enc.width == 10
    np.testing.assert_array_equal(enc.encode(value), expected)


def test_periodic_wraps_at_both_ends():
    enc = ScalarEncoder(min_val=0, max_val=7, w=3, radius=1.0, periodic=True, forced=True)
    assert enc.width == 21

    low = enc.encode(0)
    assert np.flatnonzero(low).tolist() == [0, 1, 20]
    assert enc.get_bucket_index(0) == 0

    high = enc.encode(6.9)
    assert np.flatnonzero(high).tolist() == [0, 19, 20]
    assert enc.get_bucket_index(6.9) == 20


def test_explicit_n_bits():
    enc = ScalarEncoder(min_val=0, max_val=100, n_bits=100, w=11, forced=True)
    assert enc.width == 100
    for value in (0, 12.5, 50, 99, 100):
        assert enc.encode(value).sum() == 11
    assert np.flatnonzero(enc.encode(100)).tolist() == list(range(89, 100))
    assert np.flatnonzero(enc.encode(0)).tolist() == list(range(0, 11))


def test_even_width_stays_inside_output():
    enc = ScalarEncoder(min_val=0, max_val=1, w=4, radius=1.0, forced=True)
    assert enc.width == 9
    assert np.flatnonzero(enc.encode(1)).tolist() == [5, 6, 7, 8]
    assert np.flatnonzero(enc.encode(0)).tolist() == [1, 2, 3, 4]


def test_out_of_range_inputs():
    periodic = ScalarEncoder(min_val=0, max_val=7, w=3, radius=1.0, periodic=True, forced=True)
    with pytest.raises(InvalidInput):
        periodic.encode(7)
    with pytest.raises(InvalidInput):
        periodic.encode(-0.5)

    bounded = ScalarEncoder(min_val=0, max_val=1, w=3, radius=1.0, forced=True)
    with pytest.raises(InvalidInput):
        bounded.encode(1.5)
    with pytest.raises(InvalidInput):
        bounded.encode(float("nan"))
    with pytest.raises(InvalidInput):
        bounded.encode("one")


def test_clip_input():
    enc = ScalarEncoder(min_val=0, max_val=1, w=3, radius=1.0, clip_input=True, forced=True)
    np.testing.assert_array_equal(enc.encode(-3), enc.encode(0))
    np.testing.assert_array_equal(enc.encode(7), enc.encode(1))


def test_missing_value_encodes_to_zeros():
    enc = ScalarEncoder(min_val=0, max_val=1, w=3, radius=1.0, forced=True)
    out = np.ones(enc.width, dtype=np.int32)
    enc.encode_into_array(None, out)
    assert out.sum() == 0
    assert enc.get_bucket_indices(None) == [None]


def test_failed_encode_leaves_buffer_untouched():
    enc = ScalarEncoder(min_val=0, max_val=1, w=3, radius=1.0, forced=True)
    out = np.full(enc.width, 7, dtype=np.int32)
    with pytest.raises(InvalidInput):
        enc.encode_into_array(2.0, out)
    assert (out == 7).all()


def test_short_output_buffer():
    enc = ScalarEncoder(min_val=0, max_val=1, w=3, radius=1.0, forced=True)
    with pytest.raises(InvalidInput):
        enc.encode_into_array(0, np.zeros(enc.width - 1, dtype=np.int32))


@pytest.mark.parametrize(
    "kwargs",
    [
        pytest.param({"w": 0, "radius": 1.0}, id="zero_w"),
        pytest.param({"w": 3, "radius": 1.0, "min_val": 5, "max_val": 5}, id="empty_range"),
        pytest.param({"w": 3}, id="no_radius_resolution_or_n"),
        pytest.param({"w": 3, "radius": -1.0}, id="negative_radius"),
        pytest.param({"w": 11, "n_bits": 11}, id="n_bits_not_above_w"),
        pytest.param({"w": 3, "radius": 91.5, "min_val": 0, "max_val": 7, "periodic": True},
                     id="radius_wider_than_periodic_range"),
    ],
)
def test_invalid_configuration(kwargs):
    with pytest.raises(InvalidConfiguration):
        ScalarEncoder(forced=True, **kwargs)


def test_small_w_warns_unless_forced():
    with pytest.warns(UserWarning, match="recommended"):
        ScalarEncoder(min_val=0, max_val=1, w=3, radius=1.0)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        ScalarEncoder(min_val=0, max_val=1, w=3, radius=1.0, forced=True)
        ScalarEncoder(min_val=0, max_val=100, w=21, radius=10.0)


def test_resolution_sets_radius():
    enc = ScalarEncoder(min_val=0, max_val=10, w=5, resolution=0.5, forced=True)
    assert enc.radius == pytest.approx(2.5)
    assert enc.get_description() == [(enc.name, 0)]
