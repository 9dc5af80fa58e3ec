from __future__ import annotations

import numpy as np
import pytest

from voxel_world.core.noise import fractal_field, hash_2d, hash_unit, noise_field


def test_hash_is_deterministic_and_32bit():
    a = hash_2d(17, -42, 12345)
    b = hash_2d(17, -42, 12345)
    assert a == b
    assert isinstance(a, int)
    assert 0 <= a < 2**32


def test_hash_depends_on_every_input():
    base = hash_2d(3, 4, 99)
    assert hash_2d(4, 4, 99) != base
    assert hash_2d(3, 5, 99) != base
    assert hash_2d(3, 4, 100) != base
    # swapped axes must not collide
    assert hash_2d(4, 3, 99) != base


def test_seed_wraps_to_32_bits():
    assert hash_2d(1, 2, 2**32 + 7) == hash_2d(1, 2, 7)


def test_hash_unit_range_and_vector_agreement():
    xs = np.arange(-50, 50)
    zs = np.arange(0, 100)
    values = hash_unit(xs, zs, 2024)
    assert values.shape == (100,)
    assert values.min() >= 0.0
    assert values.max() < 1.0
    for x, z, value in zip(xs[:10], zs[:10], values[:10]):
        assert hash_unit(int(x), int(z), 2024) == value


def test_noise_field_matches_lattice_hash_at_integers():
    for x, z in [(0, 0), (3, -2), (-7, 11), (250, 250)]:
        assert noise_field(float(x), float(z), 77) == hash_unit(x, z, 77)


def test_noise_field_is_deterministic_and_bounded():
    rng = np.random.default_rng(5)
    xs = rng.uniform(-500.0, 500.0, size=2000)
    zs = rng.uniform(-500.0, 500.0, size=2000)
    first = noise_field(xs, zs, 31337)
    second = noise_field(xs, zs, 31337)
    np.testing.assert_array_equal(first, second)
    assert first.min() >= 0.0
    assert first.max() < 1.0


def test_noise_field_scalar_matches_vector():
    xs = np.array([0.25, 1.75, -3.5, 10.125])
    zs = np.array([-0.5, 2.25, 7.0, -9.875])
    vector = noise_field(xs, zs, 8)
    for x, z, value in zip(xs, zs, vector):
        result = noise_field(float(x), float(z), 8)
        assert isinstance(result, float)
        assert result == value


def test_noise_field_is_continuous_between_lattice_points():
    xs = np.linspace(2.0, 3.0, 101)
    values = noise_field(xs, np.full_like(xs, 5.0), 4)
    steps = np.abs(np.diff(values))
    assert steps.max() < 0.05
    assert values[0] == pytest.approx(hash_unit(2, 5, 4))
    assert values[-1] == pytest.approx(hash_unit(3, 5, 4))


def test_noise_field_has_no_axis_banding():
    xs = np.arange(200) * 0.37
    along_x = noise_field(xs, np.zeros_like(xs), 1)
    along_z = noise_field(np.zeros_like(xs), xs, 1)
    assert along_x.std() > 0.05
    assert along_z.std() > 0.05
    assert not np.allclose(along_x, along_z)


def test_fractal_field_single_octave_is_noise_field():
    xs = np.linspace(-4.0, 4.0, 33)
    zs = np.linspace(3.0, -3.0, 33)
    np.testing.assert_array_equal(fractal_field(xs, zs, 55, octaves=1), noise_field(xs, zs, 55))


def test_fractal_field_stays_in_unit_interval():
    xs = np.linspace(-100.0, 100.0, 500)
    values = fractal_field(xs, xs[::-1], 9, octaves=5, persistence=0.6)
    assert values.min() >= 0.0
    assert values.max() < 1.0
    assert not np.array_equal(values, noise_field(xs, xs[::-1], 9))


def test_hash_values_are_pinned():
    # fixed constants, so a hash that depends on process state would fail
    assert hash_2d(0, 0, 0) == 377036288
    assert hash_2d(1, 0, 0) == 3365260061
    assert hash_2d(17, -42, 12345) == 3993163324
    assert hash_unit(17, -42, 12345) == 3993163324 / 2**32
    assert noise_field(5.0, 7.0, 12345) == 935514565 / 2**32
