"""Test suite for the central-body gravity field."""

import math
import pytest
import numpy as np

from orrery import GravityField, ScaleConfig


class TestAcceleration:

    def test_magnitude_and_direction(self):
        field = GravityField(gm=4.0)
        acc = field.acceleration_toward([0.0, 0.0], [2.0, 0.0])
        assert np.allclose(acc, [-1.0, 0.0])

    def test_points_at_offset_primary(self):
        field = GravityField(gm=1.0)
        acc = field.acceleration_toward([1.0, 1.0], [4.0, 5.0])
        r = 5.0
        assert np.linalg.norm(acc) == pytest.approx(1.0 / r**2)
        assert np.allclose(acc / np.linalg.norm(acc), [-0.6, -0.8])

    def test_inverse_square(self):
        field = GravityField(gm=1.0)
        near = np.linalg.norm(field.acceleration_toward([0, 0], [1.0, 0]))
        far = np.linalg.norm(field.acceleration_toward([0, 0], [3.0, 0]))
        assert near / far == pytest.approx(9.0)

    def test_zero_at_coincident_positions(self):
        """No singularity when the body sits on the primary."""
        acc = GravityField(gm=1.0).acceleration_toward([2.0, 3.0], [2.0, 3.0])
        assert np.array_equal(acc, [0.0, 0.0])


class TestConstruction:

    @pytest.mark.parametrize("gm", [0.0, -1.0, float('nan'), float('inf')])
    def test_invalid_gm(self, gm):
        with pytest.raises(ValueError):
            GravityField(gm)

    def test_solar_gm_in_default_units(self):
        """k² · 215³ / 86400² is about 3.94e-7 sim units³/s²."""
        field = GravityField.from_scale()
        expected = 0.01720209895**2 * 215.0**3 / 86400.0**2
        assert field.gm == pytest.approx(expected)
        assert field.gm == pytest.approx(3.94e-7, rel=1e-2)

    def test_gm_follows_scale(self):
        small = GravityField.from_scale(ScaleConfig(au_to_sim=1.0))
        large = GravityField.from_scale(ScaleConfig(au_to_sim=10.0))
        assert large.gm / small.gm == pytest.approx(1000.0)

    def test_circular_helpers(self):
        field = GravityField(gm=0.01)
        assert field.circular_speed(1.0) == pytest.approx(0.1)
        assert field.period(1.0) == pytest.approx(2 * math.pi * 10.0)
