"""
Test suite for the heyoka reference integrator.

These tests compile a Taylor integrator, so they take a few seconds.
"""

import math
import pytest
import numpy as np

from orrery import (ReferenceIntegrator, GravityField, Propagator, Body,
                    temp_config)


GM = 0.01
PERIOD = 2 * math.pi * 10.0    # circular orbit of radius 1 in the GM field


@pytest.fixture(scope="module")
def reference():
    with temp_config(VERBOSE=False):
        return ReferenceIntegrator(GravityField(GM))


class TestCompilation:

    def test_lazy_compile(self):
        with temp_config(VERBOSE=False):
            lazy = ReferenceIntegrator(GravityField(GM), compile=False)
            assert not lazy.is_compiled
            assert lazy.compile() is lazy
            assert lazy.is_compiled

    def test_requires_field(self):
        with pytest.raises(TypeError):
            ReferenceIntegrator(0.01)


class TestPropagate:

    def test_full_period_returns_to_start(self, reference):
        start = np.array([1.0, 0.0, 0.0, math.sqrt(GM)])
        end = reference.propagate(start, PERIOD)
        assert np.allclose(end, start, atol=1e-9)

    def test_half_period_opposite_side(self, reference):
        start = np.array([1.0, 0.0, 0.0, math.sqrt(GM)])
        end = reference.propagate(start, PERIOD / 2)
        assert np.allclose(end[:2], [-1.0, 0.0], atol=1e-9)

    def test_repeated_calls_are_independent(self, reference):
        start = [2.0, 0.0, 0.0, 0.05]
        first = reference.propagate(start, 5.0)
        second = reference.propagate(start, 5.0)
        assert np.array_equal(first, second)

    @pytest.mark.parametrize("state", [
        [1.0, 0.0, 0.0],
        [np.nan, 0.0, 0.0, 0.1],
        [0.0, 0.0, 0.1, 0.0],
    ])
    def test_invalid_state(self, reference, state):
        with pytest.raises(ValueError):
            reference.propagate(state, 1.0)


class TestDrift:

    def test_fallback_stays_close_to_reference(self, reference):
        """Ten one-second frames of symplectic Euler track the Taylor solution."""
        sun = Body.from_state('Sun', 1.989e30, 695700.0, 0.0, 0.0, fixed=True)
        probe = Body.from_state('Probe', 1.0, 1.0, 1.0, 0.0, 0.0, math.sqrt(GM))
        prop = Propagator([sun, probe], field=reference.field)
        for _ in range(10):
            prop.update(0.0, dt=1.0)
        truth = reference.propagate([1.0, 0.0, 0.0, math.sqrt(GM)], 10.0)
        drift = reference.drift(probe, sun, truth)
        assert drift < 1e-2
        assert drift > 0.0
