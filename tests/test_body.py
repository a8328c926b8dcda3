"""
Test suite for Body and table-driven body construction.

Tests include:
1. Propagation mode selection
2. Orbit / trail exclusivity
3. Input validation
4. build_bodies from dicts and DataFrames
"""

import pytest
import numpy as np
import pandas as pd

from orrery import (Body, PropagationMode, build_bodies, OE, KeplerSolver,
                    Propagator, GravityField, ScaleConfig, SUN)


J2000_MS = 946728000000.0

EARTH = {'name': 'Earth', 'a': 1.0, 'e': 0.0167, 'i': 0.0, 'omega': 0.0,
         'w': 102.9, 'M': 100.5, 'epoch': 2451545.0,
         'radius': 6371.0, 'mass': 5.97e24}
PROBE = {'name': 'Probe', 'x': 100.0, 'y': 0.0, 'vx': 0.0, 'vy': 1e-4,
         'radius': 1.0, 'mass': 1000.0}


def earth_elements():
    return OE(a=1.0, e=0.0167, i=0.0, omega=0.0, w=102.9, M=100.5,
              epoch=2451545.0)


# =============================================================================
# Modes
# =============================================================================

class TestModes:

    def test_elements_make_analytic(self):
        body = Body.from_elements('Earth', earth_elements(), 5.97e24, 6371.0)
        assert body.mode == PropagationMode.ANALYTIC
        assert not body.is_primary

    def test_state_makes_numeric(self):
        body = Body.from_state('Probe', 1.0, 1.0, 10.0, 0.0, 0.0, 0.5)
        assert body.mode == PropagationMode.NUMERIC
        assert body.elements is None

    def test_fixed_primary(self):
        sun = Body.from_state('Sun', 1.989e30, 695700.0, 0.0, 0.0, fixed=True)
        assert sun.mode == PropagationMode.FIXED
        assert sun.is_primary
        assert sun.trail is None and sun.orbit is None

    def test_fixed_body_rejects_elements(self):
        with pytest.raises(ValueError, match="fixed"):
            Body('Sun', 1.0, 1.0, elements=earth_elements(), fixed=True)


# =============================================================================
# Orbit / trail
# =============================================================================

class TestOrbitAndTrail:

    def test_analytic_body_with_orbit_has_no_trail(self):
        body = Body.from_elements('Earth', earth_elements(), 5.97e24, 6371.0)
        assert body.orbit is not None
        assert body.orbit.shape[1] == 2
        assert body.trail is None

    def test_analytic_body_without_orbit_has_trail(self):
        body = Body.from_elements('Earth', earth_elements(), 5.97e24, 6371.0,
                                  with_orbit=False)
        assert body.orbit is None
        assert len(body.trail) == 0

    def test_orbit_is_write_once(self):
        body = Body.from_elements('Earth', earth_elements(), 5.97e24, 6371.0)
        with pytest.raises(ValueError):
            body.orbit[0, 0] = 0.0
        with pytest.raises(AttributeError):
            body.orbit = None

    def test_orbit_shape_checked(self):
        with pytest.raises(ValueError, match="shape"):
            Body('Earth', 1.0, 1.0, elements=earth_elements(),
                 orbit=np.zeros((4, 3)))

    def test_numeric_body_rejects_orbit(self):
        """Numeric bodies must keep a trail for the frame loop."""
        with pytest.raises(ValueError, match="static orbit"):
            Body('Probe', 1.0, 1.0, 2.0, 0.0, orbit=[[2.0, 0.0], [0.0, 2.0]])

    def test_frame_runs_for_every_accepted_numeric_body(self):
        sun = Body.from_state('Sun', 1.989e30, 695700.0, 0.0, 0.0, fixed=True)
        first = Body.from_state('A', 1.0, 1.0, 1.0, 0.0, 0.0, 0.1)
        second = Body.from_state('B', 1.0, 1.0, 2.0, 0.0, 0.0, 0.05)
        prop = Propagator([sun, first, second], field=GravityField(0.01))
        prop.update(0.0, dt=1.0)
        assert len(first.trail) == 100
        assert len(second.trail) == 100


# =============================================================================
# State and validation
# =============================================================================

class TestState:

    def test_initial_state_matches_solver(self):
        oe = earth_elements()
        body = Body.from_elements('Earth', oe, 5.97e24, 6371.0,
                                  at_time=J2000_MS + 86_400_000.0)
        expected = KeplerSolver().solve(oe, J2000_MS + 86_400_000.0).to_sim()
        assert np.allclose((body.x, body.y, body.vx, body.vy), expected)

    def test_direct_construction_solves_state(self):
        """Elements without a state start on the orbit, not on the primary."""
        oe = earth_elements()
        body = Body('Earth', 5.97e24, 6371.0, elements=oe)
        expected = KeplerSolver().solve(oe, oe.epoch_ms).to_sim()
        assert np.allclose((body.x, body.y, body.vx, body.vy), expected)
        assert np.hypot(body.x, body.y) > 200.0

    def test_explicit_state_wins_over_elements(self):
        body = Body('Earth', 5.97e24, 6371.0, 1.0, 2.0, 0.0, 0.0,
                    elements=earth_elements())
        assert (body.x, body.y) == (1.0, 2.0)

    def test_state_is_read_only(self):
        body = Body.from_state('Probe', 1.0, 1.0, 1.0, 2.0)
        with pytest.raises(AttributeError):
            body.x = 5.0
        pos = body.position
        pos[0] = 99.0
        assert body.x == 1.0

    def test_radius_sim(self):
        body = Body.from_state('Probe', 1.0, 149597870.7, 0.0, 0.0)
        assert body.radius_sim() == pytest.approx(215.0)
        assert body.radius_sim(ScaleConfig(au_to_sim=2.0)) == pytest.approx(2.0)

    @pytest.mark.parametrize("kwargs, match", [
        (dict(name='', mass=1.0, radius=1.0), "name"),
        (dict(name='X', mass=0.0, radius=1.0), "Mass"),
        (dict(name='X', mass=1.0, radius=-1.0), "Radius"),
        (dict(name='X', mass=1.0, radius=1.0, x=np.nan), "NaN"),
    ])
    def test_validation(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            Body(**kwargs)

    def test_elements_type_checked(self):
        with pytest.raises(TypeError):
            Body('X', 1.0, 1.0, elements=[1.0, 0.0, 0, 0, 0, 0])

    def test_copy_resets_trail(self):
        body = Body.from_state('Probe', 1.0, 1.0, 1.0, 2.0)
        body.trail.push((1.0, 2.0), max_length=5)
        clone = body.copy()
        assert (clone.x, clone.y) == (1.0, 2.0)
        assert len(clone.trail) == 0
        assert clone.trail is not body.trail


# =============================================================================
# Table construction
# =============================================================================

class TestBuildBodies:

    def test_primary_first_then_table_order(self):
        bodies = build_bodies([EARTH, PROBE])
        assert [b.name for b in bodies] == ['Sun', 'Earth', 'Probe']
        assert bodies[0].mode == PropagationMode.FIXED
        assert bodies[1].mode == PropagationMode.ANALYTIC
        assert bodies[2].mode == PropagationMode.NUMERIC

    def test_default_primary_is_a_copy(self):
        bodies = build_bodies([EARTH])
        assert bodies[0] is not SUN
        assert bodies[0].name == SUN.name

    def test_without_orbits(self):
        bodies = build_bodies([EARTH], with_orbits=False)
        assert bodies[1].orbit is None
        assert bodies[1].trail is not None

    def test_from_dataframe(self):
        """Mixed tables work: NaN columns are ignored per row."""
        df = pd.DataFrame([EARTH, PROBE])
        bodies = build_bodies(df)
        assert [b.mode for b in bodies[1:]] == [PropagationMode.ANALYTIC,
                                                PropagationMode.NUMERIC]
        assert bodies[2].vy == pytest.approx(1e-4)

    def test_custom_primary(self):
        star = Body.from_state('Star', 2e30, 7e5, 0.0, 0.0, fixed=True)
        assert build_bodies([PROBE], primary=star)[0] is star

    def test_primary_must_be_fixed(self):
        not_fixed = Body.from_state('Star', 2e30, 7e5, 0.0, 0.0)
        with pytest.raises(ValueError, match="fixed"):
            build_bodies([PROBE], primary=not_fixed)

    def test_duplicate_names(self):
        with pytest.raises(ValueError, match="Duplicate"):
            build_bodies([EARTH, EARTH])

    def test_missing_mass(self):
        record = {k: v for k, v in EARTH.items() if k != 'mass'}
        with pytest.raises(ValueError, match="mass"):
            build_bodies([record])

    def test_record_without_elements_or_state(self):
        with pytest.raises(ValueError, match="neither"):
            build_bodies([{'name': 'Ghost', 'mass': 1.0, 'radius': 1.0}])

    def test_common_start_time(self):
        t = J2000_MS + 10 * 86_400_000.0
        bodies = build_bodies([EARTH], at_time=t, with_orbits=False)
        expected = KeplerSolver().solve(earth_elements(), t).to_sim()
        assert np.allclose((bodies[1].x, bodies[1].y), expected[:2])
