"""Test suite for the default solar system tables."""

import math
import pytest
import numpy as np

from orrery import solar_system, SOLAR_SYSTEM, SUN, Propagator, PropagationMode
from orrery.defaults import ATLAS, ATLAS_STATE, PLANET_EPOCH


MS_PER_DAY = 86_400_000.0


def test_body_order():
    bodies = solar_system(with_orbits=False)
    names = [b.name for b in bodies]
    assert names[0] == 'Sun'
    assert names[1:-1] == [r['name'] for r in SOLAR_SYSTEM]
    assert names[-1] == '3I/ATLAS'


def test_fresh_lists():
    """Each call builds new bodies so frame state is never shared."""
    a = solar_system(with_orbits=False, include_atlas=False)
    b = solar_system(with_orbits=False, include_atlas=False)
    assert all(x is not y for x, y in zip(a, b))
    assert a[0] is not SUN


def test_orbits_precomputed():
    bodies = solar_system()
    for body in bodies[1:]:
        assert body.orbit is not None
        assert body.trail is None


def test_earth_near_one_au():
    earth = solar_system(with_orbits=False)[3]
    assert earth.name == 'Earth'
    assert math.hypot(earth.x, earth.y) / 215.0 == pytest.approx(1.0, abs=0.03)


def test_atlas_open_orbit():
    atlas = solar_system()[-1]
    assert atlas.mode == PropagationMode.ANALYTIC
    assert atlas.elements.is_hyperbolic
    assert not np.allclose(atlas.orbit[0], atlas.orbit[-1])


def test_atlas_at_perihelion():
    """At its element epoch 3I/ATLAS sits at q = |a|(e - 1)."""
    atlas = solar_system(with_orbits=False)[-1]
    q = abs(ATLAS['a']) * (ATLAS['e'] - 1)
    assert math.hypot(atlas.x, atlas.y) / 215.0 <= q + 1e-9


def test_numeric_atlas():
    bodies = solar_system(with_orbits=False, numeric_atlas=True)
    atlas = bodies[-1]
    assert atlas.mode == PropagationMode.NUMERIC
    assert (atlas.x, atlas.y) == (ATLAS_STATE['x'], ATLAS_STATE['y'])
    prop = Propagator(bodies)
    prop.update(PLANET_EPOCH, dt=1.0)
    assert len(atlas.trail) == 100


def test_frame_loop_runs():
    prop = Propagator(solar_system(with_orbits=False))
    for k in range(5):
        prop.update(PLANET_EPOCH + k * MS_PER_DAY, dt=1.0)
    snap = prop.snapshot()
    assert np.all(np.isfinite(snap[['x', 'y', 'vx', 'vy']].to_numpy()))
    assert snap.loc[0, 'x'] == 0.0
