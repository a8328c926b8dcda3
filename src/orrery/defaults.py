"""
Default Element Tables and Solar System Construction
====================================================

Heliocentric osculating elements for the planets and Ceres at
2025-10-04T00:00:00Z (Unix ms 1759536000000), the Sun as the fixed primary,
and the interstellar object 3I/ATLAS on its hyperbolic orbit.

Factory functions build fresh body lists on demand, since bodies carry
mutable per-frame state.

Examples
--------
>>> from orrery import solar_system, Propagator
>>> prop = Propagator(solar_system())
>>> prop_fast = Propagator(solar_system(with_orbits=False))  # trails instead
"""
from typing import Optional

from .body import Body, build_bodies
from .config import ScaleConfig

# epoch shared by the planetary table [Unix ms]
PLANET_EPOCH = 1759536000000

"""
Physical values: mass [kg], mean radius [km]
Elements: a [AU], e, i/omega/w/M [deg]
"""
SUN = Body.from_state('Sun', mass=1.989e30, radius=695700.0,
                      x=0.0, y=0.0, fixed=True)

MERCURY = dict(name='Mercury', mass=3.3014e23, radius=2439.7,
               a=0.3963303568552592, e=0.195146800949858,
               i=6.998467562564008, omega=48.54860929512073,
               w=29.90600153654426, M=152.5050447087461, epoch=PLANET_EPOCH)

VENUS = dict(name='Venus', mass=4.8675e24, radius=6051.8,
             a=0.7193075628881022, e=0.00961301922234237,
             i=3.395190616929889, omega=76.61547876637461,
             w=346.1809908562251, M=70.73681720932568, epoch=PLANET_EPOCH)

EARTH = dict(name='Earth', mass=5.9723e24, radius=6371.0,
             a=0.9884778595229721, e=0.0224665980676975,
             i=0.009361834796841753, omega=242.5714748746163,
             w=238.093817256785, M=252.1662094875961, epoch=PLANET_EPOCH)

MARS = dict(name='Mars', mass=6.4171e23, radius=3389.5,
            a=1.5361808446362526, e=0.09327957122076079,
            i=1.846149199958463, omega=49.67412197237504,
            w=284.0761205312491, M=271.5705002287118, epoch=PLANET_EPOCH)

CERES = dict(name='Ceres', mass=9.3835e20, radius=469.7,
             a=2.75335009, e=8.256884979564472e-02,
             i=1.059670287549551e+01, omega=8.022742118128347e+01,
             w=7.411014758807298e+01, M=2.204689200573771e+02,
             epoch=PLANET_EPOCH)

JUPITER = dict(name='Jupiter', mass=1.8982e27, radius=69911.0,
               a=5.196872446649367, e=0.04902661375752699,
               i=1.303775355536004, omega=100.4997221050677,
               w=273.2754318441118, M=82.23624259872942, epoch=PLANET_EPOCH)

SATURN = dict(name='Saturn', mass=5.6834e26, radius=58232.0,
              a=9.537827257799261, e=0.05454059430016105,
              i=2.488808873212828, omega=113.644119191983,
              w=338.5479951631343, M=272.6176161051636, epoch=PLANET_EPOCH)

URANUS = dict(name='Uranus', mass=8.681e25, radius=25362.0,
              a=19.188180030037476, e=0.04726029813008705,
              i=0.7726304037113545, omega=73.99333322935934,
              w=97.11194454391001, M=252.4895802486794, epoch=PLANET_EPOCH)

NEPTUNE = dict(name='Neptune', mass=1.02413e26, radius=24622.0,
               a=30.06973093117018, e=0.008593397795593868,
               i=1.775164447238822, omega=131.9635756395051,
               w=272.6698679970442, M=316.5089329576374, epoch=PLANET_EPOCH)

# 3I/ATLAS at perihelion (q ~ 1.356 AU), epoch as Julian Date
ATLAS = dict(name='3I/ATLAS', mass=1e13, radius=2.8,
             a=-0.26405, e=6.137, i=175.11, omega=322.16, w=128.01,
             M=0.0, epoch=2460977.98)

# the same object as a raw state [sim units, sim units/s] for the
# numeric fallback (1 AU == 215 sim units)
ATLAS_STATE = dict(name='3I/ATLAS', mass=1e13, radius=2.8,
                   x=-260.8, y=-412.8, vx=-3.24e-5, vy=8.91e-5)

SOLAR_SYSTEM = (MERCURY, VENUS, EARTH, MARS, CERES,
                JUPITER, SATURN, URANUS, NEPTUNE)


def solar_system(
    with_orbits: bool = True,
    at_time: Optional[float] = None,
    include_atlas: bool = True,
    numeric_atlas: bool = False,
    scale: Optional[ScaleConfig] = None
):
    """
    Sun, planets and Ceres (and optionally 3I/ATLAS) as a fresh body list.

    Parameters
    ----------
    with_orbits : bool, optional
        Precompute static orbit paths (default True)
    at_time : float, optional
        Time [Unix ms] of the initial states (default: element epochs)
    include_atlas : bool, optional
        Add 3I/ATLAS (default True)
    numeric_atlas : bool, optional
        Integrate 3I/ATLAS numerically from ATLAS_STATE instead of solving
        its hyperbolic elements (default False)
    scale : ScaleConfig, optional
        Unit scale (default config.SCALE)

    Returns
    -------
    list of Body
    """
    records = list(SOLAR_SYSTEM)
    if include_atlas:
        records.append(ATLAS_STATE if numeric_atlas else ATLAS)
    return build_bodies(records, primary=SUN.copy(), with_orbits=with_orbits,
                        at_time=at_time, scale=scale)
