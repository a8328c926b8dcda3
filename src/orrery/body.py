'''Simulated bodies and their construction from element tables
Body class definition'''

import numpy as np
from enum import Enum
from typing import Optional, Mapping, List

from .config import config, ScaleConfig
from .kepler import KeplerSolver
from .orbital_elements import OrbitalElements
from .sampler import OrbitSampler
from .trail import Trail


# define an enumerated list of propagation modes
class PropagationMode(Enum):
    ANALYTIC = 'analytic'   # positions solved from orbital elements
    NUMERIC = 'numeric'     # integrated about the primary
    FIXED = 'fixed'         # the primary itself, never moved


class Body:
    """
    A body of the simulation: identity, physical attributes and kinematic state.

    The propagation mode is decided once here: bodies with orbital elements
    are propagated analytically, bodies without are integrated numerically
    about the primary, and a body built with ``fixed=True`` stays put.
    Kinematic state (x, y, vx, vy) is read-only from the outside and only
    rewritten by the Propagator. A body carries either a static ``orbit``
    (write-once) or a ``trail``, never both.

    Parameters
    ----------
    name : str
        Body identifier
    mass : float
        Mass [kg]
    radius : float
        Physical radius [km]
    x, y : float, optional
        Position [sim units]. When elements are given and no state is,
        the state is solved at the element epoch; otherwise defaults to 0.
    vx, vy : float, optional
        Velocity [sim units/s]
    elements : OrbitalElements, optional
        Present for analytically propagated bodies
    orbit : array-like, optional
        Precomputed path of shape (n, 2) [sim units]
    fixed : bool, optional
        Mark the body as the immovable primary
    """

    def __init__(
        self,
        name: str,
        mass: float,
        radius: float,
        x: Optional[float] = None,
        y: Optional[float] = None,
        vx: Optional[float] = None,
        vy: Optional[float] = None,
        elements: Optional[OrbitalElements] = None,
        orbit=None,
        fixed: bool = False
    ):
        # Validate inputs
        if not name:
            raise ValueError("Body requires a name")
        if mass <= 0:
            raise ValueError(f"Mass must be positive, got {mass}")
        if radius <= 0:
            raise ValueError(f"Radius must be positive, got {radius}")
        if elements is not None and not isinstance(elements, OrbitalElements):
            raise TypeError(f"elements must be OrbitalElements, "
                            f"got {type(elements)}")
        if fixed and elements is not None:
            raise ValueError("A fixed primary cannot carry orbital elements")
        state = (x, y, vx, vy)
        if elements is not None and all(v is None for v in state):
            # place the body on its orbit rather than on the primary
            state = KeplerSolver().solve(elements, elements.epoch_ms).to_sim()
        x, y, vx, vy = (0.0 if v is None else v for v in state)
        if not np.all(np.isfinite([x, y, vx, vy])):
            raise ValueError(f"Initial state of '{name}' contains NaN or Inf")

        self._name = name
        self._mass = float(mass)
        self._radius = float(radius)
        self._elements = elements
        self._x, self._y = float(x), float(y)
        self._vx, self._vy = float(vx), float(vy)

        if fixed:
            self._mode = PropagationMode.FIXED
        elif elements is not None:
            self._mode = PropagationMode.ANALYTIC
        else:
            self._mode = PropagationMode.NUMERIC

        if orbit is not None:
            if self._mode == PropagationMode.FIXED:
                raise ValueError("A fixed primary has no orbit")
            if self._mode == PropagationMode.NUMERIC:
                raise ValueError(
                    f"Numerically integrated body '{name}' records a trail "
                    f"and cannot carry a static orbit")
            orbit = np.array(orbit, dtype=float)
            if orbit.ndim != 2 or orbit.shape[1] != 2:
                raise ValueError(f"Orbit must have shape (n, 2), got {orbit.shape}")
            orbit.flags.writeable = False
        self._orbit = orbit
        # bodies without a static path record where they have been instead
        if orbit is None and self._mode != PropagationMode.FIXED:
            self._trail = Trail()
        else:
            self._trail = None

    # ========== ALTERNATE CONSTRUCTORS ==========
    @classmethod
    def from_elements(
        cls,
        name: str,
        elements: OrbitalElements,
        mass: float,
        radius: float,
        at_time: Optional[float] = None,
        with_orbit: bool = True,
        solver: Optional[KeplerSolver] = None,
        scale: Optional[ScaleConfig] = None
    ) -> "Body":
        """
        Analytic body placed on its orbit.

        Parameters
        ----------
        at_time : float, optional
            Time [Unix ms] of the initial state (default: element epoch)
        with_orbit : bool, optional
            Precompute the static orbit path (default True). Without it the
            body records a trail instead.
        """
        solver = solver or KeplerSolver()
        scale = scale or config.SCALE
        if at_time is None:
            at_time = elements.epoch_ms
        x, y, vx, vy = solver.solve(elements, at_time).to_sim(scale)
        orbit = None
        if with_orbit:
            orbit = OrbitSampler(solver, scale).compute_orbit_points(elements)
        return cls(name, mass, radius, x, y, vx, vy,
                   elements=elements, orbit=orbit)

    @classmethod
    def from_state(cls, name: str, mass: float, radius: float,
                   x: float, y: float, vx: float = 0.0, vy: float = 0.0,
                   fixed: bool = False) -> "Body":
        """Numerically integrated (or fixed) body from a raw state [sim units]"""
        return cls(name, mass, radius, x, y, vx, vy, fixed=fixed)

    # ========== PROPERTY ACCESS ==========
    @property
    def name(self) -> str:
        return self._name

    @property
    def mass(self) -> float:
        """Mass [kg]"""
        return self._mass

    @property
    def radius(self) -> float:
        """Physical radius [km]"""
        return self._radius

    def radius_sim(self, scale: Optional[ScaleConfig] = None) -> float:
        """Physical radius in simulation units"""
        return (scale or config.SCALE).km_to_sim(self._radius)

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def vx(self) -> float:
        return self._vx

    @property
    def vy(self) -> float:
        return self._vy

    @property
    def position(self) -> np.ndarray:
        """Position [sim units] (copy)"""
        return np.array([self._x, self._y])

    @property
    def velocity(self) -> np.ndarray:
        """Velocity [sim units/s] (copy)"""
        return np.array([self._vx, self._vy])

    @property
    def elements(self) -> Optional[OrbitalElements]:
        return self._elements

    @property
    def orbit(self) -> Optional[np.ndarray]:
        """Static orbit path (read-only), None for trail-recording bodies"""
        return self._orbit

    @property
    def trail(self) -> Optional[Trail]:
        return self._trail

    @property
    def mode(self) -> PropagationMode:
        return self._mode

    @property
    def is_primary(self) -> bool:
        return self._mode == PropagationMode.FIXED

    # ========== STATE UPDATE ==========
    def _set_kinematics(self, x, y, vx, vy):
        # Propagator-only entry point for state changes
        self._x, self._y = float(x), float(y)
        self._vx, self._vy = float(vx), float(vy)

    # ========== UTILITY METHODS ==========
    def copy(self) -> "Body":
        """Fresh body with the same definition and current state, empty trail"""
        return Body(self._name, self._mass, self._radius,
                    self._x, self._y, self._vx, self._vy,
                    elements=self._elements, orbit=self._orbit,
                    fixed=self.is_primary)

    # ========== SPECIAL METHODS ==========
    def __repr__(self) -> str:
        return (f"Body('{self._name}', mode={self._mode.value}, "
                f"x={self._x:.4f}, y={self._y:.4f})")


def build_bodies(
    records,
    primary: Optional[Body] = None,
    with_orbits: bool = True,
    at_time: Optional[float] = None,
    scale: Optional[ScaleConfig] = None
) -> List[Body]:
    """
    Build the ordered body list from an element table.

    Parameters
    ----------
    records : iterable of mappings or pd.DataFrame
        Rows with name, a, e, i, omega, w, M, epoch, radius [km], mass [kg].
        Rows without elements but with x, y (and optionally vx, vy) in
        simulation units become numerically integrated bodies.
    primary : Body, optional
        Central body placed first (default: the Sun from orrery.defaults)
    with_orbits : bool, optional
        Precompute static orbit paths for analytic bodies (default True)
    at_time : float, optional
        Time [Unix ms] of the initial states (default: each body's epoch)
    scale : ScaleConfig, optional
        Unit scale (default config.SCALE)

    Returns
    -------
    list of Body
        Primary first, then the records in table order

    Raises
    ------
    ValueError
        If a record is malformed
    """
    if primary is None:
        from .defaults import SUN
        primary = SUN.copy()
    if primary.mode != PropagationMode.FIXED:
        raise ValueError(f"Primary '{primary.name}' must be a fixed body")
    if hasattr(records, 'iterrows'):
        # mixed tables leave NaN in the columns a row does not use
        records = [row.dropna().to_dict() for _, row in records.iterrows()]

    solver = KeplerSolver()
    bodies = [primary]
    for record in records:
        bodies.append(_body_from_record(record, with_orbits, at_time,
                                        solver, scale))
    names = [b.name for b in bodies]
    if len(names) != len(set(names)):
        raise ValueError(f"Duplicate body names in table: {names}")
    return bodies


def _body_from_record(record: Mapping, with_orbits, at_time, solver, scale):
    """Single table row to Body"""
    name = record.get('name')
    for key in ('mass', 'radius'):
        if key not in record:
            raise ValueError(f"Record '{name}' is missing '{key}'")
    if 'a' in record:
        elements = OrbitalElements.from_record(record)
        return Body.from_elements(name, elements, record['mass'],
                                  record['radius'], at_time=at_time,
                                  with_orbit=with_orbits, solver=solver,
                                  scale=scale)
    if 'x' in record and 'y' in record:
        return Body.from_state(name, record['mass'], record['radius'],
                               record['x'], record['y'],
                               record.get('vx', 0.0), record.get('vy', 0.0))
    raise ValueError(f"Record '{name}' has neither orbital elements nor a state")
