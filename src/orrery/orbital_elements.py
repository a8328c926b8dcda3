'''Orbital element and Cartesian state containers
OrbitalElements and CartesianState class definitions'''

import math
import numpy as np
from typing import Optional, Mapping

from .config import config, MU_SUN, ScaleConfig
from .utils import (normalize_epoch, validation_error, ParabolicUnsupported)


#define basic orbital element class
class OrbitalElements:
    """
    Represents a heliocentric Keplerian element set plus its reference epoch.

    Elements are stored as [a, e, i, omega, w, M]:
    a in AU (positive for ellipses, negative for hyperbolas), all angles in
    degrees (omega is the longitude of the ascending node, w the argument of
    periapsis, M the mean anomaly at epoch). The epoch may be given as a
    Julian Date or as Unix milliseconds and is auto-detected.
    OrbitalElements is immutable, create a new instance to change
    """
    # ========== CLASS CONSTANTS ==========
    _HASH_DECIMALS = 10     # Rounding for consistent hashing
    _PARAM_NAMES = ('a', 'e', 'i', 'omega', 'w', 'M')
    # accepted spellings in element tables
    _ALIASES = {
        'Ω': 'omega', 'node': 'omega', 'raan': 'omega',
        'ω': 'w', 'peri': 'w', 'argp': 'w',
    }

    # ========== CONSTRUCTION ==========
    def __init__(self, elements=None, epoch=None, validate=True, **kwargs):
        """
        Create orbital elements.

        Can be called in two ways:

        1. Array-based:
        OrbitalElements([1.0, 0.0167, 0.0, 0.0, 102.9, 100.5], epoch=2451545.0)

        2. Named parameters:
        OrbitalElements(a=1.0, e=0.0167, i=0, omega=0, w=102.9, M=100.5,
                        epoch=2451545.0)

        Parameters
        ----------
        elements : array-like, optional
            6-element array [a, e, i, omega, w, M]
        epoch : float
            Reference time of M, Julian Date or Unix milliseconds
        validate : bool, optional
            Whether to validate elements (default True)
        **kwargs : dict
            Named parameters (a, e, i, omega, w, M)
        """
        if elements is not None:
            self.elements = np.array(elements, dtype=float)
        elif kwargs:
            self.elements = self._from_named_params(kwargs)
        else:
            raise ValueError(
                "Must provide either an elements array [a, e, i, omega, w, M] "
                "or named parameters (a, e, i, omega, w, M)"
            )
        if epoch is None:
            raise ValueError("OrbitalElements require an epoch")
        self._epoch = float(epoch)
        self._epoch_ms = normalize_epoch(self._epoch)
        # Ensure immutability of elements array
        self.elements.flags.writeable = False
        # the parabolic case is never silently accepted
        if self.elements.shape == (6,) and np.isfinite(self.elements[1]):
            if abs(self.elements[1] - 1.0) < config.PARABOLIC_TOL:
                raise ParabolicUnsupported(
                    f"Parabolic orbit (e={self.elements[1]}) is not supported")
        if validate:
            self._validate()

    # ========== VALIDATION ==========
    def _validate(self):
        """Check that the elements describe a usable conic
        If validation fails inappropriately, set validate=False for constructor
        """
        if self.elements.shape != (6,):
            raise ValueError("Orbital elements must be 6-element vector")
        if not np.all(np.isfinite(self.elements)):
            raise ValueError("Elements contain NaN or Inf")
        if not np.isfinite(self._epoch):
            raise ValueError("Epoch must be finite")

        a, e, i, omega, w, M = self.elements
        if e < 0:
            raise ValueError(f"Eccentricity must be non-negative, got {e}")
        if a == 0:
            validation_error("Semi-major axis cannot be zero")
        # Validate a-e combination for physical consistency
        elif e < 1 and a < 0:
            validation_error(f"Elliptic orbit (e={e}) "
                             f"requires positive semi-major axis, got a={a}")
        elif e > 1 and a > 0:
            validation_error(f"Hyperbolic orbit (e={e}) "
                             f"requires negative semi-major axis, got a={a}")
        # check range for angles (degrees)
        if i < 0 or i > 180:
            validation_error(f"Inclination out of range [0, 180] deg, got {i}")
        if omega < -360 or omega > 360:
            validation_error(f"Ascending node out of range, got {omega}")
        if w < -360 or w > 360:
            validation_error(f"Arg of Periapsis out of range, got {w}")

    # ========== FACTORY METHODS ==========
    @classmethod
    def from_record(cls, record: Mapping, validate=True):
        """
        Create OrbitalElements from one row of an element table.

        Parameters
        ----------
        record : mapping
            Keys a, e, i, omega, w, M and epoch. The node may also be spelled
            'Ω'/'node'/'raan' and the periapsis 'ω'/'peri'/'argp'.
        validate : bool, optional, defaults to True

        Returns
        -------
        OrbitalElements
        """
        values = {}
        for key, value in record.items():
            name = cls._ALIASES.get(key, key)
            if name in cls._PARAM_NAMES or name == 'epoch':
                values[name] = value
        missing = [k for k in cls._PARAM_NAMES + ('epoch',) if k not in values]
        if missing:
            label = record.get('name', '<unnamed>')
            raise ValueError(f"Element record '{label}' is missing {missing}")
        epoch = values.pop('epoch')
        return cls(epoch=epoch, validate=validate,
                   **{k: float(v) for k, v in values.items()})

    @classmethod
    def from_numpy(cls, array, epochs, validate=True):
        """
        Create list of OrbitalElements from NumPy array.

        Parameters
        ----------
        array : np.ndarray
            Array of shape (n_orbits, 6)
        epochs : float or array-like
            One epoch shared by every row, or one epoch per row
        validate: bool, optional, defaults to True

        Returns
        -------
        list of OrbitalElements
        """
        array = np.asarray(array, dtype=float)
        if array.ndim != 2 or array.shape[1] != 6:
            raise ValueError(f"Array must have shape (n, 6), got {array.shape}")
        epochs = np.broadcast_to(np.asarray(epochs, dtype=float), (array.shape[0],))

        return [cls(row, epoch=ep, validate=validate)
                for row, ep in zip(array, epochs)]

    @classmethod
    def from_dataframe(cls, df, validate=True):
        """
        Create list of OrbitalElements from pandas DataFrame.

        Parameters
        ----------
        df : pd.DataFrame
            DataFrame with columns a, e, i, omega, w, M, epoch
            (extra columns such as name or mass are ignored)
        validate : bool, optional, defaults to True

        Returns
        -------
        list of OrbitalElements
        """
        return [cls.from_record(row.to_dict(), validate=validate)
                for _, row in df.iterrows()]

    def with_mean_anomaly(self, M):
        """Copy of these elements with a different mean anomaly [deg]"""
        elements = self.elements.copy()
        elements[5] = M
        return OrbitalElements(elements, epoch=self._epoch, validate=False)

    # ========== PROPERTY ACCESS ==========
    @property
    def a(self):
        """Semi-major axis [AU]"""
        return self.elements[0]

    @property
    def e(self):
        """Eccentricity"""
        return self.elements[1]

    @property
    def i(self):
        """Inclination [deg]"""
        return self.elements[2]

    @property
    def omega(self):
        """Longitude of the ascending node [deg]"""
        return self.elements[3]

    @property
    def w(self):
        """Argument of periapsis [deg]"""
        return self.elements[4]

    @property
    def M(self):
        """Mean anomaly at epoch [deg]"""
        return self.elements[5]

    @property
    def epoch(self):
        """Epoch as supplied (Julian Date or Unix ms)"""
        return self._epoch

    @property
    def epoch_ms(self):
        """Epoch normalized to Unix milliseconds"""
        return self._epoch_ms

    @property
    def is_hyperbolic(self) -> bool:
        return bool(self.e >= 1)

    # ========== ORBITAL PROPERTIES ==========
    def mean_motion(self):
        """
        Calculate mean motion (n = √(μ/|a|³))

        Returns
        -------
        float
            Mean motion [rad/day]
        """
        return math.sqrt(MU_SUN / abs(self.a)**3)

    def semi_latus_rectum(self):
        """Semi-latus rectum [AU]: a(1-e²) for ellipses, |a|(e²-1) for hyperbolas"""
        if self.is_hyperbolic:
            return abs(self.a) * (self.e**2 - 1)
        return self.a * (1 - self.e**2)

    def periapsis(self):
        """Periapsis distance [AU]"""
        return abs(self.a) * abs(1 - self.e)

    def orbital_period(self):
        """
        Calculate orbital period

        Returns period in days (only for elliptic orbits)
        """
        if self.is_hyperbolic:
            raise ValueError("Orbital period undefined for hyperbolic orbits")
        return 2 * math.pi / self.mean_motion()

    # ========== BATCH OPERATIONS ==========
    class Batch:
        """
        Batch operations on collections of OrbitalElements.
        """
        @staticmethod
        def to_numpy(orbits):
            """Array of shape (n_orbits, 6) with the raw element values"""
            return np.array([o.elements for o in orbits])

        @staticmethod
        def to_dataframe(orbits, index=None):
            """
            Convert list of OrbitalElements to pandas DataFrame.

            Parameters
            ----------
            orbits : list of OrbitalElements
            index : array-like, optional
                Index for the DataFrame (e.g., body names).

            Returns
            -------
            pd.DataFrame
                Columns a, e, i, omega, w, M, epoch
            """
            import pandas as pd
            if not orbits:
                return pd.DataFrame(columns=list(OrbitalElements._PARAM_NAMES)
                                    + ['epoch'])
            if index is not None and len(index) != len(orbits):
                raise ValueError(
                    f"Index length ({len(index)}) must match "
                    f"number of orbits ({len(orbits)})"
                )
            data = np.array([o.elements for o in orbits])
            df = pd.DataFrame(data, columns=list(OrbitalElements._PARAM_NAMES),
                              index=index)
            df['epoch'] = [o.epoch for o in orbits]
            return df

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        #Length of element vector (always 6)
        return 6

    def __getitem__(self, key):
        #Allow indexing like orbit[0]
        return self.elements[key]

    def __iter__(self):
        #Allow iteration over elements
        return iter(self.elements)

    def __repr__(self):
        #Machine-readable representation
        return f"OrbitalElements({self.elements.tolist()}, epoch={self._epoch})"

    def __str__(self):
        #Human-readable representation
        a, e, i, omega, w, M = self.elements
        return (f"Keplerian Elements:\n"
                f"  a     = {a:12.6f} AU\n"
                f"  e     = {e:12.6f}\n"
                f"  i     = {i:12.4f}°\n"
                f"  Ω     = {omega:12.4f}°\n"
                f"  ω     = {w:12.4f}°\n"
                f"  M     = {M:12.4f}°\n"
                f"  epoch = {self._epoch_ms:.0f} ms")

    def __eq__(self, other):
        #Check equality with tolerance
        if not isinstance(other, OrbitalElements):
            return False
        return (np.allclose(self.elements, other.elements,
                            rtol=config.EQUALITY_RTOL,
                            atol=config.EQUALITY_ATOL) and
                np.isclose(self._epoch_ms, other._epoch_ms,
                           rtol=config.EQUALITY_RTOL, atol=1e-3))

    def __hash__(self):
        #Hash with rounding to match equality
        rounded = tuple(round(x, self._HASH_DECIMALS) for x in self.elements)
        return hash((rounded, round(self._epoch_ms)))

    # ========== STATIC METHODS ==========
    @staticmethod
    def _from_named_params(kwargs):
        """Convert named parameters to the elements array."""
        params = OrbitalElements._PARAM_NAMES
        if all(k in kwargs for k in params):
            unknown = [k for k in kwargs if k not in params]
            if unknown:
                raise ValueError(f"Unknown element parameters: {unknown}")
            return np.array([kwargs[k] for k in params], dtype=float)

        provided = list(kwargs.keys())
        raise ValueError(
            f"Could not build elements from parameters: {provided}\n"
            f"Keplerian requires: {list(params)}"
        )


class CartesianState:
    """
    Inertial position [AU] and velocity [AU/day] of a body.

    The z components are computed but planar consumers may ignore them.
    CartesianState is immutable.
    """

    def __init__(self, position, velocity):
        self._position = np.array(position, dtype=float)
        self._velocity = np.array(velocity, dtype=float)
        if self._position.shape != (3,) or self._velocity.shape != (3,):
            raise ValueError("Position and velocity must be 3-vectors")
        self._position.flags.writeable = False
        self._velocity.flags.writeable = False

    @property
    def position(self) -> np.ndarray:
        """Position vector [AU] (read-only)"""
        return self._position

    @property
    def velocity(self) -> np.ndarray:
        """Velocity vector [AU/day] (read-only)"""
        return self._velocity

    @property
    def x(self) -> float:
        return float(self._position[0])

    @property
    def y(self) -> float:
        return float(self._position[1])

    @property
    def z(self) -> float:
        return float(self._position[2])

    @property
    def vx(self) -> float:
        return float(self._velocity[0])

    @property
    def vy(self) -> float:
        return float(self._velocity[1])

    @property
    def vz(self) -> float:
        return float(self._velocity[2])

    @property
    def radius(self) -> float:
        """Distance from the central body [AU]"""
        return float(np.linalg.norm(self._position))

    @property
    def speed(self) -> float:
        """Speed [AU/day]"""
        return float(np.linalg.norm(self._velocity))

    def to_sim(self, scale: Optional[ScaleConfig] = None):
        """
        Planar state in simulation units.

        Returns
        -------
        tuple
            (x, y, vx, vy) with positions in sim units and velocities in
            sim units per second
        """
        scale = scale or config.SCALE
        return (scale.position_to_sim(self.x), scale.position_to_sim(self.y),
                scale.velocity_to_sim(self.vx), scale.velocity_to_sim(self.vy))

    def __repr__(self):
        return (f"CartesianState(position={self._position.tolist()}, "
                f"velocity={self._velocity.tolist()})")

    def __eq__(self, other):
        if not isinstance(other, CartesianState):
            return NotImplemented
        return (np.allclose(self._position, other._position,
                            rtol=config.EQUALITY_RTOL, atol=config.EQUALITY_ATOL)
                and np.allclose(self._velocity, other._velocity,
                                rtol=config.EQUALITY_RTOL,
                                atol=config.EQUALITY_ATOL))

    __hash__ = None
