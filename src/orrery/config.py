"""
Global Configuration for Orrery Package
=======================================

This module provides package-wide configuration settings that users can modify
to control solver tolerances, sampling density, frame integration limits and
validation behavior. The shared scale constants (AU to simulation units,
kilometers per AU, seconds per day) live in a single versioned ``ScaleConfig``
that every component receives.

Examples
--------
View current configuration:

>>> import orrery
>>> print(orrery.config)

Modify settings:

>>> orrery.config.TRAIL_LENGTH = 2000  # Longer trails
>>> orrery.config.MAX_SUBSTEPS = 50    # Cheaper frames

Reset to defaults:

>>> orrery.config.reset()

Temporarily modify settings:

>>> with orrery.temp_config(STRICT_VALIDATION=False):
...     # Validation failures only warn inside this block
...     orrery.OrbitalElements(a=-1.0, e=0.5, i=0, omega=0, w=0, M=0, epoch=0)

Notes
-----
These settings affect package-wide behavior. Modifying them will impact
all subsequently constructed solvers, samplers and propagators.
"""

from dataclasses import dataclass, field
from contextlib import contextmanager

# Gaussian gravitational constant [AU^(3/2) / day]
GAUSSIAN_K = 0.01720209895
# Heliocentric gravitational parameter mu = k^2 [AU^3 / day^2]
MU_SUN = GAUSSIAN_K ** 2
# Julian Date of the Unix epoch (1970-01-01T00:00:00Z)
JD_UNIX_EPOCH = 2440587.5
MS_PER_DAY = 86_400_000.0
# Epochs smaller than this (in magnitude) are Julian Dates, larger are Unix ms
EPOCH_JD_THRESHOLD = 1e11


@dataclass(frozen=True)
class ScaleConfig:
    """
    Immutable, versioned scale between astronomical and simulation units.

    Attributes
    ----------
    version : str
        Identifier of this scale definition. Bump it whenever a value changes
        so consumers holding cached orbit paths can tell them apart.
    au_to_sim : float
        Simulation units per astronomical unit.
        Default: 215.0 (1 AU == 215 simulation units)
    km_per_au : float
        Kilometers per astronomical unit.
        Default: 149597870.7
    seconds_per_day : float
        Seconds per day.
        Default: 86400.0
    """
    version: str = "1"
    au_to_sim: float = 215.0
    km_per_au: float = 149597870.7
    seconds_per_day: float = 86400.0

    def __post_init__(self):
        if self.au_to_sim <= 0:
            raise ValueError(f"au_to_sim must be positive, got {self.au_to_sim}")
        if self.km_per_au <= 0:
            raise ValueError(f"km_per_au must be positive, got {self.km_per_au}")
        if self.seconds_per_day <= 0:
            raise ValueError(
                f"seconds_per_day must be positive, got {self.seconds_per_day}")

    @property
    def gm(self) -> float:
        """Pre-scaled central-body GM [sim units^3 / s^2]."""
        return MU_SUN * self.au_to_sim**3 / self.seconds_per_day**2

    def position_to_sim(self, value):
        """AU -> simulation units"""
        return value * self.au_to_sim

    def velocity_to_sim(self, value):
        """AU/day -> simulation units per second"""
        return value / self.seconds_per_day * self.au_to_sim

    def km_to_sim(self, value):
        """km -> simulation units"""
        return value / self.km_per_au * self.au_to_sim


@dataclass
class OrreryConfig:
    """
    Global configuration for Orrery package.

    Attributes
    ----------
    KEPLER_TOL : float
        Newton-Raphson step size below which Kepler's equation is solved.
        Default: 1e-14
    ELLIPTIC_MAX_ITER : int
        Iteration cap for the elliptic (e < 1) root finder.
        Default: 200
    HYPERBOLIC_MAX_ITER : int
        Iteration cap for the hyperbolic (e >= 1) root finder.
        Default: 300
    PARABOLIC_TOL : float
        Eccentricities within this distance of 1 are rejected as parabolic.
        Default: 1e-12
    ORBIT_BASE_POINTS : int
        Samples for a small, near-circular orbit path.
        Default: 360
    ORBIT_MAX_POINTS : int
        Upper cap on orbit path samples.
        Default: 5000
    HYPERBOLIC_MIN_POINTS, HYPERBOLIC_MAX_POINTS : int
        Clamp range for hyperbolic arc samples.
        Default: 200, 2000
    ASYMPTOTE_MARGIN : float
        Angular margin [rad] kept from the hyperbolic asymptote.
        Default: 1e-4
    MAX_SUBSTEP : float
        Largest numeric integration substep [s].
        Default: 0.01
    MAX_SUBSTEPS : int
        Maximum integration substeps per frame.
        Default: 100
    TRAIL_LENGTH : int
        Default maximum number of points kept in a trail.
        Default: 1000
    TRAIL_DECIMALS : int
        Decimal places trail points are rounded to (1e-6 by default).
        Default: 6
    EQUALITY_RTOL, EQUALITY_ATOL : float
        Tolerances for floating-point equality comparisons.
        Default: 1e-12, 1e-14
    STRICT_VALIDATION : bool
        If True, validation failures raise exceptions.
        If False, validation failures issue warnings.
        Default: True
    DEFAULT_COMPILE : bool
        If True, ReferenceIntegrator compiles its Taylor integrator on
        construction. If False, compilation is deferred to first use.
        Default: True
    VERBOSE : bool
        Print progress notices (integrator compilation).
        Default: True
    SCALE : ScaleConfig
        Shared scale between AU/day and simulation units.
    """

    # Root finding
    KEPLER_TOL: float = 1e-14
    ELLIPTIC_MAX_ITER: int = 200
    HYPERBOLIC_MAX_ITER: int = 300
    PARABOLIC_TOL: float = 1e-12

    # Orbit path sampling
    ORBIT_BASE_POINTS: int = 360
    ORBIT_MAX_POINTS: int = 5000
    HYPERBOLIC_MIN_POINTS: int = 200
    HYPERBOLIC_MAX_POINTS: int = 2000
    ASYMPTOTE_MARGIN: float = 1e-4

    # Numeric fallback integration
    MAX_SUBSTEP: float = 0.01
    MAX_SUBSTEPS: int = 100

    # Trails
    TRAIL_LENGTH: int = 1000
    TRAIL_DECIMALS: int = 6

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    # Behavior
    STRICT_VALIDATION: bool = True
    DEFAULT_COMPILE: bool = True
    VERBOSE: bool = True

    # Units
    SCALE: ScaleConfig = field(default_factory=ScaleConfig)

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import orrery
        >>> orrery.config.MAX_SUBSTEPS = 10  # Modify
        >>> orrery.config.reset()  # Back to defaults
        >>> orrery.config.MAX_SUBSTEPS
        100
        """
        defaults = OrreryConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["OrreryConfig:"]
        lines.append("  Root Finding:")
        lines.append(f"    KEPLER_TOL = {self.KEPLER_TOL}")
        lines.append(f"    ELLIPTIC_MAX_ITER = {self.ELLIPTIC_MAX_ITER}")
        lines.append(f"    HYPERBOLIC_MAX_ITER = {self.HYPERBOLIC_MAX_ITER}")
        lines.append(f"    PARABOLIC_TOL = {self.PARABOLIC_TOL}")
        lines.append("  Orbit Sampling:")
        lines.append(f"    ORBIT_BASE_POINTS = {self.ORBIT_BASE_POINTS}")
        lines.append(f"    ORBIT_MAX_POINTS = {self.ORBIT_MAX_POINTS}")
        lines.append(f"    HYPERBOLIC_MIN_POINTS = {self.HYPERBOLIC_MIN_POINTS}")
        lines.append(f"    HYPERBOLIC_MAX_POINTS = {self.HYPERBOLIC_MAX_POINTS}")
        lines.append(f"    ASYMPTOTE_MARGIN = {self.ASYMPTOTE_MARGIN}")
        lines.append("  Integration:")
        lines.append(f"    MAX_SUBSTEP = {self.MAX_SUBSTEP}")
        lines.append(f"    MAX_SUBSTEPS = {self.MAX_SUBSTEPS}")
        lines.append("  Trails:")
        lines.append(f"    TRAIL_LENGTH = {self.TRAIL_LENGTH}")
        lines.append(f"    TRAIL_DECIMALS = {self.TRAIL_DECIMALS}")
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        lines.append(f"    DEFAULT_COMPILE = {self.DEFAULT_COMPILE}")
        lines.append(f"    VERBOSE = {self.VERBOSE}")
        lines.append("  Scale:")
        lines.append(f"    version = '{self.SCALE.version}'")
        lines.append(f"    au_to_sim = {self.SCALE.au_to_sim}")
        lines.append(f"    km_per_au = {self.SCALE.km_per_au}")
        lines.append(f"    seconds_per_day = {self.SCALE.seconds_per_day}")
        return "\n".join(lines)


# Global configuration instance
config = OrreryConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import orrery
    >>> with orrery.temp_config(MAX_SUBSTEPS=10, TRAIL_LENGTH=50):
    ...     prop = orrery.Propagator(orrery.solar_system())
    >>> # Original config restored here
    >>> orrery.config.MAX_SUBSTEPS
    100

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise AttributeError(
                f"OrreryConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
