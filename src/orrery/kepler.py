'''Kepler's equation and the element-to-state conversion
KeplerSolver class definition'''

import math
import numpy as np
from typing import Optional

from .config import config, MU_SUN, MS_PER_DAY
from .orbital_elements import OrbitalElements, CartesianState
from .utils import ParabolicUnsupported, InvalidGeometry

TWO_PI = 2.0 * math.pi


# ========== ROOT FINDING ==========
def solve_elliptic(M: float, e: float, tol: float = 1e-14,
                   max_iter: int = 200) -> float:
    """
    Solve E - e*sin(E) = M for the eccentric anomaly by Newton-Raphson.

    Parameters
    ----------
    M : float
        Mean anomaly [rad], expected in [-pi, pi]
    e : float
        Eccentricity, 0 <= e < 1
    tol : float, optional
        Stop once the Newton step is smaller than this (default 1e-14)
    max_iter : int, optional
        Iteration cap (default 200). The best estimate is returned if the
        cap is reached before the tolerance.

    Returns
    -------
    float
        Eccentric anomaly [rad]
    """
    # high eccentricities start from the apoapsis side of the same half-orbit
    E = M if e < 0.8 else math.copysign(math.pi, M)
    for _ in range(max_iter):
        delta = (E - e * math.sin(E) - M) / (1.0 - e * math.cos(E))
        E -= delta
        if abs(delta) < tol:
            break
    return E


def solve_hyperbolic(M: float, e: float, tol: float = 1e-14,
                     max_iter: int = 300) -> float:
    """
    Solve e*sinh(H) - H = M for the hyperbolic anomaly by Newton-Raphson.

    Parameters
    ----------
    M : float
        Hyperbolic mean anomaly [rad], unbounded
    e : float
        Eccentricity, e > 1
    tol : float, optional
        Stop once the Newton step is smaller than this (default 1e-14)
    max_iter : int, optional
        Iteration cap (default 300)

    Returns
    -------
    float
        Hyperbolic anomaly [rad]
    """
    H = math.asinh(M / e)
    if not math.isfinite(H):
        H = math.copysign(math.log(2.0 * abs(M) / e + 1.8), M)
    for _ in range(max_iter):
        delta = (e * math.sinh(H) - H - M) / (e * math.cosh(H) - 1.0)
        H -= delta
        if abs(delta) < tol:
            break
    return H


def true_anomaly(anomaly: float, e: float) -> float:
    """
    True anomaly [rad] from the eccentric (e < 1) or hyperbolic (e >= 1)
    anomaly, using the half-angle forms.
    """
    if e < 1:
        return 2.0 * math.atan2(math.sqrt(1 + e) * math.sin(anomaly / 2),
                                math.sqrt(1 - e) * math.cos(anomaly / 2))
    return 2.0 * math.atan2(math.sqrt(e + 1) * math.sinh(anomaly / 2),
                            math.sqrt(e - 1) * math.cosh(anomaly / 2))


def mean_anomaly_at(elements: OrbitalElements, at_time: float,
                    mu: float = MU_SUN) -> float:
    """
    Mean anomaly [rad] of the elements at an absolute time.

    Parameters
    ----------
    elements : OrbitalElements
    at_time : float
        Absolute time [Unix ms]
    mu : float, optional
        Gravitational parameter [AU^3/day^2] (default k^2)

    Returns
    -------
    float
        M normalized to [-pi, pi] for ellipses, unbounded for hyperbolas
    """
    days = (at_time - elements.epoch_ms) / MS_PER_DAY
    n = math.sqrt(mu / abs(float(elements.a))**3)
    M = math.radians(elements.M) + n * days
    if elements.e < 1:
        M = (M + math.pi) % TWO_PI - math.pi
    return M


def rotation_entries(omega: float, i: float, w: float):
    """
    Perifocal-to-inertial rotation matrix entries.

    The perifocal z component is always zero, so only the first two columns
    of R3(omega) @ R1(i) @ R3(w) are needed.

    Parameters
    ----------
    omega, i, w : float
        Ascending node, inclination and argument of periapsis [rad]

    Returns
    -------
    tuple
        (R11, R12, R21, R22, R31, R32)
    """
    cos_O, sin_O = math.cos(omega), math.sin(omega)
    cos_i, sin_i = math.cos(i), math.sin(i)
    cos_w, sin_w = math.cos(w), math.sin(w)
    R11 = cos_O * cos_w - sin_O * sin_w * cos_i
    R12 = -cos_O * sin_w - sin_O * cos_w * cos_i
    R21 = sin_O * cos_w + cos_O * sin_w * cos_i
    R22 = -sin_O * sin_w + cos_O * cos_w * cos_i
    R31 = sin_w * sin_i
    R32 = cos_w * sin_i
    return R11, R12, R21, R22, R31, R32


# ========== SOLVER ==========
class KeplerSolver:
    """
    Converts Keplerian elements to an inertial Cartesian state at any instant.

    Handles both elliptic (e < 1) and hyperbolic (e > 1) conics. The solver
    is stateless apart from its numerical settings, so ``solve`` is a pure
    function of (elements, at_time).

    Parameters
    ----------
    tol : float, optional
        Newton-Raphson convergence tolerance (default config.KEPLER_TOL)
    elliptic_max_iter : int, optional
        Iteration cap for the elliptic branch (default config.ELLIPTIC_MAX_ITER)
    hyperbolic_max_iter : int, optional
        Iteration cap for the hyperbolic branch
        (default config.HYPERBOLIC_MAX_ITER)
    mu : float, optional
        Gravitational parameter [AU^3/day^2] (default k^2)
    """

    def __init__(self, tol: Optional[float] = None,
                 elliptic_max_iter: Optional[int] = None,
                 hyperbolic_max_iter: Optional[int] = None,
                 mu: float = MU_SUN):
        self._tol = config.KEPLER_TOL if tol is None else tol
        self._elliptic_max_iter = (config.ELLIPTIC_MAX_ITER
                                   if elliptic_max_iter is None
                                   else elliptic_max_iter)
        self._hyperbolic_max_iter = (config.HYPERBOLIC_MAX_ITER
                                     if hyperbolic_max_iter is None
                                     else hyperbolic_max_iter)
        self._parabolic_tol = config.PARABOLIC_TOL
        if mu <= 0:
            raise ValueError(f"Gravitational parameter must be positive, got {mu}")
        self._mu = mu

    @property
    def mu(self) -> float:
        """Gravitational parameter [AU³/day²]"""
        return self._mu

    @property
    def tol(self) -> float:
        return self._tol

    def solve(self, elements: OrbitalElements, at_time: float) -> CartesianState:
        """
        Position and velocity of a body at an absolute time.

        Parameters
        ----------
        elements : OrbitalElements
            Heliocentric element set
        at_time : float
            Absolute time [Unix ms]

        Returns
        -------
        CartesianState
            Position [AU] and velocity [AU/day] in the inertial frame

        Raises
        ------
        ParabolicUnsupported
            If |e - 1| < config.PARABOLIC_TOL
        InvalidGeometry
            If the semi-latus rectum is not positive
        """
        a, e = float(elements.a), float(elements.e)
        if abs(e - 1.0) < self._parabolic_tol:
            raise ParabolicUnsupported(
                f"Parabolic orbit (e={e}) is not supported")
        if a == 0:
            raise InvalidGeometry("Semi-major axis is zero")

        M = mean_anomaly_at(elements, at_time, self._mu)

        if e < 1:
            p = a * (1 - e**2)
            if p <= 0:
                raise InvalidGeometry(
                    f"Non-positive semi-latus rectum p={p} (a={a}, e={e})")
            E = solve_elliptic(M, e, self._tol, self._elliptic_max_iter)
            nu = true_anomaly(E, e)
        else:
            p = abs(a) * (e**2 - 1)
            if p <= 0:
                raise InvalidGeometry(
                    f"Non-positive semi-latus rectum p={p} (a={a}, e={e})")
            H = solve_hyperbolic(M, e, self._tol, self._hyperbolic_max_iter)
            nu = true_anomaly(H, e)

        return self._state_from_true_anomaly(elements, nu, p)

    def _state_from_true_anomaly(self, elements, nu, p):
        """Perifocal position/velocity at true anomaly nu, rotated to inertial."""
        e = float(elements.e)
        cos_nu, sin_nu = math.cos(nu), math.sin(nu)
        r = p / (1 + e * cos_nu)
        # position in the perifocal frame
        x_orb = r * cos_nu
        y_orb = r * sin_nu
        # radial and transverse velocity components
        h_over_p = math.sqrt(self._mu / p)
        v_r = h_over_p * e * sin_nu
        v_t = h_over_p * (1 + e * cos_nu)
        vx_orb = v_r * cos_nu - v_t * sin_nu
        vy_orb = v_r * sin_nu + v_t * cos_nu

        R11, R12, R21, R22, R31, R32 = rotation_entries(
            math.radians(elements.omega), math.radians(elements.i),
            math.radians(elements.w))
        position = np.array([R11 * x_orb + R12 * y_orb,
                             R21 * x_orb + R22 * y_orb,
                             R31 * x_orb + R32 * y_orb])
        velocity = np.array([R11 * vx_orb + R12 * vy_orb,
                             R21 * vx_orb + R22 * vy_orb,
                             R31 * vx_orb + R32 * vy_orb])
        return CartesianState(position, velocity)

    def __repr__(self):
        return (f"KeplerSolver(tol={self._tol}, "
                f"elliptic_max_iter={self._elliptic_max_iter}, "
                f"hyperbolic_max_iter={self._hyperbolic_max_iter})")
