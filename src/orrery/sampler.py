'''Renderable orbit paths from element sets
OrbitSampler class definition'''

import math
import numpy as np
from typing import Optional

from .config import config, ScaleConfig
from .kepler import KeplerSolver
from .orbital_elements import OrbitalElements


class OrbitSampler:
    """
    Generates the full path of an orbit as 2D points for display.

    Every point is solved at the element epoch, so the result is the shape of
    the conic rather than a time series. Ellipses come back as closed loops,
    hyperbolas as open arcs bounded away from their asymptotes.

    Parameters
    ----------
    solver : KeplerSolver, optional
        Solver used for every point (default: a new KeplerSolver)
    scale : ScaleConfig, optional
        Unit scale for the returned points (default config.SCALE)
    """

    def __init__(self, solver: Optional[KeplerSolver] = None,
                 scale: Optional[ScaleConfig] = None):
        self._solver = solver or KeplerSolver()
        self._scale = scale or config.SCALE

    @property
    def scale(self) -> ScaleConfig:
        return self._scale

    def point_count(self, elements: OrbitalElements) -> int:
        """
        Adaptive sample count: larger or more eccentric orbits get more points,
        capped at config.ORBIT_MAX_POINTS.
        """
        a, e = float(elements.a), float(elements.e)
        points = (config.ORBIT_BASE_POINTS * max(1.0, a / 5.0)
                  * max(1.0, e * 10.0))
        return int(min(points, config.ORBIT_MAX_POINTS))

    def compute_orbit_points(self, elements: OrbitalElements) -> np.ndarray:
        """
        Sample the orbit path.

        Parameters
        ----------
        elements : OrbitalElements

        Returns
        -------
        np.ndarray
            Array of shape (n, 2) in simulation units. For ellipses the first
            and last points coincide (one full revolution).
        """
        if elements.is_hyperbolic:
            mean_anomalies = self._hyperbolic_mean_anomalies(elements)
        else:
            n_points = self.point_count(elements)
            mean_anomalies = np.linspace(-180.0, 180.0, n_points)

        at_time = elements.epoch_ms
        points = np.empty((len(mean_anomalies), 2))
        for idx, M in enumerate(mean_anomalies):
            state = self._solver.solve(elements.with_mean_anomaly(M), at_time)
            points[idx] = (state.x, state.y)
        points = self._scale.position_to_sim(points)
        points.flags.writeable = False
        return points

    def hyperbolic_true_anomalies(self, elements: OrbitalElements) -> np.ndarray:
        """
        True anomalies [rad] sampled along a hyperbolic arc.

        Uniform in [-nu_max, nu_max], nu_max = acos(-1/e) - config.ASYMPTOTE_MARGIN.
        """
        e = float(elements.e)
        if e < 1:
            raise ValueError(f"Elements are not hyperbolic (e={e})")
        nu_max = math.acos(-1.0 / e) - config.ASYMPTOTE_MARGIN
        n_points = min(max(self.point_count(elements),
                           config.HYPERBOLIC_MIN_POINTS),
                       config.HYPERBOLIC_MAX_POINTS)
        return np.linspace(-nu_max, nu_max, n_points)

    def _hyperbolic_mean_anomalies(self, elements):
        """Mean anomalies [deg] matching hyperbolic_true_anomalies"""
        e = float(elements.e)
        k = math.sqrt((e - 1) / (e + 1))
        nu = self.hyperbolic_true_anomalies(elements)
        # tanh(H/2) = k*tan(nu/2), kept strictly inside (-1, 1) for arctanh
        tanh_half = np.clip(k * np.tan(nu / 2), -1 + 1e-15, 1 - 1e-15)
        H = 2 * np.arctanh(tanh_half)
        return np.degrees(e * np.sinh(H) - H)

    @staticmethod
    def to_dataframe(points):
        """Orbit points as a pandas DataFrame with columns x, y"""
        import pandas as pd
        return pd.DataFrame(np.asarray(points), columns=['x', 'y'])

    def __repr__(self):
        return f"OrbitSampler(scale=v{self._scale.version})"
