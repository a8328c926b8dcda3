'''Central-body gravity for the numeric fallback integration
GravityField class definition'''

import math
import numpy as np
from typing import Optional

from .config import config, ScaleConfig


class GravityField:
    """
    Point-mass acceleration law of a single fixed primary.

    GM is a pre-scaled constant in simulation units (not derived from the
    primary's mass), so the field is consistent with whatever unit scale the
    caller integrates in.

    Parameters
    ----------
    gm : float
        Gravitational parameter [sim units³/s²]
    """

    def __init__(self, gm: float):
        if not np.isfinite(gm) or gm <= 0:
            raise ValueError(f"Gravitational parameter must be positive, got {gm}")
        self._gm = float(gm)

    @classmethod
    def from_scale(cls, scale: Optional[ScaleConfig] = None) -> "GravityField":
        """Solar field expressed in the units of a ScaleConfig (default config.SCALE)"""
        scale = scale or config.SCALE
        return cls(scale.gm)

    @property
    def gm(self) -> float:
        """Gravitational parameter [sim units³/s²]"""
        return self._gm

    def acceleration_toward(self, primary_position, body_position) -> np.ndarray:
        """
        Acceleration of a body toward the primary.

        Parameters
        ----------
        primary_position : array-like
            Position of the primary [sim units]
        body_position : array-like
            Position of the body [sim units]

        Returns
        -------
        np.ndarray
            Acceleration vector of magnitude GM/r², directed from the body to
            the primary. Zero when the two positions coincide.
        """
        delta = (np.asarray(primary_position, dtype=float)
                 - np.asarray(body_position, dtype=float))
        r = np.linalg.norm(delta)
        if r == 0:
            return np.zeros_like(delta)
        return (self._gm / r**2) * (delta / r)

    def circular_speed(self, r: float) -> float:
        """Speed of a circular orbit of radius r [sim units/s]"""
        return math.sqrt(self._gm / r)

    def period(self, r: float) -> float:
        """Period of a circular orbit of radius r [s]"""
        return 2 * math.pi * math.sqrt(r**3 / self._gm)

    def __repr__(self):
        return f"GravityField(gm={self._gm:.6e})"
