'''Bounded position history for bodies without a static orbit
Trail and TrailRecorder class definitions'''

from collections import deque
import numpy as np
from typing import Optional, TYPE_CHECKING

from .config import config

if TYPE_CHECKING:
    from .body import Body


class Trail:
    """
    Append-only, bounded sequence of (x, y) points, oldest first.

    Eviction happens from the oldest end, so appending is O(1).
    """

    def __init__(self, points=()):
        self._points = deque((float(x), float(y)) for x, y in points)

    def push(self, point, max_length: int):
        """Append a point, evicting the oldest ones beyond max_length"""
        if max_length < 1:
            raise ValueError(f"max_length must be at least 1, got {max_length}")
        self._points.append(point)
        while len(self._points) > max_length:
            self._points.popleft()

    def clear(self):
        self._points.clear()

    def to_numpy(self) -> np.ndarray:
        """Array of shape (n, 2) [sim units]"""
        if not self._points:
            return np.empty((0, 2))
        return np.array(self._points)

    def to_dataframe(self):
        """Trail as a pandas DataFrame with columns x, y"""
        import pandas as pd
        return pd.DataFrame(self.to_numpy(), columns=['x', 'y'])

    def __len__(self):
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __getitem__(self, index):
        return self._points[index]

    def __repr__(self):
        return f"Trail({len(self._points)} points)"


class TrailRecorder:
    """
    Records the current position of bodies onto their trails.

    Points are rounded to ``decimals`` places to suppress floating jitter
    (default config.TRAIL_DECIMALS, i.e. 1e-6).
    """

    def __init__(self, decimals: Optional[int] = None):
        self._decimals = config.TRAIL_DECIMALS if decimals is None else decimals

    @property
    def decimals(self) -> int:
        return self._decimals

    def append(self, body: "Body", max_length: Optional[int] = None):
        """
        Push the body's current (x, y) onto its trail.

        Parameters
        ----------
        body : Body
            Body without a static orbit
        max_length : int, optional
            Maximum trail length (default config.TRAIL_LENGTH)

        Raises
        ------
        ValueError
            If the body carries a static orbit instead of a trail
        """
        if body.trail is None:
            raise ValueError(
                f"Body '{body.name}' has a static orbit and records no trail")
        if max_length is None:
            max_length = config.TRAIL_LENGTH
        point = (round(body.x, self._decimals), round(body.y, self._decimals))
        body.trail.push(point, max_length)
