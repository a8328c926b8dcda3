'''Per-frame driver advancing every body of the simulation
Propagator class definition'''

import math
import numpy as np
from typing import Optional, Sequence, Tuple

from .body import Body, PropagationMode
from .config import config, ScaleConfig
from .gravity import GravityField
from .kepler import KeplerSolver
from .trail import TrailRecorder


class Propagator:
    """
    Owns the body collection and advances it once per simulated frame.

    Analytic bodies are placed exactly from their orbital elements, with no
    coupling between bodies and no accumulated drift. Numeric bodies are
    integrated about the primary (the first body) with bounded symplectic
    Euler substeps and leave a trail behind them. The primary never moves.

    Parameters
    ----------
    bodies : sequence of Body
        Primary first (must be a fixed body)
    solver : KeplerSolver, optional
        Solver for analytic bodies (default: new KeplerSolver)
    field : GravityField, optional
        Field for numeric bodies (default: GravityField.from_scale(scale))
    scale : ScaleConfig, optional
        Unit scale (default config.SCALE)
    trail_length : int, optional
        Maximum trail length (default config.TRAIL_LENGTH)
    recorder : TrailRecorder, optional
        Trail recorder (default: new TrailRecorder)

    Examples
    --------
    >>> import orrery
    >>> prop = orrery.Propagator(orrery.solar_system())
    >>> prop.update(simulated_time=1759536000000, dt=1.0)
    >>> prop.snapshot()
    """

    def __init__(
        self,
        bodies: Sequence[Body],
        solver: Optional[KeplerSolver] = None,
        field: Optional[GravityField] = None,
        scale: Optional[ScaleConfig] = None,
        trail_length: Optional[int] = None,
        recorder: Optional[TrailRecorder] = None
    ):
        self._scale = scale or config.SCALE
        self._solver = solver or KeplerSolver()
        self._field = field or GravityField.from_scale(self._scale)
        self._recorder = recorder or TrailRecorder()
        self._trail_length = (config.TRAIL_LENGTH if trail_length is None
                              else int(trail_length))
        if self._trail_length < 1:
            raise ValueError(
                f"trail_length must be at least 1, got {self._trail_length}")
        self._max_substep = config.MAX_SUBSTEP
        self._max_substeps = config.MAX_SUBSTEPS
        self._bodies: Tuple[Body, ...] = ()
        self.reset(bodies)

    # ========== VALIDATION ==========
    @staticmethod
    def _validate_bodies(bodies):
        if not bodies:
            raise ValueError("Propagator requires at least the primary body")
        for body in bodies:
            if not isinstance(body, Body):
                raise TypeError(f"Expected Body, got {type(body)}")
        if bodies[0].mode != PropagationMode.FIXED:
            raise ValueError(
                f"First body '{bodies[0].name}' must be the fixed primary")
        extra = [b.name for b in bodies[1:] if b.mode == PropagationMode.FIXED]
        if extra:
            raise ValueError(f"Only the first body may be fixed, got {extra}")

    # ========== PROPAGATION ==========
    def update(self, simulated_time: float, dt: float):
        """
        Advance every body to the current frame.

        Parameters
        ----------
        simulated_time : float
            Absolute simulated time [Unix ms], used by analytic bodies
        dt : float
            Simulated time elapsed since the previous frame [s], used by
            numeric bodies and to decide whether trails grow

        Raises
        ------
        ValueError
            If dt is negative or not finite
        """
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"dt must be a finite non-negative number, got {dt}")

        numeric = []
        for body in self._bodies:
            if body.mode == PropagationMode.ANALYTIC:
                self._update_analytic(body, simulated_time, dt)
            elif body.mode == PropagationMode.NUMERIC:
                numeric.append(body)

        if numeric:
            self._integrate(numeric, dt)

    def _update_analytic(self, body, simulated_time, dt):
        state = self._solver.solve(body.elements, simulated_time)
        body._set_kinematics(*state.to_sim(self._scale))
        if body.trail is not None and dt > 0:
            self._recorder.append(body, self._trail_length)

    def _integrate(self, bodies, dt):
        """Symplectic Euler about the primary: velocity first, then position."""
        substeps, h = self.substep_plan(dt)
        primary = self._bodies[0].position
        for _ in range(substeps):
            for body in bodies:
                pos = body.position
                vel = body.velocity + self._field.acceleration_toward(primary, pos) * h
                pos = pos + vel * h
                body._set_kinematics(pos[0], pos[1], vel[0], vel[1])
                self._recorder.append(body, self._trail_length)

    def substep_plan(self, dt: float):
        """
        Split a frame into integration substeps.

        Returns
        -------
        tuple
            (substeps, step) with step <= config.MAX_SUBSTEP unless the
            substep cap of config.MAX_SUBSTEPS is reached
        """
        if dt <= 0:
            return 0, 0.0
        substeps = min(math.ceil(dt / self._max_substep), self._max_substeps)
        substeps = max(substeps, 1)
        return substeps, dt / substeps

    def reset(self, bodies: Sequence[Body]):
        """Replace the whole body collection (simulation reset)."""
        bodies = tuple(bodies)
        self._validate_bodies(bodies)
        self._bodies = bodies

    # ========== PROPERTY ACCESS ==========
    @property
    def bodies(self) -> Tuple[Body, ...]:
        return self._bodies

    @property
    def primary(self) -> Body:
        return self._bodies[0]

    @property
    def solver(self) -> KeplerSolver:
        return self._solver

    @property
    def field(self) -> GravityField:
        return self._field

    @property
    def scale(self) -> ScaleConfig:
        return self._scale

    @property
    def trail_length(self) -> int:
        return self._trail_length

    def body(self, name: str) -> Body:
        """Look up a body by name"""
        for body in self._bodies:
            if body.name == name:
                return body
        raise KeyError(f"No body named '{name}'")

    def snapshot(self):
        """
        Current state of every body.

        Returns
        -------
        pd.DataFrame
            Columns name, mode, x, y, vx, vy [sim units]
        """
        import pandas as pd
        return pd.DataFrame({
            'name': [b.name for b in self._bodies],
            'mode': [b.mode.value for b in self._bodies],
            'x': np.array([b.x for b in self._bodies]),
            'y': np.array([b.y for b in self._bodies]),
            'vx': np.array([b.vx for b in self._bodies]),
            'vy': np.array([b.vy for b in self._bodies]),
        })

    def __repr__(self):
        counts = {mode: 0 for mode in PropagationMode}
        for body in self._bodies:
            counts[body.mode] += 1
        return (f"Propagator(primary='{self.primary.name}', "
                f"analytic={counts[PropagationMode.ANALYTIC]}, "
                f"numeric={counts[PropagationMode.NUMERIC]})")
