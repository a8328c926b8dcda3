'''High-accuracy reference integration of the numeric fallback problem
ReferenceIntegrator class definition'''

import numpy as np
from typing import Optional, TYPE_CHECKING
import heyoka as hy

from .config import config
from .gravity import GravityField

if TYPE_CHECKING:
    from .body import Body


class ReferenceIntegrator:
    """
    Taylor-series integration of the planar central-force problem.

    Solves exactly the dynamics the Propagator's symplectic Euler fallback
    approximates (a single fixed primary, GM from the GravityField) with
    heyoka's adaptive Taylor integrator, so the fallback's accumulated error
    can be measured. It is a diagnostic tool and never runs inside a frame
    update.

    Parameters
    ----------
    field : GravityField
        Field supplying GM [sim units³/s²]
    compile : bool, optional
        Compile the integrator immediately (default config.DEFAULT_COMPILE)

    Notes
    -----
    State vector order: [x, y, vx, vy] relative to the primary
    (sim units, sim units/s).
    """

    def __init__(self, field: GravityField, compile: Optional[bool] = None):
        if not isinstance(field, GravityField):
            raise TypeError(f"field must be GravityField, got {type(field)}")
        self._field = field
        self._cached_integrator = None
        self._cached_eom = self._build_eom()
        if compile is None:
            compile = config.DEFAULT_COMPILE
        if compile:
            self._compile_integrator()

    def _build_eom(self):
        """
        Build the symbolic equations of motion.

        GM is hardcoded into the expressions since it is fixed for the life
        of the field.
        """
        x, y, vx, vy = hy.make_vars("x", "y", "vx", "vy")
        r = hy.sqrt(x**2 + y**2)
        gm = self._field.gm
        return [
            (x, vx),
            (y, vy),
            (vx, -gm * x / r**3),
            (vy, -gm * y / r**3),
        ]

    def _compile_integrator(self):
        """Compile the Taylor integrator (expensive, done once)."""
        if self._cached_integrator is not None:
            return  # Already compiled
        if config.VERBOSE:
            print("Compiling planar 2body reference integrator...")
        self._cached_integrator = hy.taylor_adaptive(
            sys=self._cached_eom,
            state=[1.0, 0.0, 0.0, 1.0],  # Dummy state
        )
        if config.VERBOSE:
            print("Compilation complete")

    def compile(self):
        """
        Explicitly compile integrator if not already compiled.

        Returns
        -------
        self
            Returns self for method chaining
        """
        self._compile_integrator()
        return self

    @property
    def is_compiled(self) -> bool:
        return self._cached_integrator is not None

    @property
    def field(self) -> GravityField:
        return self._field

    def propagate(self, state, duration: float) -> np.ndarray:
        """
        Integrate a state forward.

        Parameters
        ----------
        state : array-like
            [x, y, vx, vy] relative to the primary
        duration : float
            Integration time [s]

        Returns
        -------
        np.ndarray
            Final [x, y, vx, vy]

        Raises
        ------
        ValueError
            If the state is invalid or integration fails
        """
        state_array = np.asarray(state, dtype=float)
        if state_array.shape != (4,):
            raise ValueError(f"State must be [x, y, vx, vy], got {state_array.shape}")
        if not np.all(np.isfinite(state_array)):
            raise ValueError(f"State contains NaN or Inf values: {state_array}")
        if np.hypot(state_array[0], state_array[1]) == 0:
            raise ValueError("State coincides with the primary")

        if not self.is_compiled:
            self._compile_integrator()
        ta = self._cached_integrator
        assert ta is not None, "Integrator should be compiled"

        ta.time = 0.0
        ta.state[:] = state_array
        ta.propagate_until(float(duration))

        if not np.all(np.isfinite(ta.state)):
            raise ValueError(
                f"Integration failed: state became invalid during propagation.\n"
                f"Initial state: {state_array}\n"
                f"Final time: {ta.time}\n"
                f"Final state: {ta.state}"
            )
        return np.array(ta.state, dtype=float)

    def drift(self, body: "Body", primary: "Body", reference_state) -> float:
        """
        Position error of an integrated body against a reference state.

        Parameters
        ----------
        body : Body
            Numerically integrated body
        primary : Body
            The primary it orbits
        reference_state : array-like
            [x, y, vx, vy] relative to the primary, from ``propagate``

        Returns
        -------
        float
            Distance between the body and the reference position [sim units]
        """
        reference_state = np.asarray(reference_state, dtype=float)
        relative = body.position - primary.position
        return float(np.linalg.norm(relative - reference_state[:2]))

    def __repr__(self):
        return (f"ReferenceIntegrator(gm={self._field.gm:.6e}, "
                f"compiled={self.is_compiled})")
