"""
Orrery: Orbital Propagation Engine for Solar System Simulations

A Python package that converts Keplerian elements to Cartesian states,
solves Kepler's equation for elliptic and hyperbolic orbits, samples
renderable orbit paths and advances bodies frame by frame, analytically or by
bounded numerical integration about a single central mass.
"""

# Configuration
from .config import config, temp_config, OrreryConfig, ScaleConfig

# Core classes
from .orbital_elements import OrbitalElements, OrbitalElements as OE, CartesianState
from .kepler import KeplerSolver, solve_elliptic, solve_hyperbolic
from .sampler import OrbitSampler
from .gravity import GravityField
from .trail import Trail, TrailRecorder
from .body import Body, PropagationMode, build_bodies
from .propagator import Propagator
from .reference import ReferenceIntegrator

# Errors
from .utils import ParabolicUnsupported, InvalidGeometry, normalize_epoch

# Default element tables
from .defaults import SUN, SOLAR_SYSTEM, solar_system

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from orrery import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    "OrreryConfig",
    "ScaleConfig",
    # Classes
    "OrbitalElements",
    "CartesianState",
    "KeplerSolver",
    "OrbitSampler",
    "GravityField",
    "Trail",
    "TrailRecorder",
    "Body",
    "PropagationMode",
    "Propagator",
    "ReferenceIntegrator",
    # Functions
    "solve_elliptic",
    "solve_hyperbolic",
    "build_bodies",
    "normalize_epoch",
    "solar_system",
    # Abbreviations
    "OE",
    # Errors
    "ParabolicUnsupported",
    "InvalidGeometry",
    # Constants
    "SUN",
    "SOLAR_SYSTEM",
]
