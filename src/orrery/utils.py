"""
Utility functions and exceptions for the Orrery package.
"""

import warnings
from typing import Type
from .config import config, JD_UNIX_EPOCH, MS_PER_DAY, EPOCH_JD_THRESHOLD


class ParabolicUnsupported(ValueError):
    """Eccentricity is (numerically) exactly 1; the parabolic case is not solved."""


class InvalidGeometry(ValueError):
    """Elements describe no real conic (non-positive semi-latus rectum)."""


def normalize_epoch(epoch: float) -> float:
    """
    Convert an element epoch to Unix milliseconds.

    Element tables mix Julian Dates and Unix-millisecond timestamps. Values
    whose magnitude is below 1e11 are read as Julian Dates, everything else is
    assumed to already be Unix milliseconds.

    Parameters
    ----------
    epoch : float
        Julian Date or Unix milliseconds

    Returns
    -------
    float
        Epoch in Unix milliseconds

    Examples
    --------
    >>> normalize_epoch(2451545.0)    # J2000.0
    946728000000.0
    >>> normalize_epoch(946728000000.0)
    946728000000.0
    """
    epoch = float(epoch)
    if abs(epoch) < EPOCH_JD_THRESHOLD:
        return (epoch - JD_UNIX_EPOCH) * MS_PER_DAY
    return epoch


def validation_error(message: str, error_class: Type[Exception] = ValueError):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True (default), raises the specified exception.
    When False, issues a UserWarning instead.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    UserWarning
        If config.STRICT_VALIDATION is False
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, UserWarning, stacklevel=2)
