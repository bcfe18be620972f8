"""
Runtime configuration for rash.

Configuration is programmatic only: there are no configuration files and no
environment variables. The settings here are read at call time, so changing
them affects every array created or rendered afterwards.

- ``DEFAULT_DTYPE``: element type of every NDArray buffer.
- random generator: used by the ``rand`` factories; reseed with `set_seed`.
- print precision: significant digits used by the debug rendering.
"""

from typing import Optional

import numpy as np

DEFAULT_DTYPE = np.float64
"""Element dtype for all array buffers (double precision)."""

_rng: np.random.Generator = np.random.default_rng()
_print_precision: int = 6


def set_seed(seed: Optional[int]) -> None:
    """
    Reseed the generator used by random factories.

    Parameters
    ----------
    seed : Optional[int]
        Seed forwarded to `numpy.random.default_rng`. ``None`` draws fresh
        entropy from the operating system.
    """
    global _rng
    _rng = np.random.default_rng(seed)


def get_rng() -> np.random.Generator:
    """Return the generator used by random factories."""
    return _rng


def set_print_precision(digits: int) -> None:
    """
    Set the number of significant digits used when rendering arrays.

    Raises
    ------
    ValueError
        If `digits` is not a positive integer.
    """
    global _print_precision
    if not isinstance(digits, int) or digits < 1:
        raise ValueError(f"print precision must be a positive int, got {digits!r}")
    _print_precision = digits


def get_print_precision() -> int:
    """Return the number of significant digits used when rendering arrays."""
    return _print_precision
