"""Escape-time evaluation of the Mandelbrot iteration."""

from __future__ import annotations

from typing import Optional

import numpy as np

ESCAPE_RADIUS_SQUARED = 4.0


def escapes(c: complex, limit: int) -> Optional[int]:
    """Try to decide whether ``c`` belongs to the Mandelbrot set in ``limit`` iterations.

    Iterates ``z = z * z + c`` from ``z = 0``. Returns the zero-based index of
    the first iteration that leaves the circle of radius two, or ``None`` if
    ``c`` is still inside after ``limit`` iterations. A NaN trajectory never
    compares as escaped and therefore yields ``None``.
    """

    c = complex(c)
    c_re, c_im = c.real, c.imag
    z_re = z_im = 0.0
    for i in range(limit):
        z_re, z_im = z_re * z_re - z_im * z_im + c_re, 2.0 * z_re * z_im + c_im
        if z_re * z_re + z_im * z_im > ESCAPE_RADIUS_SQUARED:
            return i
    return None


def escape_counts(real: np.ndarray, imag: np.ndarray, limit: int) -> np.ndarray:
    """Vectorized :func:`escapes` over arrays of real and imaginary parts.

    Returns an ``int64`` array shaped like the broadcast inputs holding the
    escape iteration of each point, or ``-1`` where the point did not escape.
    """

    c_re, c_im = np.broadcast_arrays(np.asarray(real, dtype=np.float64), np.asarray(imag, dtype=np.float64))
    z_re = np.zeros(c_re.shape, dtype=np.float64)
    z_im = np.zeros(c_re.shape, dtype=np.float64)
    counts = np.full(c_re.shape, -1, dtype=np.int64)
    active = np.ones(c_re.shape, dtype=bool)

    with np.errstate(over="ignore", invalid="ignore"):
        for i in range(limit):
            if not active.any():
                break
            new_re = z_re * z_re - z_im * z_im + c_re
            new_im = 2.0 * z_re * z_im + c_im
            z_re = np.where(active, new_re, z_re)
            z_im = np.where(active, new_im, z_im)
            escaped = np.logical_and(active, z_re * z_re + z_im * z_im > ESCAPE_RADIUS_SQUARED)
            counts[escaped] = i
            active = np.logical_and(active, np.logical_not(escaped))

    return counts
