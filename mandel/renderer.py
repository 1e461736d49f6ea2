"""Rendering of a rectangular band of the Mandelbrot set into grayscale pixels."""

from __future__ import annotations

import numpy as np

from .escape import escape_counts
from .geometry import ImageBounds, PlaneWindow, pixel_to_point

ITERATION_LIMIT = 255


def new_pixel_buffer(bounds: ImageBounds) -> np.ndarray:
    """Allocate a zeroed, flat, row-major grayscale buffer for ``bounds``."""

    return np.zeros(bounds.size, dtype=np.uint8)


def render_band(pixels: np.ndarray, bounds: ImageBounds, window: PlaneWindow) -> None:
    """Render ``window`` into ``pixels``, one byte per pixel, in place.

    ``pixels`` is a flat row-major buffer (usually a view into a larger image)
    holding exactly ``bounds.width * bounds.height`` values. Points that never
    escape are painted black; escaping points get ``255 - iterations``.
    """

    if pixels.shape != (bounds.size,):
        raise ValueError(
            f"pixel buffer of shape {pixels.shape} does not match "
            f"{bounds.width}x{bounds.height} bounds."
        )

    cols = np.arange(bounds.width, dtype=np.float64)[np.newaxis, :]
    rows = np.arange(bounds.height, dtype=np.float64)[:, np.newaxis]
    real, imag = pixel_to_point(bounds, (cols, rows), window)

    counts = escape_counts(real, imag, ITERATION_LIMIT)
    shades = np.where(counts < 0, 0, ITERATION_LIMIT - counts)
    pixels[:] = shades.astype(np.uint8).ravel()
