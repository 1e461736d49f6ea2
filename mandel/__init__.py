"""Public API for banded Mandelbrot rendering."""

from .escape import escape_counts, escapes
from .geometry import ImageBounds, PlaneWindow, parse_pair, pixel_to_point
from .renderer import ITERATION_LIMIT, new_pixel_buffer, render_band
from .scheduler import Band, default_workers, partition_bands, render_parallel
from .sink import write_image

__all__ = [
    "Band",
    "ITERATION_LIMIT",
    "ImageBounds",
    "PlaneWindow",
    "default_workers",
    "escape_counts",
    "escapes",
    "new_pixel_buffer",
    "parse_pair",
    "partition_bands",
    "pixel_to_point",
    "render_band",
    "render_parallel",
    "write_image",
]
