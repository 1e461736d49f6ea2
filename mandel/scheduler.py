"""Parallel rendering of an image split into horizontal bands."""

from __future__ import annotations

import os
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .geometry import ImageBounds, PlaneWindow, pixel_to_point
from .renderer import render_band


@dataclass(frozen=True)
class Band:
    """A contiguous run of image rows and the part of the plane it covers."""

    top: int
    rows: int
    bounds: ImageBounds
    window: PlaneWindow

    @property
    def start(self) -> int:
        return self.top * self.bounds.width

    @property
    def stop(self) -> int:
        return (self.top + self.rows) * self.bounds.width


def default_workers() -> int:
    return max(os.cpu_count() or 1, 1)


def partition_bands(bounds: ImageBounds, window: PlaneWindow, rows_per_band: int = 1) -> list[Band]:
    """Split the image into disjoint bands of ``rows_per_band`` rows, top to bottom.

    The last band is shorter when the height is not a multiple of
    ``rows_per_band``. Each band's window is mapped from its top and bottom
    row edges.
    """

    if rows_per_band < 1:
        raise ValueError(f"rows_per_band must be at least 1, got {rows_per_band}.")

    bands = []
    for top in range(0, bounds.height, rows_per_band):
        rows = min(rows_per_band, bounds.height - top)
        upper_left = pixel_to_point(bounds, (0, top), window)
        lower_right = pixel_to_point(bounds, (bounds.width, top + rows), window)
        bands.append(
            Band(
                top=top,
                rows=rows,
                bounds=ImageBounds(bounds.width, rows),
                window=PlaneWindow.derived(upper_left, lower_right),
            )
        )
    return bands


def render_parallel(
    pixels: np.ndarray,
    bounds: ImageBounds,
    window: PlaneWindow,
    *,
    workers: Optional[int] = None,
    rows_per_band: int = 1,
) -> None:
    """Render the whole image into ``pixels`` using a pool of worker threads.

    Every band is queued up front and idle workers pull the next one, so
    cheap exterior rows do not leave workers waiting on expensive interior
    rows. Each task writes only to its own slice of ``pixels``. Returns once
    all bands are done; the first band failure is raised instead.
    """

    if pixels.shape != (bounds.size,):
        raise ValueError(
            f"pixel buffer of shape {pixels.shape} does not match "
            f"{bounds.width}x{bounds.height} bounds."
        )

    bands = partition_bands(bounds, window, rows_per_band)
    max_workers = workers if workers is not None else default_workers()
    if max_workers < 1:
        raise ValueError(f"workers must be at least 1, got {max_workers}.")

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="band") as executor:
        futures = [
            executor.submit(render_band, pixels[band.start:band.stop], band.bounds, band.window)
            for band in bands
        ]
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)
        for future in pending:
            future.cancel()
        for future in futures:
            if future in done:
                future.result()
