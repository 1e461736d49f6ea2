"""Persist rendered pixel buffers as grayscale images."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import PIL.Image

from .geometry import ImageBounds


_FORMAT_ALIASES = {"JPG": "JPEG", "TIF": "TIFF"}


def _pil_format_name(ext: str) -> str:
    name = ext.upper().lstrip(".")
    return _FORMAT_ALIASES.get(name, name)


def write_image(
    path,
    pixels: np.ndarray,
    bounds: ImageBounds,
    image_format: Optional[str] = None,
) -> Path:
    """Write ``pixels``, whose dimensions are ``bounds``, to ``path`` as an 8-bit grayscale image.

    The format follows the file extension unless ``image_format`` is given.
    """

    if pixels.shape != (bounds.size,):
        raise ValueError(
            f"pixel buffer of shape {pixels.shape} does not match "
            f"{bounds.width}x{bounds.height} bounds."
        )

    output_path = Path(path).expanduser()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image = PIL.Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8).reshape(bounds.height, bounds.width))
    pil_format = _pil_format_name(image_format) if image_format else None
    image.save(str(output_path), format=pil_format)
    return output_path
