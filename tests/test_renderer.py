import numpy as np
import pytest

from mandel.escape import escapes
from mandel.geometry import ImageBounds, PlaneWindow, pixel_to_point
from mandel.renderer import ITERATION_LIMIT, new_pixel_buffer, render_band


def _expected_shade(point):
    count = escapes(complex(*point), ITERATION_LIMIT)
    return 0 if count is None else 255 - count


def test_new_pixel_buffer_is_zeroed():
    pixels = new_pixel_buffer(ImageBounds(5, 4))
    assert pixels.shape == (20,)
    assert pixels.dtype == np.uint8
    assert not pixels.any()


def test_render_band_rejects_mismatched_buffer():
    bounds = ImageBounds(4, 4)
    window = PlaneWindow((-1.0, 1.0), (1.0, -1.0))
    with pytest.raises(ValueError):
        render_band(np.zeros(15, dtype=np.uint8), bounds, window)
    with pytest.raises(ValueError):
        render_band(np.zeros(17, dtype=np.uint8), bounds, window)


def test_single_pixel_uses_upper_left():
    bounds = ImageBounds(1, 1)
    window = PlaneWindow((0.3, 0.5), (1.0, 0.0))
    pixels = new_pixel_buffer(bounds)
    render_band(pixels, bounds, window)
    assert pixels[0] == _expected_shade((0.3, 0.5))


def test_interior_is_black_and_exterior_is_white():
    bounds = ImageBounds(4, 4)
    pixels = new_pixel_buffer(bounds)
    render_band(pixels, bounds, PlaneWindow((-0.1, 0.1), (0.1, -0.1)))
    assert not pixels.any()

    render_band(pixels, bounds, PlaneWindow((3.0, 4.0), (4.0, 3.0)))
    assert (pixels == 255).all()


def test_render_band_matches_per_pixel_evaluation():
    bounds = ImageBounds(16, 12)
    window = PlaneWindow((-2.2, 1.2), (0.8, -1.2))
    pixels = new_pixel_buffer(bounds)
    render_band(pixels, bounds, window)
    for row in range(bounds.height):
        for col in range(bounds.width):
            point = pixel_to_point(bounds, (col, row), window)
            assert pixels[row * bounds.width + col] == _expected_shade(point)


def test_render_band_writes_only_its_view():
    image = np.full(30, 7, dtype=np.uint8)
    bounds = ImageBounds(5, 2)
    render_band(image[10:20], bounds, PlaneWindow((3.0, 4.0), (4.0, 3.0)))
    assert (image[:10] == 7).all()
    assert (image[10:20] == 255).all()
    assert (image[20:] == 7).all()
