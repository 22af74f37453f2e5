import colorsys
import math

import pytest

from mandelbrot_viewer.colormaps import (
    HUE_RATE,
    SATURATION,
    VALUE,
    hsv_to_rgb,
    mandelbrot_color,
    smooth_hue,
    smooth_iteration,
)
from mandelbrot_viewer.compute import iterate


@pytest.mark.parametrize("iterations, max_iter", [(100, 100), (250, 100), (1, 1)])
def test_in_set_is_black(iterations, max_iter):
    # z = 0 would be log(0) if it were ever used
    assert mandelbrot_color(iterations, max_iter, 0.0, 0.0) == (0, 0, 0)


@pytest.mark.parametrize("cx, cy", [
    (-2.45, 0.984375),
    (0.26, 0.0),
    (-0.75, 0.1),
    (0.5, 0.5),
    (1.0, 1.0),
])
def test_escaped_color_has_fixed_saturation_and_value(cx, cy):
    iterations, zx, zy = iterate(cx, cy, 1000)
    assert iterations < 1000
    r, g, b = mandelbrot_color(iterations, 1000, zx, zy)
    _, s, v = colorsys.rgb_to_hsv(r / 255, g / 255, b / 255)
    assert s == pytest.approx(SATURATION, abs=0.01)
    assert v == pytest.approx(VALUE, abs=0.01)


def test_smooth_iteration_formula():
    zx, zy = 3.0, -1.5
    log_zn = math.log(zx * zx + zy * zy) / 2
    nu = math.log(log_zn / math.log(2)) / math.log(2)
    assert smooth_iteration(7, zx, zy) == pytest.approx(7 + 1 - nu)


def test_smooth_iteration_small_modulus_falls_back_to_integer_count():
    assert smooth_iteration(5, 0.5, 0.5) == 5.0


@pytest.mark.parametrize("mu", [1.5, 7.2, 20.0, 55.5])
def test_hue_is_periodic_in_smooth_count(mu):
    period = 1.0 / HUE_RATE
    assert smooth_hue(mu + period) == pytest.approx(smooth_hue(mu), abs=1e-6)
    assert smooth_hue(mu + 3 * period) == pytest.approx(smooth_hue(mu), abs=1e-6)


@pytest.mark.parametrize("mu", [-40.0, -0.5, 0.0, 12.3, 1e6])
def test_hue_wraps_into_range(mu):
    assert 0.0 <= smooth_hue(mu) < 360.0


@pytest.mark.parametrize("h, expected", [
    (0.0, (255, 0, 0)),
    (120.0, (0, 255, 0)),
    (240.0, (0, 0, 255)),
    (60.0, (255, 255, 0)),
])
def test_hsv_to_rgb_primaries(h, expected):
    assert hsv_to_rgb(h, 1.0, 1.0) == expected


def test_hsv_to_rgb_gray_when_unsaturated():
    assert hsv_to_rgb(200.0, 0.0, 0.5) == (127, 127, 127)


def test_corner_pixel_is_colored():
    iterations, zx, zy = iterate(-2.45, 0.984375, 100)
    assert mandelbrot_color(iterations, 100, zx, zy) != (0, 0, 0)
