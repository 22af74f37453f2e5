"""
Smooth HSV coloring for Mandelbrot escape-time data.

Escaped points are colored from the continuous (smooth) iteration count,
which removes the visible bands of a plain integer palette. The hue rotates
slowly with the smooth count while saturation and value stay fixed, so the
image keeps a consistent perceived brightness. Points inside the set are
black.

All functions here are Numba-compiled because they run inside the
per-row render loop (see compute.render_row). They can still be called
from plain Python, which is how the tests use them.
"""

import math

from numba import jit


LOG2 = math.log(2.0)

HUE_RATE = 0.03      # Hue turns per smooth iteration
SATURATION = 0.85
VALUE = 0.75


@jit(nopython=True, cache=True)
def hsv_to_rgb(h, s, v):
    """
    Convert HSV to RGB.

    Args:
        h: Hue in degrees, [0, 360)
        s, v: Saturation and value, [0, 1]

    Returns:
        (r, g, b) integers in the 0-255 range
    """
    if s == 0.0:
        c = int(v * 255)
        return c, c, c

    h = (h / 60.0) % 6.0
    i = int(h)
    f = h - i
    p = v * (1 - s)
    q = v * (1 - s * f)
    t = v * (1 - s * (1 - f))

    if i == 0:
        r, g, b = v, t, p
    elif i == 1:
        r, g, b = q, v, p
    elif i == 2:
        r, g, b = p, v, t
    elif i == 3:
        r, g, b = p, q, v
    elif i == 4:
        r, g, b = t, p, v
    else:
        r, g, b = v, p, q

    return int(r * 255), int(g * 255), int(b * 255)


@jit(nopython=True, cache=True)
def smooth_iteration(iterations, zx, zy):
    """Continuous iteration count mu = i + 1 - log2(log2|z|)."""
    zn2 = zx * zx + zy * zy
    if zn2 <= 1.0:
        return float(iterations)
    log_zn = math.log(zn2) / 2.0
    nu = math.log(log_zn / LOG2) / LOG2
    return iterations + 1.0 - nu


@jit(nopython=True, cache=True)
def smooth_hue(mu):
    """Hue in degrees for a smooth iteration count, wrapped into [0, 360)."""
    return ((mu * HUE_RATE) % 1.0) * 360.0


@jit(nopython=True, cache=True)
def mandelbrot_color(iterations, max_iter, zx, zy):
    """
    Color for one escape-time result.

    Points that exhausted the iteration budget are black; the final z is
    never looked at for them (it may be exactly zero).
    """
    if iterations >= max_iter:
        return 0, 0, 0
    mu = smooth_iteration(iterations, zx, zy)
    return hsv_to_rgb(smooth_hue(mu), SATURATION, VALUE)
