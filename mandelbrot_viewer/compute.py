"""
Mandelbrot escape-time computation using Numba JIT compilation.

This module holds the performance-critical functions:
- iterate(): the escape-time kernel for a single point
- render_row(): one raster row, kernel plus color mapping
- warmup_jit(): compile everything up front

The kernel is compiled without fastmath so results are deterministic in
IEEE-754 double precision. render_row releases the GIL, which lets the
renderer's worker threads compute their row bands concurrently.
"""

import time
import logging

import numpy as np
from numba import jit

from .colormaps import mandelbrot_color

logger = logging.getLogger(__name__)


@jit(nopython=True, cache=True)
def iterate(cx, cy, max_iter):
    """
    Escape-time iteration of z <- z^2 + c starting from z = 0.

    Points in the main cardioid or the period-2 bulb are known to be in
    the set and return immediately without iterating.

    Args:
        cx, cy: Real and imaginary parts of c
        max_iter: Iteration ceiling

    Returns:
        (iterations, zx, zy). iterations == max_iter means "in the set";
        zx, zy are then not meaningful.
    """
    # Main cardioid
    xq = cx - 0.25
    q = xq * xq + cy * cy
    if q * (q + xq) < 0.25 * cy * cy:
        return max_iter, 0.0, 0.0

    # Period-2 bulb
    if (cx + 1.0) * (cx + 1.0) + cy * cy < 0.0625:
        return max_iter, 0.0, 0.0

    zx = 0.0
    zy = 0.0
    zx2 = 0.0
    zy2 = 0.0
    i = 0
    while zx2 + zy2 < 4.0 and i < max_iter:
        # zy uses the old zx, zx uses the cached squares
        zy = 2.0 * zx * zy + cy
        zx = zx2 - zy2 + cx
        zx2 = zx * zx
        zy2 = zy * zy
        i += 1

    return i, zx, zy


@jit(nopython=True, nogil=True, cache=True)
def render_row(out, y, center_re, center_im, scale, max_iter):
    """
    Compute and color one row of the raster.

    Args:
        out: (height, width, 3) uint8 pixel buffer, modified in place
        y: Row index, 0 is the top row
        center_re, center_im: View center in the complex plane
        scale: Complex units per pixel
        max_iter: Iteration ceiling
    """
    height = out.shape[0]
    width = out.shape[1]
    cy = center_im - (y - height / 2.0) * scale
    for x in range(width):
        cx = center_re + (x - width / 2.0) * scale
        iterations, zx, zy = iterate(cx, cy, max_iter)
        r, g, b = mandelbrot_color(iterations, max_iter, zx, zy)
        out[y, x, 0] = np.uint8(r)
        out[y, x, 1] = np.uint8(g)
        out[y, x, 2] = np.uint8(b)


def warmup_jit():
    """
    Warm up JIT compilation with a tiny dummy buffer.

    Call this once at startup so the first real frame does not stall
    on compilation.
    """
    start = time.perf_counter()
    dummy = np.zeros((4, 4, 3), dtype=np.uint8)
    for y in range(dummy.shape[0]):
        render_row(dummy, y, -0.7, 0.0, 3.5 / 4, 10)
    logger.info("JIT warm-up finished in %.2fs", time.perf_counter() - start)
