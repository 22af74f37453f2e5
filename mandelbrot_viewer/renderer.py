"""
Multi-threaded, generation-versioned Mandelbrot renderer.

The MandelbrotRenderer class handles:
- Splitting the image into contiguous row bands, one worker thread each
- Cooperative cancellation: bands stop as soon as the render generation
  moves on, checked once per row
- Commit: the finished buffer is uploaded to its texture only if no newer
  generation was issued while it was being computed

Each row is computed by the compiled compute.render_row, which releases
the GIL, so the bands really do run in parallel.
"""

import os
import time
import logging
import threading

from .compute import render_row

logger = logging.getLogger(__name__)


def band_ranges(height, num_bands):
    """
    Partition `height` rows into at most `num_bands` contiguous bands.

    When the rows do not divide evenly, the first `height % num_bands`
    bands get one extra row. Empty bands are left out.

    Returns:
        List of (start_row, end_row) pairs, end exclusive
    """
    num_bands = max(1, num_bands)
    chunk, remaining = divmod(height, num_bands)
    bands = []
    start = 0
    for i in range(num_bands):
        rows = chunk + (1 if i < remaining else 0)
        if rows > 0:
            bands.append((start, start + rows))
            start += rows
    return bands


def default_thread_count():
    """Hardware parallelism hint, 1 if the platform reports none."""
    return os.cpu_count() or 1


class MandelbrotRenderer:
    """
    Renders a viewport into a texture's pixel buffer.

    Usage:
        renderer = MandelbrotRenderer(state.generation)
        g0 = state.generation.current()
        committed = renderer.render(texture, viewport, g0)

    The render call blocks until every band has finished or given up.

    Attributes:
        generation: Shared GenerationCounter, read-only from here
        threads: Number of row bands (worker threads) per render
    """

    def __init__(self, generation, threads=None):
        """
        Args:
            generation: GenerationCounter written by the controller
            threads: Worker count; None or 0 means hardware parallelism
        """
        self.generation = generation
        self.threads = threads or default_thread_count()

    def render(self, target, viewport, generation_at_start):
        """
        Render `viewport` into `target` and upload it if still current.

        Args:
            target: Object with `pixels` ((h, w, 3) uint8) and `upload()`
            viewport: Viewport to render
            generation_at_start: Generation this render was issued under

        Returns:
            True if the result was uploaded, False if it went stale
        """
        start = time.perf_counter()
        pixels = target.pixels
        height, width = pixels.shape[:2]
        scale = viewport.scale(width)

        bands = band_ranges(height, self.threads)
        workers = [
            threading.Thread(
                target=self._render_band,
                args=(pixels, band_start, band_end, viewport.center_re,
                      viewport.center_im, scale, viewport.iter_limit,
                      generation_at_start),
                daemon=True,
            )
            for band_start, band_end in bands
        ]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join()

        if self.generation.current() != generation_at_start:
            logger.debug(
                "Discarded stale %dx%d render (generation %d)",
                width, height, generation_at_start
            )
            return False

        target.upload()
        logger.debug(
            "Rendered %dx%d at %d iterations in %.1fms",
            width, height, viewport.iter_limit,
            (time.perf_counter() - start) * 1000
        )
        return True

    def _render_band(self, pixels, band_start, band_end, center_re, center_im,
                     scale, max_iter, generation_at_start):
        """Worker body: rows [band_start, band_end) unless the view moves on."""
        for y in range(band_start, band_end):
            if self.generation.current() != generation_at_start:
                return
            render_row(pixels, y, center_re, center_im, scale, max_iter)
