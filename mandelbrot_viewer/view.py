"""
View model for the Mandelbrot viewer.

Holds everything the controller mutates between frames:
- Viewport: which region of the complex plane is on display
- InteractionState: drag bookkeeping and preview mode
- GenerationCounter: monotonic token that lets stale renders cancel
- ViewerState: the single record bundling the above
"""

import math
import threading


DEFAULT_CENTER = (-0.7, 0.0)
INITIAL_WIDTH = 3.5     # Complex width of the startup view
ITER_FLOOR = 100        # Smallest iteration ceiling ever used
ZOOM_FACTOR = 1.1       # Width divisor per wheel notch
MIN_WIDTH = 1e-300      # Zoom limits; keep the width finite and nonzero
MAX_WIDTH = 1e6


def clamp_width(complex_width):
    return min(MAX_WIDTH, max(MIN_WIDTH, complex_width))


def iterations_for_width(complex_width):
    """Iteration ceiling for a zoom depth; grows with log(zoom)."""
    iters = int(math.floor(100.0 + 150.0 * math.log(INITIAL_WIDTH / complex_width)))
    return max(ITER_FLOOR, iters)


class Viewport:
    """
    A rectangular window into the complex plane.

    Pixels are square: the complex height follows from the pixel aspect
    ratio of whatever buffer the viewport is mapped onto. The imaginary
    axis runs opposite to buffer rows (row 0 is the top, largest Im).
    """

    def __init__(self, center=DEFAULT_CENTER, complex_width=INITIAL_WIDTH,
                 iter_limit=ITER_FLOOR):
        if complex_width <= 0:
            raise ValueError(f"complex_width must be positive, got {complex_width}")
        if iter_limit < ITER_FLOOR:
            raise ValueError(f"iter_limit must be at least {ITER_FLOOR}, got {iter_limit}")
        self.center_re = float(center[0])
        self.center_im = float(center[1])
        self.complex_width = float(complex_width)
        self.iter_limit = int(iter_limit)

    @property
    def center(self):
        return (self.center_re, self.center_im)

    def scale(self, pixel_width):
        """Complex units per pixel for a buffer `pixel_width` pixels wide."""
        return self.complex_width / pixel_width

    def complex_height(self, pixel_width, pixel_height):
        return self.complex_width * pixel_height / pixel_width

    def pixel_to_complex(self, x, y, width, height):
        """Complex point sampled at buffer pixel (x, y)."""
        scale = self.scale(width)
        cx = self.center_re + (x - width / 2.0) * scale
        cy = self.center_im - (y - height / 2.0) * scale
        return cx, cy

    def screen_to_complex(self, x, y, width, height):
        """
        Complex point shown at window position (x, y).

        Buffers are drawn vertically flipped, so this is the buffer mapping
        mirrored about the horizontal center line.
        """
        return self.pixel_to_complex(x, height - y, width, height)

    def copy(self):
        return Viewport(self.center, self.complex_width, self.iter_limit)

    def __eq__(self, other):
        if not isinstance(other, Viewport):
            return NotImplemented
        return (self.center == other.center
                and self.complex_width == other.complex_width
                and self.iter_limit == other.iter_limit)

    def __repr__(self):
        return (f"Viewport(center=({self.center_re!r}, {self.center_im!r}), "
                f"complex_width={self.complex_width!r}, iter_limit={self.iter_limit!r})")


class InteractionState:
    """Drag bookkeeping plus whether the low-resolution preview is shown."""

    def __init__(self):
        self.is_panning = False
        self.pan_start_mouse = (0.0, 0.0)
        self.pan_start_center = (0.0, 0.0)
        self.low_res_active = False


class GenerationCounter:
    """
    Monotonic render generation.

    Only the controller bumps it; render workers read it between rows.
    The lock provides the release/acquire pairing between a bump and
    every later read.
    """

    def __init__(self, value=0):
        self._value = value
        self._lock = threading.Lock()

    def current(self):
        with self._lock:
            return self._value

    def bump(self):
        with self._lock:
            self._value += 1
            return self._value


class ViewerState:
    """Everything the controller threads from one frame to the next."""

    def __init__(self, viewport=None):
        self.viewport = viewport or Viewport()
        self.interaction = InteractionState()
        self.generation = GenerationCounter()
        self.needs_redraw = True  # Render on the first frame

    def reset_view(self):
        self.viewport = Viewport()
