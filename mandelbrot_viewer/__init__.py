"""
Mandelbrot Viewer Package

An interactive Mandelbrot set viewer using Pygame for display and
Numba for JIT-compiled, multi-threaded rendering.

Quick Start:
    from mandelbrot_viewer import run
    run()

Or from command line:
    python -m mandelbrot_viewer

Package Structure:
    - compute.py: JIT-compiled escape-time kernel and row renderer
    - colormaps.py: Smooth HSV coloring
    - view.py: Viewport, interaction state and render generation
    - renderer.py: Row-band parallel renderer with cancellation
    - controller.py: Zoom/pan state machine and render requests
    - texture.py: Pixel buffer paired with a pygame Surface
    - overlay.py: Status panel and FPS counter
    - settings.py: settings.json loading
    - app.py: Main application and event loop

Controls:
    - Scroll: Zoom in/out at mouse position
    - Drag: Pan around (low-resolution preview while dragging)
    - R: Reset to default view
    - ESC: Quit
"""

from .app import run, MandelbrotApp
from .controller import FrameInput, ViewController
from .renderer import MandelbrotRenderer
from .view import Viewport, ViewerState, GenerationCounter

__version__ = "1.0.0"
__all__ = [
    "run",
    "MandelbrotApp",
    "FrameInput",
    "ViewController",
    "MandelbrotRenderer",
    "Viewport",
    "ViewerState",
    "GenerationCounter",
]
