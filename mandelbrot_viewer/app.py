"""
Main application module for the Mandelbrot viewer.

Contains the MandelbrotApp class which handles:
- Window setup and main loop
- Collecting mouse and keyboard input into a FrameInput
- Handing input to the ViewController and rendering when requested
- Drawing the active texture and the overlay
"""

import logging

import pygame

from .compute import warmup_jit
from .controller import FrameInput, ViewController
from .overlay import Overlay
from .renderer import MandelbrotRenderer
from .settings import load_settings
from .texture import Texture
from .view import ViewerState

logger = logging.getLogger(__name__)


class MandelbrotApp:
    """
    Main application class for the Mandelbrot viewer.

    Handles the pygame window, event loop, and coordinates between
    the controller, the renderer and the display.
    """

    TITLE = "Mandelbrot Viewer"

    def __init__(self, width=None, height=None, target_fps=None,
                 downsample=None, threads=None, settings=None):
        """
        Initialize the application.

        Explicit arguments override the values from settings.json.

        Args:
            width: Window width in pixels (default 1280)
            height: Window height in pixels (default 720)
            target_fps: Frame rate cap (default 60)
            downsample: Low-resolution preview divisor, at least 2
            threads: Render worker threads (default: one per CPU)
            settings: Settings dict (default: load_settings())
        """
        settings = settings or load_settings()
        self.width = width or settings['window_width']
        self.height = height or settings['window_height']
        self.target_fps = target_fps or settings['target_fps']
        self.downsample = max(2, downsample or settings['preview_downsample'])
        self.threads = threads or settings['render_threads']

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None

        # Components
        self.state = ViewerState()
        self.controller = None
        self.overlay = Overlay()

        # Input state
        self.wheel = 0.0
        self.pressed = False
        self.released = False
        self.reset_requested = False

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._init_components()

        self.running = True
        try:
            while self.running:
                frame = self._handle_events()
                if not self.running:
                    break
                self.controller.update(frame)
                self.controller.render_if_needed()
                self._draw()
                self.clock.tick(self.target_fps)
        finally:
            self._shutdown()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption("Compiling (first run only)...")
        self.clock = pygame.time.Clock()
        logger.info("Window %dx%d, target %d FPS", self.width, self.height, self.target_fps)

    def _init_components(self):
        """Warm up the JIT, create both render targets and the controller."""
        warmup_jit()

        full_texture = Texture(self.width, self.height)
        low_texture = Texture(
            max(1, self.width // self.downsample),
            max(1, self.height // self.downsample)
        )
        renderer = MandelbrotRenderer(self.state.generation, self.threads)
        self.controller = ViewController(self.state, renderer, full_texture, low_texture)
        logger.info(
            "Rendering with %d threads, preview %dx%d",
            renderer.threads, low_texture.width, low_texture.height
        )
        pygame.display.set_caption(self.TITLE)

    def _handle_events(self):
        """Process pending pygame events and sample the mouse for this frame."""
        self.wheel = 0.0
        self.pressed = False
        self.released = False
        self.reset_requested = False

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEWHEEL:
                self.wheel += event.y
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.pressed = True
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.released = True
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

        return FrameInput(
            mouse=pygame.mouse.get_pos(),
            wheel=self.wheel,
            pressed=self.pressed,
            down=pygame.mouse.get_pressed()[0],
            released=self.released,
            reset=self.reset_requested,
        )

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_r:
            self.reset_requested = True
        elif event.key == pygame.K_ESCAPE:
            self.running = False

    def _draw(self):
        """Draw the current frame."""
        self.screen.fill((0, 0, 0))

        texture, stretched = self.controller.active_texture()
        texture.draw(self.screen, (self.width, self.height) if stretched else None)

        self.overlay.draw(self.screen, self.state.viewport, self.clock.get_fps())
        pygame.display.flip()

    def _shutdown(self):
        """Release both textures before closing the window."""
        if self.controller is not None:
            self.controller.full_texture.release()
            self.controller.low_texture.release()
        pygame.quit()
        logger.info("Viewer closed")


def run(width=None, height=None, target_fps=None):
    """
    Run the Mandelbrot viewer.

    Args:
        width: Window width (default 1280)
        height: Window height (default 720)
        target_fps: Frame rate cap (default 60)
    """
    settings = load_settings()
    logging.basicConfig(
        level=getattr(logging, str(settings['log_level']).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = MandelbrotApp(width, height, target_fps, settings=settings)
    try:
        app.run()
    except KeyboardInterrupt:
        logger.info("Interrupted")
