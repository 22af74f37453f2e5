"""
Per-frame interaction logic: zoom, pan, generation bumps and render requests.

The controller is independent of pygame. The application collects one
FrameInput per frame and hands it over; the controller mutates the
ViewerState and decides which texture to render into.
"""

import math
import logging
from collections import namedtuple

from .view import ZOOM_FACTOR, clamp_width, iterations_for_width

logger = logging.getLogger(__name__)


FrameInput = namedtuple(
    "FrameInput",
    ["mouse", "wheel", "pressed", "down", "released", "reset"],
    defaults=(0.0, False, False, False, False),
)
FrameInput.__doc__ = """
Input sampled for one frame.

mouse: (x, y) window position; wheel: signed notches this frame;
pressed/released: left-button edges; down: left-button level;
reset: reset-view request.
"""


class ViewController:
    """
    Drives the view from user input.

    Usage (once per frame):
        controller.update(frame_input)
        controller.render_if_needed()
        texture, stretched = controller.active_texture()

    Attributes:
        state: ViewerState being mutated
        renderer: MandelbrotRenderer sharing state.generation
        full_texture: Display-resolution render target
        low_texture: Reduced-resolution render target for drag previews
    """

    def __init__(self, state, renderer, full_texture, low_texture):
        self.state = state
        self.renderer = renderer
        self.full_texture = full_texture
        self.low_texture = low_texture
        self.width = full_texture.width
        self.height = full_texture.height

    def update(self, frame):
        """
        Apply one frame of input to the view.

        Returns:
            True if anything changed that needs a fresh render
        """
        interacted = False
        if frame.reset:
            interacted |= self._reset(frame.mouse)
        if frame.wheel:
            interacted |= self.zoom(frame.mouse, frame.wheel)
        interacted |= self.pan(frame.mouse, frame.pressed, frame.down, frame.released)

        if interacted:
            self.state.generation.bump()
            self.state.needs_redraw = True
        return interacted

    def zoom(self, mouse, wheel):
        """Zoom by ZOOM_FACTOR**wheel about the cursor. Positive wheel zooms in."""
        if wheel == 0:
            return False
        view = self.state.viewport
        mx, my = mouse

        new_width = clamp_width(view.complex_width * math.pow(ZOOM_FACTOR, -wheel))
        if new_width == view.complex_width:
            return False

        before_re, before_im = view.pixel_to_complex(mx, my, self.width, self.height)
        view.complex_width = new_width
        view.iter_limit = iterations_for_width(view.complex_width)
        after_re, after_im = view.pixel_to_complex(mx, my, self.width, self.height)

        # Opposite signs: the imaginary axis is inverted on screen
        view.center_re += before_re - after_re
        view.center_im -= before_im - after_im

        interaction = self.state.interaction
        interaction.low_res_active = False
        if interaction.is_panning:
            # Keep dragging from here at the new scale
            interaction.pan_start_mouse = (mx, my)
            interaction.pan_start_center = view.center
        return True

    def pan(self, mouse, pressed, down, released):
        """Left-button drag state machine. Returns True on any view change."""
        interaction = self.state.interaction
        view = self.state.viewport
        changed = False

        if pressed:
            interaction.is_panning = True
            interaction.pan_start_mouse = tuple(mouse)
            interaction.pan_start_center = view.center
            interaction.low_res_active = True
            changed = True

        if interaction.is_panning and down:
            dx = mouse[0] - interaction.pan_start_mouse[0]
            dy = mouse[1] - interaction.pan_start_mouse[1]
            scale = view.scale(self.width)
            start_re, start_im = interaction.pan_start_center
            new_center = (start_re - dx * scale, start_im - dy * scale)
            # Also covers returning to the grab point (dx == dy == 0)
            if new_center != view.center:
                view.center_re, view.center_im = new_center
                interaction.low_res_active = True
                changed = True

        if released and interaction.is_panning:
            interaction.is_panning = False
            interaction.low_res_active = False
            changed = True

        return changed

    def _reset(self, mouse):
        self.state.reset_view()
        interaction = self.state.interaction
        if interaction.is_panning:
            # Re-grab at the cursor so the old drag offset is not reapplied
            interaction.pan_start_mouse = tuple(mouse)
            interaction.pan_start_center = self.state.viewport.center
        logger.info("View reset")
        return True

    def active_texture(self):
        """(texture, stretched): what to draw this frame."""
        if self.state.interaction.low_res_active:
            return self.low_texture, True
        return self.full_texture, False

    def render_if_needed(self):
        """
        Render the active texture if a redraw is pending.

        needs_redraw stays set when the generation moved on during the
        render, so the next frame tries again.

        Returns:
            True if a render was committed
        """
        if not self.state.needs_redraw:
            return False
        generation = self.state.generation
        g0 = generation.current()
        texture, _ = self.active_texture()
        committed = self.renderer.render(texture, self.state.viewport, g0)
        if generation.current() == g0:
            self.state.needs_redraw = False
        return committed
