"""
Status overlay: a translucent panel with the current view parameters
and an FPS counter in the top-right corner.
"""

import pygame


PANEL_RECT = pygame.Rect(5, 5, 330, 85)
PANEL_COLOR = (135, 206, 235, 178)   # Sky blue, ~70% opaque
BORDER_COLOR = (0, 121, 241)
TITLE_COLOR = (0, 121, 241)
TEXT_COLOR = (0, 82, 172)
FPS_COLOR = (0, 158, 47)


def overlay_lines(viewport):
    """The four overlay lines for a viewport, title first."""
    return [
        "Mandelbrot Viewer",
        "Center: (%.5f, %.5f)" % (viewport.center_re, viewport.center_im),
        "Width: %.3e" % viewport.complex_width,
        "Iterations: %d" % viewport.iter_limit,
    ]


class Overlay:
    """Draws the status panel and FPS counter on top of the fractal."""

    def __init__(self):
        self.font = None
        self.small_font = None
        self.panel = None

    def init_fonts(self):
        pygame.font.init()
        self.font = pygame.font.SysFont('Arial', 20, bold=True)
        self.small_font = pygame.font.SysFont('Arial', 13)

    def _make_panel(self):
        panel = pygame.Surface(PANEL_RECT.size, pygame.SRCALPHA)
        local = panel.get_rect()
        pygame.draw.rect(panel, PANEL_COLOR, local, border_radius=8)
        pygame.draw.rect(panel, BORDER_COLOR, local, 1, border_radius=8)
        return panel

    def draw(self, screen, viewport, fps):
        if self.font is None:
            self.init_fonts()
        if self.panel is None:
            self.panel = self._make_panel()

        screen.blit(self.panel, PANEL_RECT.topleft)

        title, *details = overlay_lines(viewport)
        x = PANEL_RECT.x + 10
        screen.blit(self.font.render(title, True, TITLE_COLOR), (x, PANEL_RECT.y + 8))
        y = PANEL_RECT.y + 35
        for line in details:
            screen.blit(self.small_font.render(line, True, TEXT_COLOR), (x, y))
            y += 15

        fps_text = self.font.render(f"{int(round(fps))} FPS", True, FPS_COLOR)
        screen.blit(fps_text, (screen.get_width() - fps_text.get_width() - 10, 10))
