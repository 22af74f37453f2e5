"""
CPU pixel buffer paired with a pygame Surface.

The Surface plays the role of a GPU texture: the renderer writes into
`pixels` and only an explicit upload() copies them across. Rows are
stored top-to-bottom as the renderer writes them; upload() flips them
vertically, so the surface is already in display order and draw() is a
plain blit.
"""

import numpy as np
import pygame


class Texture:
    """
    A width x height render target.

    Attributes:
        width, height: Dimensions in pixels
        pixels: (height, width, 3) uint8 CPU-side buffer
        surface: pygame Surface holding `pixels` flipped vertically after upload()
        uploads: Number of completed uploads
    """

    def __init__(self, width, height):
        if width <= 0 or height <= 0:
            raise ValueError(f"Texture size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)
        self.surface = pygame.Surface((width, height))
        self.uploads = 0
        self._scaled = None

    def upload(self, pixels=None):
        """Copy a CPU pixel array (default: our own buffer) into the surface."""
        if pixels is None:
            pixels = self.pixels
        if pixels.shape != (self.height, self.width, 3):
            raise ValueError(
                f"Pixel array shape {pixels.shape} does not match "
                f"texture {self.height}x{self.width}x3"
            )
        # Last buffer row goes on top; surfarray is indexed [x, y]
        pygame.surfarray.blit_array(self.surface, pixels[::-1].swapaxes(0, 1))
        self.uploads += 1

    def draw(self, screen, size=None):
        """
        Blit to `screen` at the origin.

        Args:
            screen: Destination surface
            size: (w, h) to stretch to with nearest-neighbour sampling,
                  or None for a 1:1 blit
        """
        if size is None or tuple(size) == (self.width, self.height):
            screen.blit(self.surface, (0, 0))
            return
        if self._scaled is None or self._scaled.get_size() != tuple(size):
            self._scaled = pygame.Surface(size)
        pygame.transform.scale(self.surface, size, self._scaled)
        screen.blit(self._scaled, (0, 0))

    def release(self):
        self.surface = None
        self._scaled = None
        self.pixels = None
