import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest


class RecordingTarget:
    """Render target without a surface: counts uploads, keeps a snapshot."""

    def __init__(self, width, height):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)
        self.uploads = 0
        self.uploaded = None

    def upload(self):
        self.uploads += 1
        self.uploaded = self.pixels.copy()


@pytest.fixture
def make_target():
    return RecordingTarget


@pytest.fixture
def pygame_session():
    pygame.init()
    yield
    pygame.quit()
