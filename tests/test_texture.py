import numpy as np
import pygame
import pytest

from mandelbrot_viewer.texture import Texture


def surface_rgb(surface):
    """(h, w, 3) array of a surface's pixels."""
    return pygame.surfarray.array3d(surface).swapaxes(0, 1)


def gradient(width, height):
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[..., 0] = np.arange(height, dtype=np.uint8)[:, None] * 20
    pixels[..., 1] = np.arange(width, dtype=np.uint8)[None, :] * 10
    pixels[..., 2] = 7
    return pixels


@pytest.mark.parametrize("size", [(0, 10), (10, 0), (-1, 5)])
def test_rejects_empty_size(pygame_session, size):
    with pytest.raises(ValueError):
        Texture(*size)


def test_upload_copies_pixels_flipped(pygame_session):
    texture = Texture(6, 4)
    texture.pixels[:] = gradient(6, 4)
    texture.upload()
    assert texture.uploads == 1
    np.testing.assert_array_equal(surface_rgb(texture.surface), gradient(6, 4)[::-1])


def test_pixels_do_not_reach_surface_before_upload(pygame_session):
    texture = Texture(3, 3)
    texture.pixels[:] = 200
    assert not surface_rgb(texture.surface).any()


def test_upload_rejects_mismatched_shape(pygame_session):
    texture = Texture(6, 4)
    with pytest.raises(ValueError):
        texture.upload(np.zeros((6, 4, 3), dtype=np.uint8))


def test_draw_flips_vertically(pygame_session):
    texture = Texture(6, 4)
    texture.pixels[:] = gradient(6, 4)
    texture.upload()
    screen = pygame.Surface((6, 4))

    texture.draw(screen)

    np.testing.assert_array_equal(surface_rgb(screen), gradient(6, 4)[::-1])


def test_draw_stretches_with_nearest_neighbour(pygame_session):
    texture = Texture(2, 2)
    texture.pixels[:] = [[[255, 0, 0], [0, 255, 0]],
                         [[0, 0, 255], [255, 255, 255]]]
    texture.upload()
    screen = pygame.Surface((4, 4))

    texture.draw(screen, (4, 4))

    shown = surface_rgb(screen)
    # Bottom buffer row is drawn on top
    assert tuple(shown[0, 0]) == (0, 0, 255)
    assert tuple(shown[1, 1]) == (0, 0, 255)
    assert tuple(shown[0, 3]) == (255, 255, 255)
    assert tuple(shown[3, 0]) == (255, 0, 0)
    assert tuple(shown[2, 3]) == (0, 255, 0)


def test_draw_does_not_flip_per_frame(pygame_session, monkeypatch):
    texture = Texture(2, 2)
    texture.pixels[:] = [[[255, 0, 0], [0, 255, 0]],
                         [[0, 0, 255], [255, 255, 255]]]
    texture.upload()

    def no_flip(*args):
        raise AssertionError("draw should not flip")

    monkeypatch.setattr(pygame.transform, "flip", no_flip)
    screen = pygame.Surface((4, 4))
    for _ in range(3):
        texture.draw(screen)
        texture.draw(screen, (4, 4))
    assert tuple(surface_rgb(screen)[0, 0]) == (0, 0, 255)


def test_release_drops_buffers(pygame_session):
    texture = Texture(4, 4)
    texture.release()
    assert texture.surface is None
    assert texture.pixels is None
