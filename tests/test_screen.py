import pygame
import pytest

from chip8 import screen as screen_module
from chip8.framebuffer import Framebuffer
from chip8.screen import PIXEL_COLORS, Screen


@pytest.fixture
def offscreen(monkeypatch):
    """A Screen drawing onto a plain surface instead of a window."""
    flips = []
    monkeypatch.setattr(screen_module.display, 'flip', lambda: flips.append(True))
    project_screen = Screen(64, 32, ratio=2)
    project_screen.screen_surface = pygame.Surface((128, 64))
    project_screen.flips = flips
    return project_screen


class TestScreen:

    def test_flush_draws_scaled_pixels(self, offscreen):
        framebuffer = Framebuffer()
        framebuffer.draw(1, 0, [0x80])
        offscreen.flush(framebuffer)

        surface = offscreen.screen_surface
        for position in ((2, 0), (3, 0), (2, 1), (3, 1)):
            assert surface.get_at(position) == PIXEL_COLORS[1]
        for position in ((0, 0), (1, 1), (4, 0), (2, 2)):
            assert surface.get_at(position) == PIXEL_COLORS[0]
        assert offscreen.flips == [True]

    def test_flush_erases_old_pixels(self, offscreen):
        framebuffer = Framebuffer()
        framebuffer.draw(0, 0, [0x80])
        offscreen.flush(framebuffer)
        framebuffer.clear()
        offscreen.flush(framebuffer)
        assert offscreen.screen_surface.get_at((0, 0)) == PIXEL_COLORS[0]
