import pygame

from chip8.keyboard import KEY_MAPPINGS, QUIT_KEY, Keyboard


def key_event(event_type, key):
    return pygame.event.Event(event_type, key=key)


class TestKeyboard:

    def test_every_chip8_key_is_bound_once(self):
        assert sorted(KEY_MAPPINGS) == list(range(16))
        assert len(set(KEY_MAPPINGS.values())) == 16
        assert QUIT_KEY not in KEY_MAPPINGS.values()

    def test_press_and_release(self):
        keyboard = Keyboard()
        transitions = keyboard.poll([
            key_event(pygame.KEYDOWN, pygame.K_KP1),
            key_event(pygame.KEYDOWN, pygame.K_f),
            key_event(pygame.KEYUP, pygame.K_KP1),
        ])
        assert transitions == [(0x1, True), (0xF, True), (0x1, False)]
        assert not keyboard.quit_requested

    def test_unmapped_keys_are_ignored(self):
        keyboard = Keyboard()
        assert keyboard.poll([key_event(pygame.KEYDOWN, pygame.K_z)]) == []

    def test_quit_key(self):
        keyboard = Keyboard()
        assert keyboard.poll([key_event(pygame.KEYDOWN, QUIT_KEY)]) == []
        assert keyboard.quit_requested

    def test_window_close(self):
        keyboard = Keyboard()
        keyboard.poll([pygame.event.Event(pygame.QUIT)])
        assert keyboard.quit_requested

    def test_custom_mappings(self):
        keyboard = Keyboard({0x5: pygame.K_SPACE})
        assert keyboard.poll([key_event(pygame.KEYDOWN, pygame.K_SPACE),
                              key_event(pygame.KEYDOWN, pygame.K_KP5)]) == [(0x5, True)]
