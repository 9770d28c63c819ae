import logging

import pygame

logger = logging.getLogger(__name__)

# Sets which keys on the keyboard map to the Chip 8 keys
KEY_MAPPINGS = {
    0x0: pygame.K_KP0,
    0x1: pygame.K_KP1,
    0x2: pygame.K_KP2,
    0x3: pygame.K_KP3,
    0x4: pygame.K_KP4,
    0x5: pygame.K_KP5,
    0x6: pygame.K_KP6,
    0x7: pygame.K_KP7,
    0x8: pygame.K_KP8,
    0x9: pygame.K_KP9,
    0xA: pygame.K_a,
    0xB: pygame.K_b,
    0xC: pygame.K_c,
    0xD: pygame.K_d,
    0xE: pygame.K_e,
    0xF: pygame.K_f,
}

# The key that stops the emulator
QUIT_KEY = pygame.K_q


class Keyboard(object):
    """
    Turns pygame key events into Chip 8 key transitions. Closing the window
    or pressing QUIT_KEY asks the emulator to stop.
    """
    def __init__(self, key_mappings=None):
        """
        :param key_mappings: a dict of Chip 8 key -> pygame key constant
        """
        if key_mappings is None:
            key_mappings = KEY_MAPPINGS
        self.host_to_chip8 = {host_key: chip8_key for chip8_key, host_key in key_mappings.items()}
        self.quit_requested = False

    def poll(self, events=None):
        """
        Drain the pending events and return the Chip 8 key transitions they
        contain. Events for keys that are not mapped are ignored.

        :param events: the events to process, pygame.event.get() when None
        :return: a list of (key, pressed) tuples in the order they occurred
        """
        if events is None:
            events = pygame.event.get()

        transitions = []
        for event in events:
            if event.type == pygame.QUIT:
                self.quit_requested = True

            elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                if event.type == pygame.KEYDOWN and event.key == QUIT_KEY:
                    self.quit_requested = True
                    continue

                chip8_key = self.host_to_chip8.get(event.key)
                if chip8_key is not None:
                    transitions.append((chip8_key, event.type == pygame.KEYDOWN))

        if self.quit_requested:
            logger.debug("Quit requested")
        return transitions
