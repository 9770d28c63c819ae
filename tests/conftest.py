import pytest

from chip8.cpu import CPU, PROGRAM_COUNTER_START


class FakeDisplay(object):
    """Records every framebuffer it is asked to show."""
    def __init__(self):
        self.flushes = []

    def flush(self, framebuffer):
        self.flushes.append(framebuffer.snapshot())


class FakeKeyboard(object):
    """Hands out scripted key transitions, then asks to quit."""
    def __init__(self, transitions=None, polls_before_quit=None):
        self.transitions = list(transitions or [])
        self.polls_before_quit = polls_before_quit
        self.polls = 0
        self.quit_requested = polls_before_quit == 0

    def poll(self):
        self.polls += 1
        if self.polls_before_quit is not None and self.polls >= self.polls_before_quit:
            self.quit_requested = True
        if self.transitions:
            return [self.transitions.pop(0)]
        return []


class FakeClock(object):
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def load_words(cpu, words, address=PROGRAM_COUNTER_START):
    """Write 16-bit op-codes into memory, big-endian."""
    for offset, word in enumerate(words):
        cpu.cpu_memory[address + offset * 2] = word >> 8
        cpu.cpu_memory[address + offset * 2 + 1] = word & 0xFF


@pytest.fixture
def cpu():
    return CPU(random_source=lambda: 0xFF)


@pytest.fixture
def display():
    return FakeDisplay()


@pytest.fixture
def clock():
    return FakeClock()
