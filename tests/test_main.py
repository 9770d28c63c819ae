import pytest

from chip8 import main as main_module
from chip8.cpu import MAX_MEMORY, PROGRAM_COUNTER_START

from conftest import FakeDisplay, FakeKeyboard


class FakeScreen(FakeDisplay):
    def __init__(self, screen_width, screen_height):
        FakeDisplay.__init__(self)
        self.size = (screen_width, screen_height)

    def init_display(self):
        pass


@pytest.fixture
def headless(monkeypatch):
    monkeypatch.setattr(main_module, 'Screen', FakeScreen)


def write_rom(tmp_path, data):
    rom = tmp_path / 'game.ch8'
    rom.write_bytes(data)
    return str(rom)


class TestMain:

    def test_requires_rom_argument(self):
        with pytest.raises(SystemExit):
            main_module.parse_arguments([])

    def test_missing_rom(self, tmp_path, caplog):
        assert main_module.main([str(tmp_path / 'missing.ch8')]) == 1
        assert 'Unable to read ROM' in caplog.text

    def test_rom_too_large(self, tmp_path, caplog, headless):
        rom = write_rom(tmp_path, bytes(MAX_MEMORY - PROGRAM_COUNTER_START + 1))
        assert main_module.main([rom]) == 1
        assert 'Unable to load ROM' in caplog.text

    def test_quit_exits_cleanly(self, tmp_path, monkeypatch, headless):
        monkeypatch.setattr(main_module, 'Keyboard', lambda: FakeKeyboard(polls_before_quit=5))
        rom = write_rom(tmp_path, bytes([0x12, 0x00]))
        assert main_module.main([rom]) == 0

    def test_fatal_error_exits_with_failure(self, tmp_path, monkeypatch, headless):
        monkeypatch.setattr(main_module, 'Keyboard', FakeKeyboard)
        rom = write_rom(tmp_path, bytes([0x00, 0xEE]))
        assert main_module.main([rom]) == 1

    def test_read_rom(self, tmp_path):
        rom = write_rom(tmp_path, b'\x60\x01')
        assert main_module.read_rom(rom) == b'\x60\x01'
