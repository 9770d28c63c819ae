import logging

import pytest

from chip8.emulator import Emulator, Ticker
from chip8.exception import UnknownOpCodeException

from conftest import FakeKeyboard, load_words


class TestTicker:

    def test_ticks_once_per_period(self, clock):
        ticker = Ticker(clock, hz=50)
        clock.now = 0.01
        assert not ticker.elapsed()
        clock.now = 0.02
        assert ticker.elapsed()
        assert not ticker.elapsed()
        clock.now = 0.03
        assert not ticker.elapsed()
        clock.now = 0.04
        assert ticker.elapsed()

    def test_missed_ticks_are_dropped(self, clock):
        ticker = Ticker(clock, hz=60)
        clock.now = 10.0
        assert ticker.elapsed()
        assert not ticker.elapsed()


class TestEmulatorStep:

    def test_step_executes_and_applies_keys(self, cpu, display, clock):
        load_words(cpu, [0x6105])
        keyboard = FakeKeyboard(transitions=[(0x3, True)])
        emulator = Emulator(cpu, display, keyboard, Ticker(clock))

        emulator.step()

        assert cpu.cpu_registers['v'][1] == 5
        assert cpu.cpu_keys[0x3]
        assert display.flushes == []

    def test_tick_decrements_timers_and_flushes(self, cpu, display, clock):
        load_words(cpu, [0xA000, 0xD005])
        cpu.cpu_timers['delay'] = 5
        emulator = Emulator(cpu, display, FakeKeyboard(), Ticker(clock))

        emulator.step()
        clock.now = 1.0
        emulator.step()

        assert cpu.cpu_timers['delay'] == 4
        assert len(display.flushes) == 1
        assert display.flushes[0][0][:4] == (True, True, True, True)

    def test_key_release_clears_latch(self, cpu, display, clock):
        load_words(cpu, [0x1200])
        keyboard = FakeKeyboard(transitions=[(0xA, True), (0xA, False)])
        emulator = Emulator(cpu, display, keyboard, Ticker(clock))
        emulator.step()
        assert cpu.cpu_keys[0xA]
        emulator.step()
        assert not cpu.cpu_keys[0xA]


class TestEmulatorRun:

    def test_runs_until_quit(self, cpu, display, clock):
        load_words(cpu, [0x7001, 0x1200])
        keyboard = FakeKeyboard(polls_before_quit=4)
        Emulator(cpu, display, keyboard, Ticker(clock)).run()
        assert keyboard.polls == 4
        assert cpu.cpu_registers['v'][0] == 2

    def test_quit_before_first_instruction(self, cpu, display, clock):
        Emulator(cpu, display, FakeKeyboard(polls_before_quit=0), Ticker(clock)).run()
        assert cpu.cpu_registers['pc'] == 0x200

    def test_fatal_error_is_logged_and_raised(self, cpu, display, clock, caplog):
        emulator = Emulator(cpu, display, FakeKeyboard(), Ticker(clock))
        with caplog.at_level(logging.ERROR, logger='chip8.emulator'):
            with pytest.raises(UnknownOpCodeException):
                emulator.run()
        assert 'Unknown op-code: 0000' in caplog.text
        assert 'PC:  200' in caplog.text
