import logging
import time

from chip8.exception import Chip8Exception

logger = logging.getLogger(__name__)

# How many times per second the timers count down and the display refreshes
TIMER_HZ = 60


class Ticker(object):
    """
    A fixed rate tick source. The clock is sampled, never waited on.
    """
    def __init__(self, clock=time.monotonic, hz=TIMER_HZ):
        """
        :param clock: a callable returning monotonic time in seconds
        :param hz: the number of ticks per second
        """
        self.clock = clock
        self.period = 1.0 / hz
        self.last_tick = clock()

    def elapsed(self):
        """
        Returns True if a tick period has passed since the last tick.
        Periods missed while the host was busy are not made up.
        """
        now = self.clock()
        if now - self.last_tick >= self.period:
            self.last_tick = now
            return True
        return False


class Emulator(object):
    """
    Runs a CPU against a display and a keyboard. The display only needs a
    flush(framebuffer) method. The keyboard needs a poll() method returning
    (key, pressed) transitions and a quit_requested attribute.
    """
    def __init__(self, cpu, display, keyboard, ticker=None):
        """
        :param cpu: the CPU to run
        :param display: the object that shows the framebuffer
        :param keyboard: the object that supplies key transitions
        :param ticker: the 60 Hz tick source, a wall clock Ticker when None
        """
        self.cpu = cpu
        self.display = display
        self.keyboard = keyboard
        self.ticker = ticker if ticker is not None else Ticker()

    def step(self):
        """
        Run one iteration of the loop: execute an instruction, count down the
        timers and refresh the display if a tick went by, then pick up any key
        presses.
        """
        self.cpu.cpu_execute_instruction()

        if self.ticker.elapsed():
            self.cpu.cpu_decrement_timers()
            self.display.flush(self.cpu.cpu_framebuffer)

        for key, pressed in self.keyboard.poll():
            self.cpu.cpu_set_key(key, pressed)

    def run(self):
        """
        Step the emulator until the keyboard asks to quit. Errors raised by
        the CPU are logged together with the register contents and passed
        on to the caller.
        """
        logger.info("Starting emulation")
        while not self.keyboard.quit_requested:
            try:
                self.step()
            except Chip8Exception as error:
                logger.error("%s\n%s", error, self.cpu)
                raise
        logger.info("Emulation stopped")
