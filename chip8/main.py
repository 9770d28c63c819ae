import argparse
import logging
import sys

import pygame

from chip8.cpu import CPU
from chip8.emulator import Emulator
from chip8.exception import Chip8Exception
from chip8.keyboard import Keyboard
from chip8.screen import Screen

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(levelname)s]:  %(message)s"


def read_rom(filename):
    """
    Read the whole ROM file.

    :param filename: the name of the file to load
    :return: the contents of the file as bytes
    """
    with open(filename, 'rb') as rom_file:
        return rom_file.read()


def screen_cpu_connector(args):
    """
    Runs the main emulator loop with the specified arguments.

    :param args: the parsed command-line arguments
    :return: the process exit status
    """
    try:
        rom_data = read_rom(args.rom)
    except OSError as error:
        logger.error("Unable to read ROM %s: %s", args.rom, error.strerror or error)
        return 1

    project_cpu = CPU()
    try:
        project_cpu.cpu_load_rom(rom_data)
    except Chip8Exception as error:
        logger.error("Unable to load ROM %s: %s", args.rom, error)
        return 1

    framebuffer = project_cpu.cpu_framebuffer
    project_screen = Screen(framebuffer.width, framebuffer.height)
    project_screen.init_display()
    emulator = Emulator(project_cpu, project_screen, Keyboard())
    try:
        emulator.run()
    except Chip8Exception:
        return 1
    finally:
        pygame.quit()
    return 0


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="Starts a simple Chip 8 emulator")
    parser.add_argument(
        "rom", help="the ROM file to load on startup")
    return parser.parse_args(argv)


def main(argv=None):
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, stream=sys.stdout)
    return screen_cpu_connector(parse_arguments(argv))


if __name__ == "__main__":
    sys.exit(main())
