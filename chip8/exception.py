class Chip8Exception(Exception):
    """
    Base class for every fatal condition raised by the virtual machine.
    """


class UnknownOpCodeException(Chip8Exception):
    """
    A class to raise unknown op code exceptions.
    """
    def __init__(self, op_code):
        Chip8Exception.__init__(self, "Unknown op-code: {:04X}".format(op_code))
        self.op_code = op_code


class StackOverflowException(Chip8Exception):
    """
    Raised when a subroutine call would nest deeper than the stack allows.
    """
    def __init__(self, address):
        Chip8Exception.__init__(
            self, "Stack overflow calling subroutine at {:03X}".format(address))
        self.address = address


class StackUnderflowException(Chip8Exception):
    """
    Raised when returning from a subroutine with an empty stack.
    """
    def __init__(self, address):
        Chip8Exception.__init__(
            self, "Stack underflow returning from {:03X}".format(address))
        self.address = address


class MemoryAccessException(Chip8Exception):
    """
    Raised when an instruction reads or writes outside of memory.
    """
    def __init__(self, address):
        Chip8Exception.__init__(
            self, "Memory access out of bounds: {:X}".format(address))
        self.address = address


class RomTooLargeException(Chip8Exception):
    """
    Raised when a ROM does not fit in program memory.
    """
    def __init__(self, size, capacity):
        Chip8Exception.__init__(
            self, "ROM is {} bytes, only {} bytes available".format(size, capacity))
        self.size = size
        self.capacity = capacity
