import logging
from random import randint

from chip8.addresses import (
    ADDRESS_MASK, BYTE_MASK, FAMILY_MASK, INDEX_MASK, MAX_ADDRESS, NIBBLE_MASK,
    REGISTER_MASK, X_MASK, Y_MASK,
)
from chip8.exception import (
    MemoryAccessException, RomTooLargeException, StackOverflowException,
    StackUnderflowException, UnknownOpCodeException,
)
from chip8.font import FONT_GLYPH_SIZE, FONT_SPRITES, FONT_START
from chip8.framebuffer import Framebuffer

logger = logging.getLogger(__name__)

# The total amount of memory to allocate for the emulator
MAX_MEMORY = 4096

# Where the program counter should originally point
PROGRAM_COUNTER_START = 0x200

# The number of return addresses the stack can hold
STACK_DEPTH = 16

# The total number of registers in the Chip 8 CPU
NUM_REGISTERS = 0x10

# The number of keys on the Chip 8 hex keypad
NUM_KEYS = 0x10


def random_byte():
    """
    Returns a uniformly random byte. This is the default source used by the
    RAND instruction.
    """
    return randint(0, 255)


# C L A S S E S ###############################################################


class CPU(object):
    """
    A class to emulate a Chip 8 CPU. There are several good resources out on
    the web that describe the internals of the Chip 8 CPU. For example:

        http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
        http://michael.toren.net/mirrors/chip8/chip8def.htm

    To summarize these sources, the Chip 8 has:

        * 16 x 8-bit general purpose registers (V0 - VF**)
        * 1 x 16-bit index register (I)
        * 1 x 16-bit program counter (PC)
        * 16 x 16-bit stack entries, with a stack pointer (SP)
        * 1 x 8-bit delay timer (DT)
        * 1 x 8-bit sound timer (ST)

    ** VF is a special register - it is used to store the overflow bit

    The CPU owns its framebuffer and the state of the 16 keys, but never
    talks to the host directly. Keys are set by whoever drives the CPU, and
    the framebuffer is read by whoever displays it.
    """
    def __init__(self, random_source=random_byte):
        """
        Initialize the Chip8 CPU. The memory is zeroed apart from the font
        glyphs, and the program counter points at the start of program
        memory.

        :param random_source: a callable returning a byte, used by RAND
        """
        # There are two timer registers, one for sound and one that is general
        # purpose known as the delay timer. The timers are loaded with a value
        # and then decremented 60 times per second.
        self.cpu_timers = {
            'delay': 0,
            'sound': 0,
        }

        # Defines the general purpose, index, stack pointer and program
        # counter registers.
        self.cpu_registers = {
            'v': [0] * NUM_REGISTERS,
            'index': 0,
            'sp': 0,
            'pc': PROGRAM_COUNTER_START,
        }
        self.cpu_stack = [0] * STACK_DEPTH

        # The operation_lookup table is executed according to the most
        # significant nibble of the operand (e.g. operand 8nnn would call
        # self.cpu_execute_logical_instruction)
        self.cpu_operation_lookup = {
            0x0: self.cpu_clear_return,                  # 00E0, 00EE
            0x1: self.cpu_jump_to_address,               # 1nnn - JUMP nnn
            0x2: self.cpu_jump_to_subroutine,            # 2nnn - CALL nnn
            0x3: self.cpu_skip_if_reg_equal_val,         # 3snn - SKE  Vs, nn
            0x4: self.cpu_skip_if_reg_not_equal_val,     # 4snn - SKNE Vs, nn
            0x5: self.cpu_skip_if_reg_equal_reg,         # 5st0 - SKE  Vs, Vt
            0x6: self.cpu_move_value_to_reg,             # 6snn - LOAD Vs, nn
            0x7: self.cpu_add_value_to_reg,              # 7snn - ADD  Vs, nn
            0x8: self.cpu_execute_logical_instruction,   # see subfunctions below
            0x9: self.cpu_skip_if_reg_not_equal_reg,     # 9st0 - SKNE Vs, Vt
            0xA: self.cpu_load_index_reg_with_value,     # Annn - LOAD I, nnn
            0xB: self.cpu_jump_to_v0_plus_value,         # Bnnn - JUMP V0 + nnn
            0xC: self.cpu_generate_random_number,        # Ctnn - RAND Vt, nn
            0xD: self.cpu_draw_sprite,                   # Dstn - DRAW Vs, Vt, n
            0xE: self.cpu_keyboard_routines,             # see subfunctions below
            0xF: self.cpu_misc_routines,                 # see subfunctions below
        }

        # This set of operations is invoked when the operand loaded into the
        # CPU starts with 8 (e.g. operand 8st0 would call
        # self.cpu_move_reg_into_reg)
        self.cpu_logical_operation_lookup = {
            0x0: self.cpu_move_reg_into_reg,             # 8st0 - LOAD Vs, Vt
            0x1: self.cpu_logical_or,                    # 8st1 - OR   Vs, Vt
            0x2: self.cpu_logical_and,                   # 8st2 - AND  Vs, Vt
            0x3: self.cpu_exclusive_or,                  # 8st3 - XOR  Vs, Vt
            0x4: self.cpu_add_reg_to_reg,                # 8st4 - ADD  Vs, Vt
            0x5: self.cpu_subtract_reg_from_reg,         # 8st5 - SUB  Vs, Vt
            0x6: self.cpu_right_shift_reg,               # 8s06 - SHR  Vs
            0x7: self.cpu_subtract_reg_from_reg1,        # 8st7 - SUBN Vs, Vt
            0xE: self.cpu_left_shift_reg,                # 8s0E - SHL  Vs
        }

        # This set of operations is invoked when the operand loaded into the
        # CPU starts with F (e.g. operand Ft07 would call
        # self.cpu_move_delay_timer_into_reg)
        self.cpu_misc_routine_lookup = {
            0x07: self.cpu_move_delay_timer_into_reg,    # Ft07 - LOAD Vt, DELAY
            0x0A: self.cpu_wait_for_keypress,            # Ft0A - KEYD Vt
            0x15: self.cpu_move_reg_into_delay_timer,    # Fs15 - LOAD DELAY, Vs
            0x18: self.cpu_move_reg_into_sound_timer,    # Fs18 - LOAD SOUND, Vs
            0x1E: self.cpu_add_reg_into_index,           # Fs1E - ADD  I, Vs
            0x29: self.cpu_load_index_with_reg_sprite,   # Fs29 - LOAD I, Vs
            0x33: self.cpu_store_bcd_in_memory,          # Fs33 - BCD
            0x55: self.cpu_store_regs_in_memory,         # Fs55 - STOR [I], Vs
            0x65: self.cpu_read_regs_from_memory,        # Fs65 - LOAD Vs, [I]
        }
        self.cpu_operand = 0
        self.cpu_operand_address = PROGRAM_COUNTER_START
        self.cpu_random_source = random_source
        self.cpu_keys = [False] * NUM_KEYS
        self.cpu_framebuffer = Framebuffer()
        self.cpu_memory = bytearray(MAX_MEMORY)
        self.cpu_memory[FONT_START:FONT_START + len(FONT_SPRITES)] = FONT_SPRITES

    def __str__(self):
        val = 'PC: {:4X}  OP: {:4X}\n'.format(
            self.cpu_operand_address, self.cpu_operand)
        for index in range(NUM_REGISTERS):
            val += 'V{:X}: {:2X}\n'.format(index, self.cpu_registers['v'][index])
        val += 'I: {:4X}\n'.format(self.cpu_registers['index'])
        val += 'SP: {:X}\n'.format(self.cpu_registers['sp'])
        return val

    def cpu_execute_instruction(self, cpu_operator_param=None):
        """
        Execute the next instruction pointed to by the program counter.
        For testing purposes, pass the operand directly to the
        function. When the operand is not passed directly to the
        function, the operand is fetched and the program counter is
        increased by 2 before the operand is executed.

        :param cpu_operator_param: the operand to execute
        :return: returns the operand executed
        """
        if cpu_operator_param is not None:
            self.cpu_operand = cpu_operator_param
            self.cpu_operand_address = self.cpu_registers['pc']
        else:
            cpu_pc = self.cpu_registers['pc']
            if cpu_pc + 1 > MAX_ADDRESS:
                raise MemoryAccessException(cpu_pc + 1)
            self.cpu_operand = self.cpu_memory[cpu_pc] << 8
            self.cpu_operand |= self.cpu_memory[cpu_pc + 1]
            self.cpu_operand_address = cpu_pc
            self.cpu_registers['pc'] += 2

        logger.debug("%03X: %04X", self.cpu_operand_address, self.cpu_operand)
        cpu_operation = (self.cpu_operand & FAMILY_MASK) >> 12
        self.cpu_operation_lookup[cpu_operation]()
        return self.cpu_operand

    def cpu_execute_logical_instruction(self):
        """
        Execute the logical instruction based upon the current operand.
        Unknown logical operations are ignored.
        """
        cpu_operation = self.cpu_operand & NIBBLE_MASK
        cpu_routine = self.cpu_logical_operation_lookup.get(cpu_operation)
        if cpu_routine is not None:
            cpu_routine()

    def cpu_keyboard_routines(self):
        """
        Run the specified keyboard routine based upon the operand. These
        operations are:

            Es9E - SKPR Vs
            EsA1 - SKUP Vs

        0x9E will check to see if the key specified in the source register is
        pressed, and if it is, skips the next instruction. Operation 0xA1 will
        again check for the specified keypress in the source register, and
        if it is NOT pressed, will skip the next instruction. The register
        calculations are as follows:

           Bits:  15-12    11-8      7-4      3-0
                  unused   source  9 or A    E or 1
        """
        cpu_operation = self.cpu_operand & BYTE_MASK
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        cpu_key_held = self.cpu_key_held(self.cpu_registers['v'][cpu_source])

        # Skip if the key specified in the source register is pressed
        if cpu_operation == 0x9E:
            if cpu_key_held:
                self.cpu_registers['pc'] += 2

        # Skip if the key specified in the source register is not pressed
        if cpu_operation == 0xA1:
            if not cpu_key_held:
                self.cpu_registers['pc'] += 2

    def cpu_misc_routines(self):
        """
        Will execute one of the routines specified in misc_routines.
        Unknown routines are ignored.
        """
        cpu_operation = self.cpu_operand & BYTE_MASK
        cpu_routine = self.cpu_misc_routine_lookup.get(cpu_operation)
        if cpu_routine is not None:
            cpu_routine()

    def cpu_clear_return(self):
        """
        Opcodes starting with a 0 are one of the following instructions:

            00E0 - Clear the display
            00EE - Return from subroutine

        Anything else (including the 0nnn machine code call) cannot be
        executed and stops the machine.
        """
        cpu_operation = self.cpu_operand & ADDRESS_MASK

        if cpu_operation == 0x0E0:
            self.cpu_framebuffer.clear()

        elif cpu_operation == 0x0EE:
            if self.cpu_registers['sp'] == 0:
                raise StackUnderflowException(self.cpu_operand_address)
            self.cpu_registers['sp'] -= 1
            self.cpu_registers['pc'] = self.cpu_stack[self.cpu_registers['sp']]

        else:
            raise UnknownOpCodeException(self.cpu_operand)

    def cpu_jump_to_address(self):
        """
        1nnn - JUMP nnn

        Jump to address. The address to jump to is calculated using the bits
        taken from the operand as follows:

           Bits:  15-12    11-8      7-4      3-0
                  unused  address  address  address
        """
        self.cpu_registers['pc'] = self.cpu_operand & ADDRESS_MASK

    def cpu_jump_to_subroutine(self):
        """
        2nnn - CALL nnn

        Jump to subroutine. Save the current program counter on the stack. The
        subroutine to jump to is taken from the operand as follows:

           Bits:  15-12    11-8      7-4      3-0
                  unused  address  address  address
        """
        cpu_address = self.cpu_operand & ADDRESS_MASK
        if self.cpu_registers['sp'] >= STACK_DEPTH:
            raise StackOverflowException(cpu_address)
        self.cpu_stack[self.cpu_registers['sp']] = self.cpu_registers['pc']
        self.cpu_registers['sp'] += 1
        self.cpu_registers['pc'] = cpu_address

    def cpu_skip_if_reg_equal_val(self):
        """
        3snn - SKE Vs, nn

        Skip if register contents equal to constant value. The calculation for
        the register and constant is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source  constant  constant

        The program counter is updated to skip the next instruction by
        advancing it by 2 bytes.
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        if self.cpu_registers['v'][cpu_source] == (self.cpu_operand & BYTE_MASK):
            self.cpu_registers['pc'] += 2

    def cpu_skip_if_reg_not_equal_val(self):
        """
        4snn - SKNE Vs, nn

        Skip if register contents not equal to constant value.
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        if self.cpu_registers['v'][cpu_source] != (self.cpu_operand & BYTE_MASK):
            self.cpu_registers['pc'] += 2

    def cpu_skip_if_reg_equal_reg(self):
        """
        5st0 - SKE Vs, Vt

        Skip if source register is equal to target register. The calculation
        for the registers to use is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source    target      0
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        cpu_target = (self.cpu_operand & Y_MASK) >> 4
        if self.cpu_registers['v'][cpu_source] == self.cpu_registers['v'][cpu_target]:
            self.cpu_registers['pc'] += 2

    def cpu_move_value_to_reg(self):
        """
        6snn - LOAD Vs, nn
        """
        cpu_target = (self.cpu_operand & X_MASK) >> 8
        self.cpu_registers['v'][cpu_target] = self.cpu_operand & BYTE_MASK

    def cpu_add_value_to_reg(self):
        """
        7snn - ADD Vs, nn

        Add the constant value to the specified register. The result wraps
        around at 256 and the carry flag is left alone.
        """
        cpu_target = (self.cpu_operand & X_MASK) >> 8
        temp = self.cpu_registers['v'][cpu_target] + (self.cpu_operand & BYTE_MASK)
        self.cpu_registers['v'][cpu_target] = temp & REGISTER_MASK

    def cpu_move_reg_into_reg(self):
        """
        8st0 - LOAD Vs, Vt

        Move the value of the source register into the value of the target
        register. The calculation for the registers is performed on the
        operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      0
        """
        cpu_target = (self.cpu_operand & X_MASK) >> 8
        cpu_source = (self.cpu_operand & Y_MASK) >> 4
        self.cpu_registers['v'][cpu_target] = self.cpu_registers['v'][cpu_source]

    def cpu_logical_or(self):
        """
        8ts1 - OR   Vt, Vs
        """
        cpu_target = (self.cpu_operand & X_MASK) >> 8
        cpu_source = (self.cpu_operand & Y_MASK) >> 4
        self.cpu_registers['v'][cpu_target] |= self.cpu_registers['v'][cpu_source]

    def cpu_logical_and(self):
        """
        8ts2 - AND  Vt, Vs
        """
        cpu_target = (self.cpu_operand & X_MASK) >> 8
        cpu_source = (self.cpu_operand & Y_MASK) >> 4
        self.cpu_registers['v'][cpu_target] &= self.cpu_registers['v'][cpu_source]

    def cpu_exclusive_or(self):
        """
        8ts3 - XOR  Vt, Vs
        """
        cpu_target = (self.cpu_operand & X_MASK) >> 8
        cpu_source = (self.cpu_operand & Y_MASK) >> 4
        self.cpu_registers['v'][cpu_target] ^= self.cpu_registers['v'][cpu_source]

    def cpu_add_reg_to_reg(self):
        """
        8ts4 - ADD  Vt, Vs

        Add the value in the source register to the value in the target
        register, and store the result in the target register. The register
        calculations are as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      4

        If a carry is generated, set a carry flag in register VF.
        """
        cpu_target = (self.cpu_operand & X_MASK) >> 8
        cpu_source = (self.cpu_operand & Y_MASK) >> 4
        temp = self.cpu_registers['v'][cpu_target] + self.cpu_registers['v'][cpu_source]
        self.cpu_registers['v'][cpu_target] = temp & REGISTER_MASK
        self.cpu_registers['v'][0xF] = 1 if temp > REGISTER_MASK else 0

    def cpu_subtract_reg_from_reg(self):
        """
        8ts5 - SUB  Vt, Vs

        Subtract the value in the source register from the value in the target
        register, and store the result in the target register. The register
        calculations are as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      5

        If a borrow is NOT generated, set a carry flag in register VF.
        """
        cpu_target = (self.cpu_operand & X_MASK) >> 8
        cpu_source = (self.cpu_operand & Y_MASK) >> 4
        cpu_source_reg = self.cpu_registers['v'][cpu_source]
        cpu_target_reg = self.cpu_registers['v'][cpu_target]
        self.cpu_registers['v'][cpu_target] = (cpu_target_reg - cpu_source_reg) & REGISTER_MASK
        self.cpu_registers['v'][0xF] = 1 if cpu_target_reg >= cpu_source_reg else 0

    def cpu_right_shift_reg(self):
        """
        8s06 - SHR  Vs

        Shift the bits in the specified register 1 bit to the right. Bit
        0 will be shifted into register vf. The register calculation is
        as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source      0         6
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        cpu_bit_zero = self.cpu_registers['v'][cpu_source] & 0x1
        self.cpu_registers['v'][cpu_source] = self.cpu_registers['v'][cpu_source] >> 1
        self.cpu_registers['v'][0xF] = cpu_bit_zero

    def cpu_subtract_reg_from_reg1(self):
        """
        8ts7 - SUBN Vt, Vs

        Subtract the value in the target register from the value in the source
        register, and store the result in the target register. The register
        calculations are as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      7

        If a borrow is NOT generated, set a carry flag in register VF.
        """
        cpu_target = (self.cpu_operand & X_MASK) >> 8
        cpu_source = (self.cpu_operand & Y_MASK) >> 4
        cpu_source_reg = self.cpu_registers['v'][cpu_source]
        cpu_target_reg = self.cpu_registers['v'][cpu_target]
        self.cpu_registers['v'][cpu_target] = (cpu_source_reg - cpu_target_reg) & REGISTER_MASK
        self.cpu_registers['v'][0xF] = 1 if cpu_source_reg >= cpu_target_reg else 0

    def cpu_left_shift_reg(self):
        """
        8s0E - SHL  Vs

        Shift the bits in the specified register 1 bit to the left. Bit
        7 will be shifted into register vf. The register calculation is
        as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source      0         E
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        cpu_bit_seven = (self.cpu_registers['v'][cpu_source] & 0x80) >> 7
        self.cpu_registers['v'][cpu_source] = (self.cpu_registers['v'][cpu_source] << 1) & REGISTER_MASK
        self.cpu_registers['v'][0xF] = cpu_bit_seven

    def cpu_skip_if_reg_not_equal_reg(self):
        """
        9st0 - SKNE Vs, Vt

        Skip if source register is not equal to target register.
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        cpu_target = (self.cpu_operand & Y_MASK) >> 4
        if self.cpu_registers['v'][cpu_source] != self.cpu_registers['v'][cpu_target]:
            self.cpu_registers['pc'] += 2

    def cpu_load_index_reg_with_value(self):
        """
        Annn - LOAD I, nnn

        Load index register with constant value. The calculation for the
        constant value is performed on the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   constant  constant  constant
        """
        self.cpu_registers['index'] = self.cpu_operand & ADDRESS_MASK

    def cpu_jump_to_v0_plus_value(self):
        """
        Bnnn - JUMP V0 + nnn

        Load the program counter with the address in the operand plus the
        value of register V0.
        """
        self.cpu_registers['pc'] = self.cpu_registers['v'][0] + (self.cpu_operand & ADDRESS_MASK)

    def cpu_generate_random_number(self):
        """
        Ctnn - RAND Vt, nn

        A random number between 0 and 255 is generated. The contents of it are
        then ANDed with the constant value passed in the operand. The result is
        stored in the target register. The register and constant values are
        calculated as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    target    value    value
        """
        cpu_value = self.cpu_operand & BYTE_MASK
        cpu_target = (self.cpu_operand & X_MASK) >> 8
        self.cpu_registers['v'][cpu_target] = cpu_value & self.cpu_random_source()

    def cpu_draw_sprite(self):
        """
        Dstn - DRAW Vs, Vt, num_bytes

        Draws the sprite pointed to in the index register at the coordinates
        held in the x and y source registers. Consecutive bytes in the memory
        pointed to by the index register make up the rows of the sprite, see
        Framebuffer.draw for how they end up on the screen. If writing the
        sprite turns any pixel off, then VF will be set to 1, otherwise 0.

           Bits:  15-12     11-8      7-4       3-0
                  unused    x_source  y_source  num_bytes
        """
        cpu_x_source = (self.cpu_operand & X_MASK) >> 8
        cpu_y_source = (self.cpu_operand & Y_MASK) >> 4
        cpu_x_pos = self.cpu_registers['v'][cpu_x_source]
        cpu_y_pos = self.cpu_registers['v'][cpu_y_source]
        cpu_num_bytes = self.cpu_operand & NIBBLE_MASK
        cpu_index = self.cpu_registers['index']

        if cpu_num_bytes:
            self.cpu_check_address(cpu_index + cpu_num_bytes - 1)
        cpu_sprite = self.cpu_memory[cpu_index:cpu_index + cpu_num_bytes]
        cpu_collision = self.cpu_framebuffer.draw(cpu_x_pos, cpu_y_pos, cpu_sprite)
        self.cpu_registers['v'][0xF] = 1 if cpu_collision else 0

    def cpu_move_delay_timer_into_reg(self):
        """
        Ft07 - LOAD Vt, DELAY

        Move the value of the delay timer into the target register. The
        register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    target     0         7
        """
        cpu_target = (self.cpu_operand & X_MASK) >> 8
        self.cpu_registers['v'][cpu_target] = self.cpu_timers['delay']

    def cpu_wait_for_keypress(self):
        """
        Ft0A - KEYD Vt

        Stop execution until a key is pressed. Move the value of the key
        pressed into the specified register. The CPU does not block; while
        no key is held the program counter is wound back so that this
        instruction runs again on the next cycle.
        """
        cpu_target = (self.cpu_operand & X_MASK) >> 8
        for cpu_keyval in range(NUM_KEYS):
            if self.cpu_keys[cpu_keyval]:
                self.cpu_registers['v'][cpu_target] = cpu_keyval
                return
        self.cpu_registers['pc'] -= 2

    def cpu_move_reg_into_delay_timer(self):
        """
        Fs15 - LOAD DELAY, Vs

        Move the value stored in the specified source register into the delay
        timer. The register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     1         5
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        self.cpu_timers['delay'] = self.cpu_registers['v'][cpu_source]

    def cpu_move_reg_into_sound_timer(self):
        """
        Fs18 - LOAD SOUND, Vs

        Move the value stored in the specified source register into the sound
        timer. No sound is played, the timer only counts down.
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        self.cpu_timers['sound'] = self.cpu_registers['v'][cpu_source]

    def cpu_add_reg_into_index(self):
        """
        Fs1E - ADD  I, Vs

        Add the value of the register into the index register value. If the
        index ends up past the end of memory, VF is set to 1, otherwise 0.
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        cpu_index = (self.cpu_registers['index'] + self.cpu_registers['v'][cpu_source]) & INDEX_MASK
        self.cpu_registers['index'] = cpu_index
        self.cpu_registers['v'][0xF] = 1 if cpu_index > MAX_ADDRESS else 0

    def cpu_load_index_with_reg_sprite(self):
        """
        Fs29 - LOAD I, Vs

        Load the index with the sprite indicated in the source register. All
        sprites are 5 bytes long, so the location of the specified sprite
        is its index multiplied by 5. The register calculation is as
        follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     2         9
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        self.cpu_registers['index'] = FONT_START + self.cpu_registers['v'][cpu_source] * FONT_GLYPH_SIZE

    def cpu_store_bcd_in_memory(self):
        """
        Fs33 - BCD

        Take the value stored in source and place the digits in the following
        locations:

            hundreds   -> self.memory[index]
            tens       -> self.memory[index + 1]
            ones       -> self.memory[index + 2]

        For example, if the value is 123, then the following values will be
        placed at the specified locations:

             1 -> self.memory[index]
             2 -> self.memory[index + 1]
             3 -> self.memory[index + 2]

        The register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     3         3
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        cpu_index = self.cpu_registers['index']
        self.cpu_check_address(cpu_index + 2)
        cpu_value = self.cpu_registers['v'][cpu_source]
        self.cpu_memory[cpu_index] = cpu_value // 100
        self.cpu_memory[cpu_index + 1] = (cpu_value // 10) % 10
        self.cpu_memory[cpu_index + 2] = cpu_value % 10

    def cpu_store_regs_in_memory(self):
        """
        Fs55 - STOR [I], Vs

        Store the V registers in the memory pointed to by the index
        register. The register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     5         5

        The source nibble is the last register to store. For example, to
        store all of the V registers, the source would be 'F'.
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        cpu_index = self.cpu_registers['index']
        self.cpu_check_address(cpu_index + cpu_source)
        for cpu_counter in range(cpu_source + 1):
            self.cpu_memory[cpu_index + cpu_counter] = self.cpu_registers['v'][cpu_counter]

    def cpu_read_regs_from_memory(self):
        """
        Fs65 - LOAD Vs, [I]

        Read the V registers from the memory pointed to by the index
        register, up to and including the source register.
        """
        cpu_source = (self.cpu_operand & X_MASK) >> 8
        cpu_index = self.cpu_registers['index']
        self.cpu_check_address(cpu_index + cpu_source)
        for cpu_counter in range(cpu_source + 1):
            self.cpu_registers['v'][cpu_counter] = self.cpu_memory[cpu_index + cpu_counter]

    @staticmethod
    def cpu_check_address(cpu_address):
        """
        Raise a MemoryAccessException if the address is outside of memory.

        :param cpu_address: the address about to be accessed
        """
        if not 0 <= cpu_address <= MAX_ADDRESS:
            raise MemoryAccessException(cpu_address)

    def cpu_key_held(self, cpu_key):
        """
        Returns whether the specified key is held down. Values that do not
        name one of the 16 keys are never held.

        :param cpu_key: the key to check (0x0 - 0xF)
        """
        return cpu_key < NUM_KEYS and self.cpu_keys[cpu_key]

    def cpu_set_key(self, cpu_key, cpu_pressed):
        """
        Latch the state of one of the 16 keys.

        :param cpu_key: the key that changed (0x0 - 0xF)
        :param cpu_pressed: True if the key went down, False if it came up
        """
        self.cpu_keys[cpu_key] = cpu_pressed

    def cpu_load_rom(self, cpu_romdata, cpu_offset=PROGRAM_COUNTER_START):
        """
        Copy the ROM image into memory. Nothing is written if the image does
        not fit.

        :param cpu_romdata: the bytes of the program
        :param cpu_offset: the location in memory at which to load the ROM
        """
        cpu_capacity = MAX_MEMORY - cpu_offset
        if len(cpu_romdata) > cpu_capacity:
            raise RomTooLargeException(len(cpu_romdata), cpu_capacity)
        self.cpu_memory[cpu_offset:cpu_offset + len(cpu_romdata)] = cpu_romdata
        logger.info("Loaded %d byte ROM at %03X", len(cpu_romdata), cpu_offset)

    def cpu_decrement_timers(self):
        """
        Decrement both the sound and delay timer.
        """
        if self.cpu_timers['delay'] != 0:
            self.cpu_timers['delay'] -= 1

        if self.cpu_timers['sound'] != 0:
            self.cpu_timers['sound'] -= 1
