# Masks used to pull the operand fields out of a 16-bit op-code
#
#    Bits:  15-12     11-8      7-4       3-0
#           family     x         y         n
FAMILY_MASK = 0xF000
ADDRESS_MASK = 0x0FFF
BYTE_MASK = 0x00FF
NIBBLE_MASK = 0x000F
X_MASK = 0x0F00
Y_MASK = 0x00F0

# The highest addressable byte in memory
MAX_ADDRESS = 0xFFF

# Masks for 8 and 16 bit register arithmetic
REGISTER_MASK = 0xFF
INDEX_MASK = 0xFFFF
