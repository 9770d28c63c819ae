"""
A CHIP-8 virtual machine with a pygame front end.
"""
