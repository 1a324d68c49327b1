# SCHIP8
"""CHIP-8 / SUPER-CHIP interpreter with a pygame front end."""

__version__ = "1.0.0"
