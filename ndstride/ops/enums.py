"""Enumerations shared between the Python layer and compiled kernels."""

from enum import IntEnum


class BinaryOp(IntEnum):
    """Elementwise binary operators."""

    ADD = 0
    MULTIPLY = 1
