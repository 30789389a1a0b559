from typing import Iterable
import numpy as np

from .bitreg import REGISTER_BITS

## ======================================================================================
## register <-> bits
## ======================================================================================


def register_to_bits(reg, width: int = REGISTER_BITS) -> np.ndarray:
    """
    Convert a register to an NDArray[np.bool_] of length `width`.
    bits[0] is the most significant bit.
    """
    if width <= 0:
        return np.zeros(0, dtype=np.bool_)
    v = int(reg)
    bits = np.empty(width, dtype=np.bool_)
    for i in range(width):
        shift = width - 1 - i
        bits[i] = (v >> shift) & 1
    return bits


def format_register(reg, width: int = REGISTER_BITS) -> str:
    return "".join("1" if b else "0" for b in register_to_bits(reg, width))


## ======================================================================================
## combination <-> register
## ======================================================================================


def register_from_combination(indices: Iterable[int]) -> np.uint64:
    v = 0
    for i in indices:
        v |= 1 << int(i)
    return np.uint64(v)


def combination_from_register(reg) -> tuple[int, ...]:
    v = int(reg)
    out = []
    i = 0
    while v:
        if v & 1:
            out.append(i)
        v >>= 1
        i += 1
    return tuple(out)


## ======================================================================================
## text
## ======================================================================================


def format_combination(row) -> str:
    # "0 1 2 " -- trailing space kept, one row per line
    return "".join(f"{int(i)} " for i in row)
