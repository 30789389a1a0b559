import numpy as np
import numba as nb

from ._utils.bitreg import (
    check_register_width,
    coolest_successor,
    decode_register,
    guard_bit,
    initial_register,
)
from ._utils.intmath import binomial, check_universe
from ._interface import CombinationIterator
from .buffer import CombinationBuffer, CombinationSet


# Bit-vector generation in cool-lex order.
#
# Register: bit i set <=> index i in the combination. Starting from the z low
# bits, coolest_successor() visits every z-subset of the low k bits exactly
# once before the run carries into the guard bit k.
#
# k=4, z=2 visits 0011, 0110, 0101, 1010, 1100, 1001.


@nb.njit(cache=True)
def _coolest_kernel(
    reg: np.uint64,
    guard: np.uint64,
    z: int,
    out: np.ndarray,  # (capacity, z) int64
) -> int:
    """
    Fill `out` from the top, one row per register visited.
    Returns the number of rows written, or -1 if `out` would overflow.
    """
    cap = out.shape[0]
    n = 0
    while (reg & guard) == np.uint64(0):
        if n >= cap:
            return -1
        decode_register(reg, z, out[n])
        n += 1
        reg = coolest_successor(reg)
    return n


def _check(k: int, z: int) -> None:
    check_universe(k, z)
    check_register_width(k)


def generate_coolest(k: int, z: int) -> CombinationSet:
    """
    All z-subsets of range(k), register method.

    Raises RegisterWidthExceeded for k > 63. z > k gives an empty set.
    """
    _check(k, z)
    buffer = CombinationBuffer.allocate(binomial(k, z), z)

    if z > k:
        return CombinationSet.from_buffer(k, z, buffer)

    if z == 0:
        # The zero register is a fixed point of the successor
        buffer.append(())
        return CombinationSet.from_buffer(k, z, buffer)

    n = _coolest_kernel(initial_register(z), guard_bit(k), z, buffer.free)
    buffer.commit(n)
    return CombinationSet.from_buffer(k, z, buffer)


def _iter_coolest(k: int, z: int) -> CombinationIterator:
    if z > k:
        return
    if z == 0:
        yield ()
        return

    reg = initial_register(z)
    guard = guard_bit(k)
    row = np.empty(z, dtype=np.int64)
    while (reg & guard) == 0:
        decode_register(reg, z, row)
        yield tuple(int(i) for i in row)
        reg = np.uint64(coolest_successor(reg))


def iter_coolest(k: int, z: int) -> CombinationIterator:
    """Lazy `generate_coolest`: same order, one tuple at a time."""
    _check(k, z)
    return _iter_coolest(k, z)
