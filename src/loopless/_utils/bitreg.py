import numpy as np
import numba as nb

from .._errors import RegisterWidthExceeded

# ==========================================================================
# Register geometry
# ==========================================================================

# A combination of [0, k) lives in the low k bits of a uint64; bit k is the
# guard that stops generation, so k can be at most 63.
REGISTER_BITS = 64
MAX_REGISTER_UNIVERSE = REGISTER_BITS - 1


def check_register_width(k: int) -> None:
    if k > MAX_REGISTER_UNIVERSE:
        raise RegisterWidthExceeded(
            f"k={k} needs {k + 1} register bits, only {REGISTER_BITS} available; "
            "use the array successor method for large k"
        )


def initial_register(z: int) -> np.uint64:
    """Lowest z bits set: the first combination {0, ..., z-1}."""
    return np.uint64((1 << z) - 1)


def guard_bit(k: int) -> np.uint64:
    return np.uint64(1 << k)


# ==========================================================================
# Bit tricks (all arithmetic is uint64 and wraps modulo 2^64)
# ==========================================================================


@nb.njit(inline="always")
def saturating_decrement(x: np.uint64) -> np.uint64:
    # x - 1, clamped at 0 instead of wrapping to 2^64 - 1
    if x == np.uint64(0):
        return x
    return x - np.uint64(1)


@nb.njit(inline="always")
def coolest_successor(reg: np.uint64) -> np.uint64:
    """
    Next register in cool-lex order (Ruskey & Williams,
    "The coolest way to generate combinations", Discrete Math. 309, 2009).

        o = R & (R + 1)         # drop the trailing run of ones
        m = o ^ (o - 1)         # mask up to and including the lowest set bit of o
        t = m & R               # bits of R under that mask
        u = sat_dec((m + 1) & R)
        R' = R + t - u

    When o == 0, m is all ones and m + 1 wraps to 0, which is what makes u
    vanish; the saturating decrement keeps u from wrapping in turn.
    """
    one = np.uint64(1)
    o = reg & (reg + one)
    m = o ^ (o - one)
    t = m & reg
    u = saturating_decrement((m + one) & reg)
    return reg + t - u


@nb.njit(inline="always")
def decode_register(reg: np.uint64, z: int, row: np.ndarray) -> int:
    """
    Write the positions of the lowest z set bits of `reg` into row[0:z],
    least significant first. Returns the number of positions written.
    """
    one = np.uint64(1)
    ki = 0
    i = 0
    while ki < z and i < REGISTER_BITS:
        if (reg >> np.uint64(i)) & one:
            row[ki] = i
            ki += 1
        i += 1
    return ki


@nb.njit(cache=True)
def popcount(reg: np.uint64) -> int:
    one = np.uint64(1)
    n = 0
    while reg:
        reg &= reg - one
        n += 1
    return n
