import numpy as np
import numba as nb

from ._utils.intmath import binomial, check_universe
from ._interface import CombinationIterator
from .buffer import CombinationBuffer, CombinationSet


# Loopless successor over an index array
# (F. Ruskey, "Combinatorial Generation", Algorithm 5.7).
#
# State per run:
#   A[0:z]  current combination, strictly increasing
#   A[z]    sentinel, starts at k; drops below k only on the final step
#   J       signed cursor in [-1, z-1]
#
# Kept in int64 so that k = z = 0 ends with A[0] = -1 instead of wrapping.


def initial_state(k: int, z: int) -> tuple[np.ndarray, int]:
    A = np.empty(z + 1, dtype=np.int64)
    A[:z] = np.arange(z, dtype=np.int64)
    A[z] = k
    return A, z - 1


@nb.njit(inline="always")
def array_successor_step(A: np.ndarray, J: int) -> int:
    """Advance A in place; returns the new cursor."""
    if J < 0:
        A[0] = A[0] - 1
        if A[0] == 0:
            J = J + 2
    elif A[J + 1] == A[J] + 1:
        A[J + 1] = A[J]
        A[J] = J
        if A[J + 1] == A[J] + 1:
            J = J + 2
    else:
        A[J] = A[J] + 1
        if J > 0:
            A[J - 1] = A[J] - 1
            J = J - 2
    return J


@nb.njit(cache=True)
def _array_successor_kernel(
    A: np.ndarray,  # (z + 1,) int64
    J: int,
    k: int,
    out: np.ndarray,  # (capacity, z) int64
) -> int:
    """
    Copy A[0:z] into successive rows of `out` until the sentinel drops.
    Returns the number of rows written, or -1 if `out` would overflow.
    """
    z = A.shape[0] - 1
    cap = out.shape[0]
    n = 0
    while A[z] >= k:
        if n >= cap:
            return -1
        for i in range(z):
            out[n, i] = A[i]
        n += 1
        J = array_successor_step(A, J)
    return n


def generate_array_successor(k: int, z: int) -> CombinationSet:
    """
    All z-subsets of range(k), array successor method.

    No register width limit; z > k gives an empty set.
    """
    check_universe(k, z)
    buffer = CombinationBuffer.allocate(binomial(k, z), z)
    if z > k:
        return CombinationSet.from_buffer(k, z, buffer)

    A, J = initial_state(k, z)
    n = _array_successor_kernel(A, J, k, buffer.free)
    buffer.commit(n)
    return CombinationSet.from_buffer(k, z, buffer)


def _iter_array_successor(k: int, z: int) -> CombinationIterator:
    if z > k:
        return

    A, J = initial_state(k, z)
    while A[z] >= k:
        yield tuple(int(i) for i in A[:z])
        J = array_successor_step(A, J)


def iter_array_successor(k: int, z: int) -> CombinationIterator:
    """Lazy `generate_array_successor`: same order, one tuple at a time."""
    check_universe(k, z)
    return _iter_array_successor(k, z)
