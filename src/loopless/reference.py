import numpy as np

from ._utils.intmath import check_universe, factorial_binomial
from .buffer import CombinationBuffer, CombinationSet


# Baseline enumerator: include/exclude backtracking, lexicographic order.
# Only used to cross-check and time the loopless methods.


def _backtrack(
    buffer: CombinationBuffer,
    scratch: np.ndarray,
    k: int,
    i: int,  # next slot of scratch to fill
    j: int,  # next candidate index
):
    if i == scratch.shape[0]:
        buffer.append(scratch)
        return
    if j >= k:
        return

    # j included
    scratch[i] = j
    _backtrack(buffer, scratch, k, i + 1, j + 1)
    # j excluded
    _backtrack(buffer, scratch, k, i, j + 1)


def generate_reference(k: int, z: int) -> CombinationSet:
    check_universe(k, z)
    buffer = CombinationBuffer.allocate(factorial_binomial(k, z), z)
    if z <= k:
        scratch = np.empty(z, dtype=np.int64)
        _backtrack(buffer, scratch, k, 0, 0)
    return CombinationSet.from_buffer(k, z, buffer)
