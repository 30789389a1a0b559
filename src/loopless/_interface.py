from typing import Callable, Iterator, NamedTuple
from numpy.typing import NDArray
import numpy as np


IndexTable = NDArray[np.int64]  # (count, z), one combination per row

Combination = tuple[int, ...]  # strictly increasing indices in [0, k)

CombinationIterator = Iterator[Combination]
IteratorFn = Callable[[int, int], CombinationIterator]


class Config(NamedTuple):
    k: int  # universe size
    z: int  # subset size
    method: str = "auto"


# Each generator module implements:
# generate_<name> : (k, z) -> CombinationSet     # materialized, sized by binomial(k, z)
# iter_<name>     : (k, z) -> CombinationIterator  # lazy, same order
