from dataclasses import dataclass, field
from typing import Iterator, Sequence

import numpy as np
import pandas as pd

from ._errors import CapacityExceeded
from ._interface import Combination, IndexTable


class CombinationBuffer:
    """
    Pre-sized store for `capacity` combinations of `z` indices each.

    Rows are written either one at a time through `append`, or in bulk by a
    kernel writing straight into `storage` and then reporting how many rows
    it filled through `commit`. Both paths enforce the capacity.
    """

    def __init__(self, capacity: int, z: int):
        self.capacity = capacity
        self.z = z
        self.storage: IndexTable = np.empty((capacity, z), dtype=np.int64)
        self.count = 0

    @classmethod
    def allocate(cls, capacity: int, z: int) -> "CombinationBuffer":
        return cls(capacity, z)

    def append(self, indices: Sequence[int]) -> None:
        if self.count >= self.capacity:
            raise CapacityExceeded(
                f"buffer full: {self.capacity} combinations already stored"
            )
        if len(indices) != self.z:
            raise ValueError(f"Expected {self.z} indices, got {len(indices)}")
        self.storage[self.count, :] = np.asarray(indices, dtype=np.int64)
        self.count += 1

    def commit(self, n: int) -> None:
        """Account for `n` rows a kernel wrote after the current count."""
        if n < 0 or self.count + n > self.capacity:
            raise CapacityExceeded(
                f"kernel reported {n} rows past {self.count}, "
                f"capacity is {self.capacity}"
            )
        self.count += n

    @property
    def free(self) -> IndexTable:
        """Writable view of the rows not yet filled."""
        return self.storage[self.count :]

    def finalize(self, strict: bool = True) -> tuple[int, IndexTable]:
        """
        Return (count, storage[:count]) with storage frozen.

        With `strict`, a buffer that is not exactly full is an internal error:
        capacity came from binomial(k, z), so a generator that stops early
        has skipped combinations.
        """
        if strict and self.count != self.capacity:
            raise CapacityExceeded(
                f"generated {self.count} combinations, expected {self.capacity}"
            )
        table = self.storage[: self.count]
        table.setflags(write=False)
        return self.count, table


@dataclass(frozen=True, eq=False)
class CombinationSet:
    k: int
    z: int
    count: int
    table: IndexTable = field(repr=False)

    @classmethod
    def from_buffer(cls, k: int, z: int, buffer: CombinationBuffer, strict=True):
        count, table = buffer.finalize(strict)
        return cls(k, z, count, table)

    @classmethod
    def empty(cls, k: int, z: int) -> "CombinationSet":
        return cls.from_buffer(k, z, CombinationBuffer(0, z))

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, i: int) -> Combination:
        return tuple(int(x) for x in self.table[i])

    def __iter__(self) -> Iterator[Combination]:
        for row in self.table:
            yield tuple(int(x) for x in row)

    @property
    def first(self) -> Combination | None:
        return self[0] if self.count else None

    @property
    def last(self) -> Combination | None:
        return self[self.count - 1] if self.count else None

    def as_set(self) -> set[frozenset[int]]:
        return {frozenset(c) for c in self}

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.table, columns=[f"i{j}" for j in range(self.z)])
