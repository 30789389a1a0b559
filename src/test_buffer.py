import numpy as np
import pytest

from loopless._errors import CapacityExceeded
from loopless.buffer import CombinationBuffer, CombinationSet


def test_append_and_finalize():
    buf = CombinationBuffer.allocate(2, 3)
    buf.append([0, 1, 2])
    buf.append((1, 2, 4))
    count, table = buf.finalize()
    assert count == 2
    assert table.tolist() == [[0, 1, 2], [1, 2, 4]]
    assert not table.flags.writeable


def test_append_past_capacity():
    buf = CombinationBuffer.allocate(1, 2)
    buf.append([0, 1])
    with pytest.raises(CapacityExceeded):
        buf.append([0, 2])
    assert buf.count == 1


def test_append_wrong_width():
    buf = CombinationBuffer.allocate(1, 2)
    with pytest.raises(ValueError):
        buf.append([0, 1, 2])


def test_commit():
    buf = CombinationBuffer.allocate(3, 1)
    buf.free[:2, 0] = [4, 5]
    buf.commit(2)
    assert buf.count == 2
    assert buf.free.shape == (1, 1)
    with pytest.raises(CapacityExceeded):
        buf.commit(2)
    with pytest.raises(CapacityExceeded):
        buf.commit(-1)


def test_finalize_strict_rejects_short_run():
    buf = CombinationBuffer.allocate(3, 1)
    buf.append([0])
    with pytest.raises(CapacityExceeded):
        buf.finalize()
    count, table = buf.finalize(strict=False)
    assert count == 1 and table.shape == (1, 1)


def test_capacity_exceeded_is_assertion_level():
    assert issubclass(CapacityExceeded, AssertionError)


def test_zero_width_rows():
    buf = CombinationBuffer.allocate(1, 0)
    buf.append(())
    count, table = buf.finalize()
    assert count == 1 and table.shape == (1, 0)


def test_combination_set_access():
    buf = CombinationBuffer.allocate(3, 2)
    for row in ([0, 1], [0, 2], [1, 2]):
        buf.append(row)
    cs = CombinationSet.from_buffer(3, 2, buf)

    assert len(cs) == cs.count == 3
    assert cs[1] == (0, 2)
    assert cs[-1] == (1, 2)
    assert cs.first == (0, 1) and cs.last == (1, 2)
    assert list(cs) == [(0, 1), (0, 2), (1, 2)]
    assert cs.as_set() == {frozenset({0, 1}), frozenset({0, 2}), frozenset({1, 2})}

    df = cs.to_frame()
    assert list(df.columns) == ["i0", "i1"]
    assert df.shape == (3, 2)


def test_empty_combination_set():
    cs = CombinationSet.empty(4, 5)
    assert cs.count == 0
    assert cs.table.shape == (0, 5)
    assert cs.first is None and cs.last is None
    assert list(cs) == []
    assert isinstance(cs.table, np.ndarray)
