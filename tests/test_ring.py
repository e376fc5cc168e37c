import pytest

from tailn.errors import AllocationError, BufferClosed, InvalidCapacity, LineTooLong
from tailn.ring import LineRing


def test_ring_keeps_last_lines():
    ring = LineRing(3)
    ring.extend(["a", "b", "c", "d", "e"])
    assert list(ring.drain(3)) == ["c", "d", "e"]


def test_ring_without_eviction_keeps_push_order():
    ring = LineRing(5)
    ring.extend(["one\n", "two\n", "three\n"])
    assert ring.snapshot() == ["one\n", "two\n", "three\n"]
    assert list(ring.drain(5)) == ["one\n", "two\n", "three\n"]


def test_default_capacity_does_not_pad():
    ring = LineRing(10)
    ring.extend(["x", "y"])
    assert list(ring.drain(10)) == ["x", "y"]


def test_single_slot_keeps_newest():
    ring = LineRing(1)
    ring.extend(["a", "b"])
    assert list(ring.drain(1)) == ["b"]


def test_drain_empty_and_twice():
    ring = LineRing(5)
    assert list(ring.drain(5)) == []
    ring.extend(["a", "b"])
    assert list(ring.drain(5)) == ["a", "b"]
    assert list(ring.drain(5)) == []
    assert list(ring.drain(0)) == []
    assert list(ring.drain(-1)) == []


def test_partial_drain_leaves_rest_in_order():
    ring = LineRing(4)
    ring.extend(["1", "2", "3", "4", "5", "6"])
    assert list(ring.drain(2)) == ["3", "4"]
    assert len(ring) == 2
    assert ring.pop() == "5"
    assert ring.pop() == "6"
    assert ring.pop() is None


def test_drain_length_is_fixed_when_called():
    ring = LineRing(4)
    ring.extend(["a", "b"])
    drained = ring.drain(4)
    assert next(drained) == "a"
    ring.push("c")
    assert list(drained) == ["b"]
    assert ring.snapshot() == ["c"]


def test_fifo_across_interleaved_push_and_pop():
    ring = LineRing(3)
    ring.extend(["a", "b", "c"])
    assert ring.pop() == "a"
    ring.extend(["d", "e"])
    assert ring.is_full
    assert ring.snapshot() == ["c", "d", "e"]
    assert ring.pop() == "c"
    ring.push("f")
    assert ring.pop() == "d"
    assert ring.pop() == "e"
    ring.extend(["g", "h"])
    assert list(ring.drain(10)) == ["f", "g", "h"]


def test_invalid_capacity_rejected():
    for value in (0, -3, True, 2.5, "3"):
        with pytest.raises(InvalidCapacity) as excinfo:
            LineRing(value)
        assert excinfo.value.value == value


def test_line_too_long_leaves_ring_unchanged():
    ring = LineRing(2, max_line_length=5)
    ring.extend(["ab\n", "cd\n"])
    with pytest.raises(LineTooLong) as excinfo:
        ring.push("abcdef\n")
    assert excinfo.value.length == 6
    assert excinfo.value.limit == 5
    assert ring.snapshot() == ["ab\n", "cd\n"]


def test_line_at_limit_is_accepted_with_any_terminator():
    ring = LineRing(3, max_line_length=5)
    ring.extend(["abcde", "abcde\n", "abcde\r\n"])
    assert len(ring) == 3
    with pytest.raises(LineTooLong):
        ring.push("abcdef")


def test_push_rejects_non_strings():
    ring = LineRing(2)
    with pytest.raises(TypeError):
        ring.push(b"bytes")  # type: ignore[arg-type]
    assert len(ring) == 0


def test_eviction_and_close_release_each_line_once():
    released: list[str] = []
    ring = LineRing(3, on_release=released.append)
    ring.extend(["a", "b", "c", "d", "e"])
    assert released == ["a", "b"]
    assert ring.pop() == "c"
    ring.close()
    assert released == ["a", "b", "d", "e"]
    ring.close()
    assert released == ["a", "b", "d", "e"]
    assert ring.closed
    assert len(ring) == 0


def test_allocations_balance_after_partial_drain():
    pushed = [f"line {i}\n" for i in range(7)]
    released: list[str] = []
    consumed: list[str] = []
    with LineRing(4, on_release=released.append) as ring:
        ring.extend(pushed)
        consumed.extend(ring.drain(1))
    assert consumed == ["line 3\n"]
    assert sorted(released + consumed) == sorted(pushed)
    assert len(released) + len(consumed) == len(pushed)


def test_closed_ring_rejects_push():
    ring = LineRing(2)
    ring.close()
    with pytest.raises(BufferClosed):
        ring.push("a")
    assert ring.pop() is None
    assert list(ring.drain(2)) == []
    assert ring.snapshot() == []


def test_oversized_capacity_raises_allocation_error():
    with pytest.raises(AllocationError):
        LineRing(99999999999999999999)
