import pytest

from symtab.errors import EmptyStructureError
from symtab.fifo import Queue


def test_queue_is_first_in_first_out():
    q = Queue()
    for item in ("a", "b", "c"):
        q.enqueue(item)

    assert len(q) == 3
    assert q.dequeue() == "a"
    assert q.dequeue() == "b"
    q.enqueue("d")
    assert len(q) == 2
    assert q.dequeue() == "c"
    assert q.dequeue() == "d"
    assert q.is_empty()


def test_empty_queue_raises():
    q = Queue()
    assert q.is_empty()
    with pytest.raises(EmptyStructureError):
        q.dequeue()
