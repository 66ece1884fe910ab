"""Tests for _buffer module."""

import threading

import pytest

from appinsights._buffer import RingBuffer
from appinsights._types import Envelope, event_envelope


def _make_envelope(name: str = "test") -> Envelope:
    return event_envelope("ik", name)


def _names(items: list[Envelope]) -> list[str]:
    return [e.base_data["name"] for e in items]


def test_enqueue_and_drain_in_order() -> None:
    buf = RingBuffer(maxsize=10)
    assert buf.enqueue(_make_envelope("a"))
    assert buf.enqueue(_make_envelope("b"))
    assert len(buf) == 2

    assert _names(buf.drain(10)) == ["a", "b"]
    assert len(buf) == 0


def test_drain_partial_and_all() -> None:
    buf = RingBuffer(maxsize=10)
    for i in range(5):
        buf.enqueue(_make_envelope(f"e{i}"))

    assert len(buf.drain(3)) == 3
    assert _names(buf.drain()) == ["e3", "e4"]
    assert buf.drain() == []


def test_overflow_evicts_oldest() -> None:
    buf = RingBuffer(maxsize=3)
    for name in "abc":
        buf.enqueue(_make_envelope(name))
    assert buf.drop_count == 0

    assert buf.enqueue(_make_envelope("d")) is False
    assert buf.drop_count == 1
    assert _names(buf.drain()) == ["b", "c", "d"]


def test_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        RingBuffer(maxsize=0)


def test_concurrent_enqueue() -> None:
    buf = RingBuffer(maxsize=10000)
    n_threads = 4
    n_per_thread = 500

    def writer() -> None:
        for i in range(n_per_thread):
            buf.enqueue(_make_envelope(f"e{i}"))

    threads = [threading.Thread(target=writer) for _ in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(buf.drain()) == n_threads * n_per_thread
    assert buf.maxsize == 10000
