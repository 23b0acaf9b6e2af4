"""Tests for the rendezvous Channel.

These use real threads. Every blocking call in a test carries a timeout so
a regression fails instead of hanging the suite.
"""

import threading
import time

import pytest

from statelex import Channel, ChannelClosedError


def start(target, *args) -> threading.Thread:
    t = threading.Thread(target=target, args=args, daemon=True)
    t.start()
    return t


class TestHandoff:
    def test_items_arrive_in_order(self) -> None:
        ch: Channel[int] = Channel()

        def produce() -> None:
            for i in range(50):
                ch.send(i)
            ch.close()

        start(produce)
        assert list(ch) == list(range(50))

    def test_send_blocks_until_received(self) -> None:
        ch: Channel[str] = Channel()
        delivered = threading.Event()

        def produce() -> None:
            ch.send("x")
            delivered.set()

        start(produce)
        time.sleep(0.05)
        assert not delivered.is_set()
        assert ch.receive(timeout=1.0) == "x"
        assert delivered.wait(1.0)

    def test_receive_times_out(self) -> None:
        ch: Channel[int] = Channel()
        with pytest.raises(TimeoutError):
            ch.receive(timeout=0.01)

    def test_same_object_sent_twice(self) -> None:
        ch: Channel[object] = Channel()
        token = object()

        def produce() -> None:
            ch.send(token)
            ch.send(token)
            ch.close()

        start(produce)
        assert list(ch) == [token, token]


class TestClose:
    def test_receive_after_close_raises(self) -> None:
        ch: Channel[int] = Channel()
        ch.close()
        assert ch.closed
        with pytest.raises(ChannelClosedError):
            ch.receive(timeout=1.0)

    def test_send_after_close_raises(self) -> None:
        ch: Channel[int] = Channel()
        ch.close()
        with pytest.raises(ChannelClosedError):
            ch.send(1)

    def test_producer_error_raised_after_items(self) -> None:
        ch: Channel[int] = Channel()

        def produce() -> None:
            ch.send(1)
            ch.close(ValueError("bad producer"))

        start(produce)
        assert ch.receive(timeout=1.0) == 1
        with pytest.raises(ValueError, match="bad producer"):
            ch.receive(timeout=1.0)
        with pytest.raises(ChannelClosedError):
            ch.receive(timeout=1.0)

    def test_iteration_propagates_producer_error(self) -> None:
        ch: Channel[int] = Channel()
        start(lambda: ch.close(KeyError("k")))
        with pytest.raises(KeyError):
            list(ch)


class TestCancel:
    def test_cancel_releases_blocked_producer(self) -> None:
        ch: Channel[int] = Channel()
        outcome: list[str] = []

        def produce() -> None:
            try:
                ch.send(1)
            except ChannelClosedError:
                outcome.append("cancelled")

        t = start(produce)
        time.sleep(0.05)
        ch.cancel()
        t.join(1.0)
        assert not t.is_alive()
        assert outcome == ["cancelled"]
        assert ch.cancelled

    def test_cancel_after_close_is_noop(self) -> None:
        ch: Channel[int] = Channel()
        ch.close()
        ch.cancel()
        assert ch.closed
        assert not ch.cancelled
