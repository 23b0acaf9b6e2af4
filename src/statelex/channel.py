"""Synchronous, unbuffered handoff between one producer and one consumer.

``send()`` does not return until the consumer has taken the item, so the
producer can never run more than one item ahead. Either side can end the
stream: the producer with ``close()`` (optionally passing along the
exception that stopped it), the consumer with ``cancel()``. A producer
blocked in ``send()`` when the consumer cancels wakes up with
ChannelClosedError instead of waiting forever.

Thread Safety:
All state is guarded by one Condition. Exactly one producer thread and one
consumer thread are supported.

"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from typing import Generic, TypeVar

from statelex.errors import ChannelClosedError

T = TypeVar("T")

_EMPTY = object()


class Channel(Generic[T]):
    """Rendezvous channel.

    Usage:
            >>> ch = Channel()
            >>> threading.Thread(target=lambda: (ch.send(1), ch.close())).start()
            >>> list(ch)
            [1]

    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._slot: object = _EMPTY
        self._sent = 0
        self._received = 0
        self._closed = False
        self._cancelled = False
        self._error: BaseException | None = None

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    @property
    def cancelled(self) -> bool:
        """True if the consumer side ended the stream."""
        with self._cond:
            return self._cancelled

    def send(self, item: T) -> None:
        """Hand ``item`` to the consumer, blocking until it is received.

        Raises:
            ChannelClosedError: If the channel is closed before or while
                waiting; the item was not delivered.
        """
        with self._cond:
            if self._closed:
                raise ChannelClosedError("send on closed channel")
            self._slot = item
            self._sent += 1
            ticket = self._sent
            self._cond.notify_all()
            self._cond.wait_for(lambda: self._received >= ticket or self._closed)
            if self._received < ticket:
                self._slot = _EMPTY
                raise ChannelClosedError("channel closed before item was received")

    def receive(self, timeout: float | None = None) -> T:
        """Take the next item, blocking until one is sent or the channel closes.

        Args:
            timeout: Seconds to wait; None waits indefinitely

        Returns:
            The next item.

        Raises:
            ChannelClosedError: If the channel is closed and drained.
            TimeoutError: If ``timeout`` elapsed with nothing to receive.
            BaseException: The producer's error passed to close(), raised
                once after the last item.
        """
        with self._cond:
            ready = self._cond.wait_for(
                lambda: self._sent > self._received or self._closed,
                timeout,
            )
            if not ready:
                raise TimeoutError(f"no item received within {timeout}s")
            if self._sent > self._received and not self._closed:
                item = self._slot
                self._slot = _EMPTY
                self._received += 1
                self._cond.notify_all()
                return item  # type: ignore[return-value]
            if self._error is not None:
                error, self._error = self._error, None
                raise error
            raise ChannelClosedError("receive on closed channel")

    def close(self, error: BaseException | None = None) -> None:
        """End the stream from the producer side.

        Args:
            error: Exception to re-raise to the consumer after the last item
        """
        with self._cond:
            if self._closed:
                return
            self._closed = True
            self._error = error
            self._cond.notify_all()

    def cancel(self) -> None:
        """End the stream from the consumer side, releasing a blocked producer."""
        with self._cond:
            if self._closed:
                return
            self._closed = True
            self._cancelled = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.receive()
            except ChannelClosedError:
                return
