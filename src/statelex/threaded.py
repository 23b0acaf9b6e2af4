"""Run a scan on its own thread, delivering items through a Channel.

This is the producer/consumer form of the engine: the driver loop runs on
a worker thread and every ``emit()`` blocks until the consumer takes the
item, giving strict ordering and natural backpressure. A state function
that emits in a loop is held at each emit, not only between transitions.

Unlike a scan that starts itself on construction, a ThreadedScan is inert
until ``start()``, and a consumer that stops early calls ``close()`` (or
leaves the ``with`` block) to cancel the channel. The producer then wakes
from its blocked send and the worker thread exits.

Example:
    with ThreadedScan(Lexer("feed", source, lex_start)).start() as scan:
        for item in scan:
            if item.tag is ItemType.ERROR:
                break
    # worker thread is gone here

"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from types import TracebackType

from statelex.channel import Channel
from statelex.config import ScanConfig
from statelex.errors import ChannelClosedError, ScanStateError
from statelex.items import Item, StateFn
from statelex.lexer.core import Lexer
from statelex.location import Text
from statelex.utils.logger import get_logger

logger = get_logger(__name__)


class ThreadedScan:
    """A Lexer driven on a worker thread.

    Attributes:
        lexer: The scan being driven (owned by the worker once started)
        items: Channel the worker sends items on

    Thread Safety:
        One consumer thread reads ``items``. The lexer's cursor is touched
        only by the worker thread.

    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.items: Channel[Item] = Channel()
        self._thread: threading.Thread | None = None

    @property
    def name(self) -> str:
        return self.lexer.name

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> ThreadedScan:
        """Start the worker thread.

        Returns:
            self, for chaining into a ``with`` statement.

        Raises:
            ScanStateError: If already started.
        """
        if self._thread is not None:
            raise ScanStateError(self.lexer.name, "threaded scan already started")
        self._thread = threading.Thread(
            target=self._produce,
            name=f"statelex-{self.lexer.name}",
            daemon=True,
        )
        self._thread.start()
        return self

    def _produce(self) -> None:
        lexer = self.lexer
        try:
            # emit() sends directly, so a cancel surfaces inside the state function.
            lexer.run(self.items.send)
        except ChannelClosedError:
            logger.debug("scan %r: consumer cancelled, producer exiting", lexer.name)
        except Exception as exc:
            logger.debug("scan %r: producer failed: %s", lexer.name, exc)
            self.items.close(exc)
        else:
            self.items.close()
        finally:
            lexer.close()

    def receive(self, timeout: float | None = None) -> Item:
        """Take the next item; see ``Channel.receive``."""
        return self.items.receive(timeout)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def close(self, timeout: float | None = None) -> None:
        """Cancel the scan and wait for the worker thread to exit.

        Args:
            timeout: Seconds to wait for the worker; None waits indefinitely
        """
        self.items.cancel()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def __enter__(self) -> ThreadedScan:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def lex_concurrently(
    name: str,
    text: Text,
    start: StateFn,
    *,
    config: ScanConfig | None = None,
) -> ThreadedScan:
    """Create and start a threaded scan.

    Args:
        name: Diagnostic name of the scan
        text: Input as str, or UTF-8 bytes-like
        start: Initial state function
        config: Scan configuration (defaults to the active context's)

    Returns:
        A started ThreadedScan. Close it if you stop reading early.
    """
    return ThreadedScan(Lexer(name, text, start, config=config)).start()
