"""State-function lexer with a pull-based driver loop.

A scan is a graph of caller-written state functions. Each one receives the
Lexer, consumes input with the cursor primitives, emits items, and returns
the next state function (or None to stop). The engine ships no states.

The driver is a generator: pulling the next item runs state functions on
the consumer's own thread until an item is ready or the graph terminates.
Nothing runs ahead of the consumer, so an abandoned scan holds no thread.
For the producer/consumer variant see ``statelex.threaded``.

Thread Safety:
Lexer instances are single-use. Create one per input.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Generator, Iterator
from typing import Any

from statelex.config import ScanConfig, get_scan_config
from statelex.errors import ScanStalledError, ScanStateError
from statelex.items import Item, ItemTag, StateFn
from statelex.lexer.cursor import Cursor
from statelex.location import Text
from statelex.profiling import ScanAccumulator, get_scan_accumulator
from statelex.utils.logger import get_logger

logger = get_logger(__name__)


def _state_name(state: Any) -> str:
    return getattr(state, "__qualname__", None) or repr(state)


class Lexer(Cursor):
    """State-function lexer over one input.

    Usage:
        >>> def lex_word(lx):
        ...     if lx.accept_run(str.isalpha):
        ...         lx.emit("word")
        ...         return lex_word
        ...     return None
        >>> list(Lexer("demo", "hello", lex_word))
        [Item(word, 'hello')]

    Lifecycle:
        Construction is inert. The first call to tokenize() (or iter())
        starts the scan; it runs to completion exactly once.

    """

    __slots__ = (
        "_initial_state",
        "_queue",
        "_sink",
        "_config",
        "_accumulator",
        "_driver",
        "_started",
        "_closed",
        "_item_count",
        "_transition_count",
    )

    def __init__(
        self,
        name: str,
        text: Text,
        start: StateFn,
        *,
        config: ScanConfig | None = None,
    ) -> None:
        """Initialize lexer with input and initial state.

        Args:
            name: Diagnostic name, used in locations and log records
            text: Input as str, or UTF-8 bytes-like
            start: Initial state function
            config: Scan configuration (defaults to the active context's)
        """
        if not callable(start):
            raise TypeError(f"initial state must be callable, got {type(start).__name__}")
        self._config = config if config is not None else get_scan_config()
        super().__init__(name, text, strict_backup=self._config.strict_backup)
        self._initial_state = start
        self._accumulator: ScanAccumulator | None = get_scan_accumulator()
        self._queue: deque[Item] = deque()
        self._sink: Callable[[Item], None] | None = None
        self._driver: Generator[Item, None, None] | None = None
        self._started = False
        self._closed = False
        self._item_count = 0
        self._transition_count = 0

    @property
    def config(self) -> ScanConfig:
        return self._config

    @property
    def item_count(self) -> int:
        """Items emitted so far, error items included."""
        return self._item_count

    @property
    def transition_count(self) -> int:
        """State functions invoked so far."""
        return self._transition_count

    @property
    def closed(self) -> bool:
        return self._closed

    # =========================================================================
    # Emission
    # =========================================================================

    def emit(self, tag: ItemTag) -> Item:
        """Emit the pending input as an item and start the next one.

        Args:
            tag: Tag for the item

        Returns:
            The emitted item.
        """
        item = Item(tag, self.pending, self._start, self._pos)
        self._push(item)
        self._start = self._pos
        return item

    def errorf(self, tag: ItemTag, message: str, *args: Any) -> None:
        """Emit an error item carrying a formatted diagnostic.

        ``message`` is %-formatted with ``args`` when any are given, so
        ``lx.errorf(ERROR, "unexpected rune %r", r)`` yields
        ``unexpected rune 'C'``. The pending span is left untouched.

        Returns:
            None, the terminal state, so a state function can write
            ``return lx.errorf(...)`` to abort the scan. Whether to abort
            is the grammar's choice.
        """
        text = message % args if args else message
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s: error item %r", self.location(), text)
        self._push(Item(tag, text, self._start, self._pos))

    def _push(self, item: Item) -> None:
        self._item_count += 1
        if self._sink is not None:
            self._sink(item)
        else:
            self._queue.append(item)

    # =========================================================================
    # Driver loop
    # =========================================================================

    def tokenize(self) -> Iterator[Item]:
        """Start the scan and return its item stream.

        Returns:
            Iterator over items in emission order. It is exhausted once a
            state function returns None.

        Raises:
            ScanStateError: If the scan was already started.
        """
        if self._started:
            raise ScanStateError(self._name, "scan already started; lexers are single-use")
        self._started = True
        self._driver = self._run()
        return self._driver

    def __iter__(self) -> Iterator[Item]:
        return self.tokenize()

    def run(self, sink: Callable[[Item], None]) -> None:
        """Drive the scan to completion, handing each item to ``sink``.

        ``sink`` is called from inside emit() and errorf(), so a sink that
        blocks holds the state function at that emit. An exception raised
        by the sink propagates out of emit() and ends the scan.

        Args:
            sink: Callable receiving each item as it is emitted

        Raises:
            ScanStateError: If the scan was already started.
        """
        items = self.tokenize()
        self._sink = sink
        for _ in items:
            pass

    def close(self) -> None:
        """Abandon the scan.

        A running item stream stops; an unstarted lexer can no longer start.
        Safe to call more than once.
        """
        self._started = True
        if self._closed:
            return
        self._closed = True
        # From inside a state function the loop notices _closed on its own.
        if self._driver is not None and not self._driver.gi_running:
            self._driver.close()

    def _run(self) -> Generator[Item, None, None]:
        state: StateFn | None = self._initial_state
        config = self._config
        trace = config.trace
        max_idle = config.max_idle_steps
        idle_steps = 0

        logger.debug("scan %r: started (%d units)", self._name, self._input_len)
        try:
            while state is not None and not self._closed:
                if trace:
                    logger.debug(
                        "scan %r: %s at start=%d pos=%d",
                        self._name,
                        _state_name(state),
                        self._start,
                        self._pos,
                    )
                before = (self._start, self._pos, self._item_count)
                try:
                    state = state(self)
                    self._transition_count += 1

                    if state is not None and not callable(state):
                        raise ScanStateError(
                            self._name,
                            f"state function returned {type(state).__name__}, "
                            "expected a state function or None",
                        )

                    if max_idle is not None:
                        if (self._start, self._pos, self._item_count) == before:
                            idle_steps += 1
                            if idle_steps >= max_idle:
                                raise ScanStalledError(self._name, self._pos, idle_steps)
                        else:
                            idle_steps = 0
                except Exception:
                    # Items emitted before the failure are still delivered.
                    while self._queue and not self._closed:
                        yield self._queue.popleft()
                    raise

                while self._queue and not self._closed:
                    yield self._queue.popleft()
        finally:
            self._queue.clear()
            self._closed = True
            self._finish()

    def _finish(self) -> None:
        logger.debug(
            "scan %r: finished after %d transitions, %d items",
            self._name,
            self._transition_count,
            self._item_count,
        )
        if self._accumulator is not None:
            self._accumulator.record_scan(
                self._input_len, self._item_count, self._transition_count
            )


def lex(
    name: str,
    text: Text,
    start: StateFn,
    *,
    config: ScanConfig | None = None,
) -> Lexer:
    """Create a lexer; iterate it to scan.

    Args:
        name: Diagnostic name of the scan
        text: Input as str, or UTF-8 bytes-like
        start: Initial state function
        config: Scan configuration (defaults to the active context's)

    Returns:
        An inert Lexer. Nothing runs until it is iterated.

    Example:
        >>> for item in lex("config", source, lex_key):
        ...     handle(item)

    """
    return Lexer(name, text, start, config=config)
