"""statelex ScanAccumulator: opt-in profiling for scans.

This module provides accumulated metrics across scans:
- Number of scans completed
- Input length scanned
- Items emitted
- State transitions run

Zero overhead when disabled (get_scan_accumulator() returns None).
The accumulator is captured when a Lexer is constructed, so threaded
scans report into the context that created them.

Example:
    from statelex import lex
    from statelex.profiling import profiled_scan

    with profiled_scan() as metrics:
        items = list(lex("demo", "AA BB", lex_start))

    print(metrics.summary())
    # {"total_ms": 0.1, "scans": 1, "input_length": 5, "item_count": 2, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class ScanAccumulator:
    """Accumulated metrics across scans.

    Attributes:
        start_time: Profiling start timestamp.
        scans: Number of scans recorded.
        input_length: Total length of scanned inputs (storage units).
        item_count: Total items emitted, error items included.
        transition_count: Total state function invocations.

    """

    start_time: float = field(default_factory=perf_counter)
    scans: int = 0
    input_length: int = 0
    item_count: int = 0
    transition_count: int = 0

    def record_scan(self, input_length: int, item_count: int, transition_count: int) -> None:
        """Record one finished scan.

        Args:
            input_length: Length of the input scanned.
            item_count: Items the scan emitted.
            transition_count: State functions the driver invoked.

        """
        self.scans += 1
        self.input_length += input_length
        self.item_count += item_count
        self.transition_count += transition_count

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of scan metrics.

        Returns:
            Dict with total_ms and every counter.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "scans": self.scans,
            "input_length": self.input_length,
            "item_count": self.item_count,
            "transition_count": self.transition_count,
        }


_accumulator: ContextVar[ScanAccumulator | None] = ContextVar(
    "scan_accumulator",
    default=None,
)


def get_scan_accumulator() -> ScanAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_scan() -> Iterator[ScanAccumulator]:
    """Context manager for profiled scanning.

    Creates a ScanAccumulator and makes it available via
    get_scan_accumulator() for the duration of the with block.

    Yields:
        ScanAccumulator populated by every scan constructed inside the block.

    """
    acc = ScanAccumulator()
    token: Token[ScanAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
