"""Tests for scans driven on a worker thread."""

from __future__ import annotations

import logging
import threading
import time

import pytest

from statelex import (
    EOF,
    ChannelClosedError,
    Item,
    Lexer,
    ScanConfig,
    ScanStalledError,
    ScanStateError,
    ThreadedScan,
    lex,
    lex_concurrently,
    scan_config_context,
)
from toy_grammars import ItemType, lex_start

SCENARIOS = ["", "A", "BB BB", "AAA BBBB", "AA B AAA", "AA C AAA"]


class TestThreadedScan:
    @pytest.mark.parametrize("source", SCENARIOS)
    def test_matches_pull_based_scan(self, source: str) -> None:
        expected = list(lex("pull", source, lex_start))
        with lex_concurrently("push", source, lex_start) as scan:
            assert list(scan) == expected

    def test_construction_is_inert(self) -> None:
        scan = ThreadedScan(Lexer("t", "A", lex_start))
        assert not scan.running
        assert scan.lexer.transition_count == 0
        scan.start()
        assert list(scan) == [Item(ItemType.CLASS1, "A")]
        scan.close(timeout=1.0)

    def test_cannot_start_twice(self) -> None:
        with ThreadedScan(Lexer("t", "A", lex_start)).start() as scan:
            with pytest.raises(ScanStateError, match="already started"):
                scan.start()

    def test_runs_on_worker_thread(self) -> None:
        threads: list[str] = []

        def state(lx: Lexer) -> None:
            threads.append(threading.current_thread().name)

        with lex_concurrently("worker", "", state) as scan:
            list(scan)
        assert threads == ["statelex-worker"]

    def test_receive_one_at_a_time(self) -> None:
        with lex_concurrently("t", "A B", lex_start) as scan:
            assert scan.receive(timeout=1.0) == Item(ItemType.CLASS1, "A")
            assert scan.receive(timeout=1.0) == Item(ItemType.CLASS2, "B")


class TestBackpressure:
    def test_producer_waits_for_consumer(self) -> None:
        """The producer is never more than one item ahead."""
        emitted: list[int] = []

        def state(lx: Lexer):
            if lx.next() is EOF:
                return None
            emitted.append(lx.position)
            lx.emit("c")
            return state

        with lex_concurrently("t", "abcdef", state) as scan:
            scan.receive(timeout=1.0)
            scan.receive(timeout=1.0)
            # Third item may be produced and waiting in send(), no further.
            assert len(emitted) <= 3

    def test_producer_held_inside_a_single_transition(self) -> None:
        """A state that emits in a loop waits at each emit."""
        emitted: list[int] = []

        def burst(lx: Lexer) -> None:
            for i in range(100):
                lx.emit("n")
                emitted.append(i)

        with lex_concurrently("burst", "", burst) as scan:
            scan.receive(timeout=1.0)
            time.sleep(0.1)
            assert len(emitted) <= 2

    def test_cancel_raises_out_of_emit(self) -> None:
        raised: list[BaseException] = []

        def burst(lx: Lexer) -> None:
            try:
                for _ in range(100):
                    lx.emit("n")
            except BaseException as exc:
                raised.append(exc)
                raise

        scan = lex_concurrently("burst", "", burst)
        scan.receive(timeout=1.0)
        scan.close(timeout=1.0)
        assert not scan.running
        assert [type(e) for e in raised] == [ChannelClosedError]
        assert scan.lexer.item_count < 100


class TestCancellation:
    def test_close_stops_producer_thread(self) -> None:
        scan = lex_concurrently("long", "A " * 1000, lex_start)
        assert scan.receive(timeout=1.0) == Item(ItemType.CLASS1, "A")
        scan.close(timeout=1.0)
        assert not scan.running
        assert scan.lexer.closed
        assert scan.lexer.item_count < 1000

    def test_cancel_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="statelex"):
            scan = lex_concurrently("long", "A " * 1000, lex_start)
            scan.receive(timeout=1.0)
            scan.close(timeout=1.0)
        assert any(
            r.name == "statelex.threaded" and "consumer cancelled" in r.getMessage()
            for r in caplog.records
        )

    def test_leaving_with_block_cancels(self) -> None:
        with lex_concurrently("long", "B " * 1000, lex_start) as scan:
            next(iter(scan))
        assert not scan.running


class TestErrors:
    def test_state_exception_reraised_to_consumer(self) -> None:
        def explode(lx: Lexer) -> None:
            raise RuntimeError("boom")

        with lex_concurrently("t", "x", explode) as scan:
            with pytest.raises(RuntimeError, match="boom"):
                list(scan)

    def test_items_before_state_exception_are_delivered(self) -> None:
        def emit_then_explode(lx: Lexer) -> None:
            lx.next()
            lx.emit("ok")
            raise RuntimeError("boom")

        seen: list[Item] = []
        with lex_concurrently("t", "ab", emit_then_explode) as scan:
            with pytest.raises(RuntimeError, match="boom"):
                for item in scan:
                    seen.append(item)
        assert seen == [Item("ok", "a")]

    def test_config_captured_from_constructing_context(self) -> None:
        def spin(lx: Lexer):
            return spin

        with scan_config_context(ScanConfig(max_idle_steps=3)):
            scan = lex_concurrently("spinner", "x", spin)
        with scan:
            with pytest.raises(ScanStalledError):
                list(scan)
