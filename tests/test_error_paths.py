"""Error-path tests.

Bad *input* shows up as error items (covered in tests/lexer); these tests
cover the exception hierarchy used for engine misuse.
"""

import pytest

from statelex import (
    ChannelClosedError,
    CursorMisuseError,
    Lexer,
    ScanStalledError,
    ScanStateError,
    SourceLocation,
    StatelexError,
)
from toy_grammars import ItemType, lex_start


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [ChannelClosedError, CursorMisuseError, ScanStalledError, ScanStateError],
    )
    def test_all_errors_share_root(self, cls: type) -> None:
        assert issubclass(cls, StatelexError)

    def test_stalled_is_a_state_error(self) -> None:
        assert issubclass(ScanStalledError, ScanStateError)


class TestCursorMisuseErrorFormatting:
    def test_message_only(self) -> None:
        err = CursorMisuseError("backup() without a preceding next()", 4)
        assert str(err) == "backup() without a preceding next()"
        assert err.position == 4
        assert err.location is None

    def test_with_location(self) -> None:
        loc = SourceLocation(lineno=2, col_offset=5, offset=9, source_name="app.conf")
        err = CursorMisuseError("bad backup", 9, loc)
        assert str(err) == "app.conf:2:5 bad backup"


class TestScanStateErrorFormatting:
    def test_includes_scan_name(self) -> None:
        err = ScanStateError("query", "scan already started")
        assert str(err) == "scan 'query': scan already started"
        assert err.name == "query"

    def test_stalled_carries_progress(self) -> None:
        err = ScanStalledError("query", 12, 100)
        assert err.position == 12
        assert err.steps == 100
        assert "100 transitions at offset 12" in str(err)


class TestInputErrorsAreItems:
    def test_bad_input_never_raises(self) -> None:
        items = list(Lexer("t", "\x00\x01", lex_start))
        assert [i.tag for i in items] == [ItemType.ERROR]
        assert items[0].value == "unexpected rune '\\x00'"
