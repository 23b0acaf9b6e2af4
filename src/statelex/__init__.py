"""
statelex: Embeddable state-function lexer for small textual languages

You write the grammar as state functions; statelex supplies the cursor,
the item stream, and the loop that threads control from state to state.
Zero runtime dependencies.

Quick Start:
    >>> from enum import Enum, auto
    >>> from statelex import EOF, lex
    >>>
    >>> class T(Enum):
    ...     WORD = auto()
    ...     ERROR = auto()
    >>>
    >>> def lex_text(lx):
    ...     r = lx.next()
    ...     if r is EOF:
    ...         return None
    ...     if r == " ":
    ...         lx.ignore()
    ...         return lex_text
    ...     if r.isalpha():
    ...         lx.accept_run(str.isalpha)
    ...         lx.emit(T.WORD)
    ...         return lex_text
    ...     return lx.errorf(T.ERROR, "unexpected rune %r", r)
    >>>
    >>> list(lex("demo", "hello world", lex_text))
    [Item(WORD, 'hello'), Item(WORD, 'world')]

Concurrent scanning:
    >>> from statelex import lex_concurrently
    >>> with lex_concurrently("demo", "hello world", lex_text) as scan:
    ...     items = list(scan)
"""

from statelex.channel import Channel
from statelex.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from statelex.errors import (
    ChannelClosedError,
    CursorMisuseError,
    ScanStalledError,
    ScanStateError,
    StatelexError,
)
from statelex.items import EOF, EndOfInput, Item, ItemTag, Rune, StateFn
from statelex.lexer import CharSet, Cursor, Lexer, lex
from statelex.location import SourceLocation, resolve_location
from statelex.profiling import ScanAccumulator, get_scan_accumulator, profiled_scan
from statelex.threaded import ThreadedScan, lex_concurrently

__version__ = "0.1.0"

__all__ = [
    "EOF",
    "Channel",
    "ChannelClosedError",
    "CharSet",
    "Cursor",
    "CursorMisuseError",
    "EndOfInput",
    "Item",
    "ItemTag",
    "Lexer",
    "Rune",
    "ScanAccumulator",
    "ScanConfig",
    "ScanStalledError",
    "ScanStateError",
    "SourceLocation",
    "StateFn",
    "StatelexError",
    "ThreadedScan",
    "__version__",
    "get_scan_accumulator",
    "get_scan_config",
    "lex",
    "lex_concurrently",
    "profiled_scan",
    "reset_scan_config",
    "resolve_location",
    "scan_config_context",
    "set_scan_config",
]
