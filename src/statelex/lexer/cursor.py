"""Cursor over the scan input and its movement primitives.

The cursor tracks three things: where the pending item starts, where
scanning currently is, and how wide the last consumed code point was.
The width is what lets ``backup()`` undo exactly one ``next()``.

Inputs are addressed in storage units:
- ``str``: one unit per code point, so every width is 1
- UTF-8 bytes-like: one unit per byte, widths 1-4

Anything that cannot be decoded (malformed UTF-8, lone surrogates) reads
as EOF with zero width.

"""

from __future__ import annotations

from collections.abc import Callable, Container

from statelex.errors import CursorMisuseError
from statelex.items import EOF, Rune
from statelex.location import SourceLocation, Text, resolve_location

CharSet = str | Container[str] | Callable[[str], bool]

# Width marker for "backup() already undid the last next()".
_SPENT = -1


def _utf8_length(lead: int) -> int:
    """Sequence length announced by a UTF-8 lead byte, 0 if it cannot lead."""
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def _in_set(r: Rune, valid: CharSet) -> bool:
    if r is EOF:
        return False
    if isinstance(valid, str):
        return r in valid
    if callable(valid):
        return bool(valid(r))
    return r in valid


class Cursor:
    """Position state and primitives over one immutable input.

    Attributes are read-only from the outside; only the primitives move
    them. Invariant: ``0 <= start <= position <= len(input)``.

    """

    __slots__ = (
        "_input",
        "_input_len",
        "_is_text",
        "_start",
        "_pos",
        "_width",
        "_strict_backup",
        "_name",
    )

    def __init__(self, name: str, text: Text, *, strict_backup: bool = True) -> None:
        if isinstance(text, memoryview):
            text = text.tobytes()
        elif not isinstance(text, (str, bytes, bytearray)):
            raise TypeError(f"cannot scan {type(text).__name__}; expected str or UTF-8 bytes")
        self._name = name
        self._input = text
        self._input_len = len(text)
        self._is_text = isinstance(text, str)
        self._start = 0
        self._pos = 0
        self._width = _SPENT
        self._strict_backup = strict_backup

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def name(self) -> str:
        """Diagnostic name of the scan."""
        return self._name

    @property
    def input(self) -> Text:
        return self._input

    @property
    def start(self) -> int:
        """Storage offset where the pending item begins."""
        return self._start

    @property
    def position(self) -> int:
        """Storage offset of the next unread code point."""
        return self._pos

    @property
    def width(self) -> int:
        """Storage width of the last code point consumed by next().

        Zero after next() returned EOF or after a backup().
        """
        return max(self._width, 0)

    @property
    def pending(self) -> str:
        """Text consumed since the last emit() or ignore()."""
        return self._slice(self._start, self._pos)

    def at_end(self) -> bool:
        """True once every storage unit of the input has been consumed."""
        return self._pos >= self._input_len

    def location(self, offset: int | None = None) -> SourceLocation:
        """Line/column location of an offset (default: the pending item's start).

        Args:
            offset: Storage offset to resolve

        Returns:
            SourceLocation named after this scan.
        """
        return resolve_location(
            self._input,
            self._start if offset is None else offset,
            self._name,
        )

    # =========================================================================
    # Primitives
    # =========================================================================

    def next(self) -> Rune:
        """Consume and return the next code point.

        Returns:
            A one-character string, or EOF at end of input or at an
            undecodable sequence. EOF records zero width and does not advance.
        """
        rune, width = self._decode_at(self._pos)
        self._width = width
        self._pos += width
        return rune

    def peek(self) -> Rune:
        """Return the next code point without consuming it."""
        r = self.next()
        self.backup()
        return r

    def backup(self) -> None:
        """Step back over the code point consumed by the last next().

        Can only be called once per call of next().

        Raises:
            CursorMisuseError: If called twice in a row or before any next(),
                unless strict backup is disabled, in which case it does nothing.
        """
        if self._width == _SPENT:
            if self._strict_backup:
                raise CursorMisuseError(
                    "backup() without a preceding next()",
                    self._pos,
                    self.location(self._pos),
                )
            return
        self._pos -= self._width
        self._width = _SPENT

    def accept(self, valid: CharSet) -> bool:
        """Consume the next code point if it belongs to ``valid``.

        Args:
            valid: A string of characters, any container of characters,
                or a predicate such as ``str.isdigit``

        Returns:
            True if a code point was consumed.
        """
        if _in_set(self.next(), valid):
            return True
        self.backup()
        return False

    def accept_run(self, valid: CharSet) -> int:
        """Consume a maximal run of code points from ``valid``.

        Returns:
            Number of code points consumed (may be zero).
        """
        count = 0
        while _in_set(self.next(), valid):
            count += 1
        self.backup()
        return count

    def ignore(self) -> None:
        """Skip over the pending input without emitting it."""
        self._start = self._pos

    # =========================================================================
    # Decoding helpers
    # =========================================================================

    def _decode_at(self, pos: int) -> tuple[Rune, int]:
        if pos >= self._input_len:
            return EOF, 0
        if self._is_text:
            ch = self._input[pos]
            if "\ud800" <= ch <= "\udfff":
                return EOF, 0
            return ch, 1

        size = _utf8_length(self._input[pos])
        if size == 0 or pos + size > self._input_len:
            return EOF, 0
        try:
            ch = bytes(self._input[pos : pos + size]).decode("utf-8")
        except UnicodeDecodeError:
            return EOF, 0
        return ch, size

    def _slice(self, begin: int, end: int) -> str:
        if self._is_text:
            return self._input[begin:end]
        return bytes(self._input[begin:end]).decode("utf-8", errors="replace")
