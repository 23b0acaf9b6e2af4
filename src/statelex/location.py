"""Source location tracking for diagnostics.

The cursor works in storage offsets (code points for ``str`` input, bytes
for UTF-8 input). Line and column numbers are only needed for messages,
so they are resolved on demand from an offset rather than tracked on
every ``next()``.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

Text = str | bytes | bytearray | memoryview


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    All positions are 1-indexed (lineno and col_offset start at 1).
    Columns count code points, not bytes.

    Attributes:
        lineno: Line number (1-indexed)
        col_offset: Column offset (1-indexed)
        offset: Absolute storage offset in the input
        source_name: Diagnostic name of the scan (optional)

    Examples:
            >>> loc = SourceLocation(lineno=3, col_offset=7, offset=21, source_name="app.conf")
            >>> str(loc)
            'app.conf:3:7'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    source_name: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "name:10:5" or "10:5"
        """
        if self.source_name:
            return f"{self.source_name}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location."""
        return cls(lineno=0, col_offset=0)


def resolve_location(
    text: Text,
    offset: int,
    source_name: str | None = None,
) -> SourceLocation:
    """Resolve a storage offset into a line/column location.

    Args:
        text: The scanned input
        offset: Storage offset, clamped to ``0..len(text)``
        source_name: Diagnostic name to attach

    Returns:
        SourceLocation for the offset.
    """
    offset = max(0, min(offset, len(text)))
    if isinstance(text, str):
        head = text[:offset]
        line_start = head.rfind("\n") + 1
        return SourceLocation(
            lineno=head.count("\n") + 1,
            col_offset=offset - line_start + 1,
            offset=offset,
            source_name=source_name,
        )

    head_bytes = bytes(text[:offset])
    line_start = head_bytes.rfind(b"\n") + 1
    column = len(head_bytes[line_start:].decode("utf-8", errors="replace"))
    return SourceLocation(
        lineno=head_bytes.count(b"\n") + 1,
        col_offset=column + 1,
        offset=offset,
        source_name=source_name,
    )
