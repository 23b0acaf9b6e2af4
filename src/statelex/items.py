"""Item, end-of-input sentinel, and state function definitions.

The lexer produces a stream of Item objects that the consumer reads.
Each Item has a caller-defined tag and the exact text it covers.

Thread Safety:
Item is frozen (immutable) and safe to share across threads.
EOF is a process-wide singleton.

"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final, TypeAlias

if TYPE_CHECKING:
    from statelex.lexer.core import Lexer


class EndOfInput:
    """Type of the EOF sentinel returned by ``next()`` past the last code point.

    EOF is falsy and never a member of any character set, so
    ``lexer.accept(...)`` can never consume it.
    """

    __slots__ = ()
    _instance: EndOfInput | None = None

    def __new__(cls) -> EndOfInput:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EOF"

    def __reduce__(self) -> str:
        return "EOF"


EOF: Final = EndOfInput()

# What next()/peek() hand back: a one-character string, or EOF.
Rune: TypeAlias = "str | EndOfInput"

# Any hashable value may tag an item; callers normally use an Enum.
ItemTag: TypeAlias = Hashable

# A state consumes and emits, then returns the next state or None to stop.
StateFn: TypeAlias = "Callable[[Lexer], StateFn | None]"


@dataclass(frozen=True, slots=True)
class Item:
    """A tagged span of input produced by the lexer.

    Attributes:
        tag: Caller-defined tag (usually an Enum member)
        value: The exact text between start and end, or the formatted
            diagnostic for error items
        start: Storage offset where the span begins (-1 if not from a scan)
        end: Storage offset where the span ends (-1 if not from a scan)

    Offsets are excluded from equality so an expected ``Item(TAG, "AA")``
    compares equal to the emitted item.

    """

    tag: ItemTag
    value: str
    start: int = field(default=-1, compare=False)
    end: int = field(default=-1, compare=False)

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        tag = getattr(self.tag, "name", self.tag)
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Item({tag}, {val!r})"
