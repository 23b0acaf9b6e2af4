"""State-function lexer package.

Public API:
- Lexer: cursor primitives, emission, and the pull-based driver loop
- Cursor: the position state and movement primitives on their own
- lex: convenience constructor

Internal:
- cursor: decoding and movement over str or UTF-8 input
- core: emission, error items, and the driver loop
"""

from statelex.lexer.core import Lexer, lex
from statelex.lexer.cursor import CharSet, Cursor

__all__ = [
    "CharSet",
    "Cursor",
    "Lexer",
    "lex",
]
