"""A multi-state lexer for a tiny line protocol.

    SET key 42
    GET key
    # comments run to end of line

Commands, identifiers, integers and newlines are items. A bad character
yields an error item with its location; the lexer then skips to the next
line and keeps going.
"""

from enum import Enum, auto

from statelex import EOF, Lexer, lex


class T(Enum):
    COMMAND = auto()
    IDENT = auto()
    INT = auto()
    NEWLINE = auto()
    ERROR = auto()


COMMANDS = {"SET", "GET", "DEL"}
IDENT_START = set("abcdefghijklmnopqrstuvwxyz_")
IDENT_REST = IDENT_START | set("0123456789")


def lex_line(lx: Lexer):
    lx.accept_run(" \t")
    lx.ignore()
    r = lx.peek()
    if r is EOF:
        return None
    if r == "#":
        lx.accept_run(lambda c: c != "\n")
        lx.ignore()
        return lex_line
    if r == "\n":
        lx.next()
        lx.emit(T.NEWLINE)
        return lex_line
    if lx.accept_run(str.isupper):
        if lx.pending not in COMMANDS:
            lx.errorf(T.ERROR, "%s: unknown command %r", lx.location(), lx.pending)
            return skip_line
        lx.emit(T.COMMAND)
        return lex_args
    lx.errorf(T.ERROR, "%s: expected command", lx.location())
    return skip_line


def lex_args(lx: Lexer):
    lx.accept_run(" \t")
    lx.ignore()
    r = lx.peek()
    if r is EOF or r in "\n#":
        return lex_line
    if lx.accept("-") or r.isdigit():
        if not lx.accept_run(str.isdigit):
            lx.errorf(T.ERROR, "%s: bad number", lx.location())
            return skip_line
        lx.emit(T.INT)
        return lex_args
    if lx.accept(IDENT_START):
        lx.accept_run(IDENT_REST)
        lx.emit(T.IDENT)
        return lex_args
    lx.next()
    lx.errorf(T.ERROR, "%s: unexpected rune %r", lx.location(lx.position - 1), r)
    return skip_line


def skip_line(lx: Lexer):
    lx.accept_run(lambda c: c != "\n")
    lx.ignore()
    return lex_line


SOURCE = """\
# demo session
SET answer 42
GET answer
SET bad $x
PUT nothing
DEL answer -1
"""

for item in lex("session.txt", SOURCE, lex_line):
    print(item)
