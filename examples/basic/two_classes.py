"""Lex a two-class toy language: runs of A, runs of B, spaces between."""

from enum import Enum, auto

from statelex import EOF, lex


class T(Enum):
    AS = auto()
    BS = auto()
    ERROR = auto()


def lex_start(lx):
    while True:
        r = lx.next()
        if r == "A":
            lx.accept_run("A")
            lx.emit(T.AS)
            return lex_start
        if r == "B":
            lx.accept_run("B")
            lx.emit(T.BS)
            return lex_start
        if r == " ":
            lx.ignore()
            continue
        if r is EOF:
            return None
        return lx.errorf(T.ERROR, "unexpected rune %r", r)


for source in ["AAA BBBB", "AA B AAA", "AA C AAA"]:
    print(f"{source!r:12} -> {list(lex('demo', source, lex_start))}")
