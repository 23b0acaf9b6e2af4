"""Opt-in scan metrics with profiled_scan()."""

from statelex import lex
from statelex.profiling import profiled_scan


def lex_chars(lx):
    if lx.next():
        lx.emit("char")
        return lex_chars
    return None


with profiled_scan() as metrics:
    for _ in range(100):
        list(lex("chars", "statelex", lex_chars))

print(metrics.summary())
