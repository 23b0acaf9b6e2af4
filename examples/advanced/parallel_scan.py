"""Lexers hold no shared state, so scan many inputs in parallel."""

from concurrent.futures import ThreadPoolExecutor

from statelex import lex


def lex_numbers(lx):
    lx.accept_run(", ")
    lx.ignore()
    if not lx.accept_run(str.isdigit):
        return None
    lx.emit("number")
    return lex_numbers


inputs = [", ".join(str(n) for n in range(i, i + 50)) for i in range(1000)]


def total(source: str) -> int:
    return sum(int(item.value) for item in lex("nums", source, lex_numbers))


with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(total, inputs))

print(f"Scanned {len(results)} inputs in parallel")
print("First total:", results[0])
print("Last total:", results[-1])
