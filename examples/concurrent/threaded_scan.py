"""Run a scan on a worker thread and stop reading early.

Leaving the ``with`` block cancels the channel, so the worker wakes from
its blocked send and exits instead of waiting forever.
"""

from statelex import EOF, lex_concurrently


def lex_words(lx):
    lx.accept_run(" ")
    lx.ignore()
    if lx.peek() is EOF:
        return None
    lx.accept_run(lambda c: c != " ")
    lx.emit("word")
    return lex_words


text = " ".join(f"w{i}" for i in range(100_000))

with lex_concurrently("words", text, lex_words) as scan:
    for n, item in enumerate(scan):
        if n == 4:
            break
        print(item)

print("worker still running:", scan.running)
print("items produced:", scan.lexer.item_count)
