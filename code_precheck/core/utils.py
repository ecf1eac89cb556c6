# code_precheck/core/utils.py
from typing import Tuple

from .regexes import BLOCK_OPEN, BLOCK_CLOSE, RE_NON_IDENT


def brace_counts(line: str) -> Tuple[int, int]:
    return line.count(BLOCK_OPEN), line.count(BLOCK_CLOSE)


def count_token(lines, name: str) -> int:
    """Сколько раз имя встречается целым токеном во всех строках."""
    total = 0
    for line in lines:
        total += sum(1 for word in RE_NON_IDENT.split(line) if word == name)
    return total


def shorten(ctx: str, left: int = 50, right: int = 50) -> str:
    if ctx is None:
        return ""
    s = ctx.replace("\n", "⏎")
    if len(s) <= left + right + 5:
        return s
    return f"{s[:left]}…{s[-right:]}"
