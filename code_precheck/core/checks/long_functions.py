# code_precheck/core/checks/long_functions.py
from typing import List, Dict, Optional, Sequence, Tuple

from ..issue import Finding
from ..constants import KIND, SEVERITY, MAX_FUNCTION_LINES
from ..regexes import RE_FUNCTION_DECL
from ..utils import brace_counts


def _find_end(lines: Sequence[str], start: int) -> Optional[int]:
    """
    Индекс строки, на которой тело функции закрылось (глубина вернулась в 0
    после первой «{»). None — конец входа достигнут раньше.
    """
    depth = 0
    body_started = False
    for j in range(start, len(lines)):
        opens, closes = brace_counts(lines[j])
        depth += opens - closes
        if opens > 0:
            body_started = True
        if body_started and depth == 0:
            return j
    return None


def function_spans(lines: Sequence[str]) -> List[Tuple[str, int, int]]:
    """(имя, строка начала, строка конца) — 0-based, только закрытые функции."""
    spans: List[Tuple[str, int, int]] = []
    i = 0
    while i < len(lines):
        m = RE_FUNCTION_DECL.search(lines[i])
        if m:
            end = _find_end(lines, i)
            if end is not None:
                spans.append((m.group(1), i, end))
                # внутрь закрытой функции повторно не заходим
                i = end
        # незакрытая функция молча пропускается, поиск идёт со следующей строки
        i += 1
    return spans


def check(lines: Sequence[str], cfg: Dict) -> List[Finding]:
    out: List[Finding] = []
    kind = KIND["LONG_FUNC"]

    for name, start, end in function_spans(lines):
        total = end - start + 1
        if total <= MAX_FUNCTION_LINES:
            continue
        out.append(Finding(
            start + 1, kind, SEVERITY[kind],
            f"The function '{name}' is {total} lines long. A function should do one small thing. "
            "Long functions are really hard to debug and test.",
            f"Break '{name}' into smaller functions. Each one should do just one job.",
            lines[start].strip(),
        ))
    return out
