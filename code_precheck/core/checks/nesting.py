# code_precheck/core/checks/nesting.py
from typing import List, Dict, Sequence

from ..issue import Finding
from ..constants import KIND, SEVERITY, MAX_NESTING_DEPTH
from ..utils import brace_counts


def check(lines: Sequence[str], cfg: Dict) -> List[Finding]:
    out: List[Finding] = []
    kind = KIND["NESTING"]
    depth = 0
    flagged = False

    for idx, line in enumerate(lines):
        opens, closes = brace_counts(line)
        depth += opens - closes

        if depth > MAX_NESTING_DEPTH and not flagged:
            flagged = True
            out.append(Finding(
                idx + 1, kind, SEVERITY[kind],
                f"Your code is nested {depth} levels deep here. That means you have code inside code "
                "inside code inside code. This makes it really hard to read and understand.",
                "Try breaking the inner logic into a separate function, or use early returns to avoid deep nesting.",
                line.strip(),
            ))

        # перевзвод после выхода на допустимую глубину
        if depth <= MAX_NESTING_DEPTH:
            flagged = False

    return out
