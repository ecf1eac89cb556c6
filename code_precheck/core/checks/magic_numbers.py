# code_precheck/core/checks/magic_numbers.py
from typing import List, Dict, Sequence

from ..issue import Finding
from ..constants import KIND, SEVERITY
from ..regexes import RE_DECLARATION_KW, RE_MAGIC_NUMBER, LINE_COMMENT


def _skip(line: str) -> bool:
    stripped = line.strip()
    if not stripped:
        return True
    if stripped.startswith(LINE_COMMENT):
        return True
    # объявление именует значение — это не «магия»
    return RE_DECLARATION_KW.search(line) is not None


def check(lines: Sequence[str], cfg: Dict) -> List[Finding]:
    """Одно замечание на строку; в тексте цитируется первое найденное число."""
    out: List[Finding] = []
    kind = KIND["MAGIC_NUMBER"]

    for idx, line in enumerate(lines):
        if _skip(line):
            continue

        matches = RE_MAGIC_NUMBER.findall(line)
        if not matches:
            continue

        number = matches[0]
        out.append(Finding(
            idx + 1, kind, SEVERITY[kind],
            f"The number {number} appears directly in your code. Other people reading this won't know "
            f"what it means. Why {number}? What does it represent?",
            f"Create a named variable like 'const MAX_ITEMS = {number}' at the top and use that name instead.",
            line.strip(),
        ))
    return out
