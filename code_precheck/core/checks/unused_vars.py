# code_precheck/core/checks/unused_vars.py
from typing import List, Dict, Sequence

from ..issue import Finding
from ..constants import KIND, SEVERITY
from ..regexes import RE_DECLARATION
from ..utils import count_token


def check(lines: Sequence[str], cfg: Dict) -> List[Finding]:
    """
    Объявление let/const/var, имя которого встречается в тексте ровно один раз
    (только в самом объявлении). Сравнение чисто текстовое: упоминание в
    комментарии или строке тоже считается использованием.
    """
    out: List[Finding] = []
    kind = KIND["UNUSED_VAR"]

    for idx, line in enumerate(lines):
        # берём только первое объявление в строке
        m = RE_DECLARATION.search(line)
        if not m:
            continue

        name = m.group(2)
        if count_token(lines, name) != 1:
            continue

        out.append(Finding(
            idx + 1, kind, SEVERITY[kind],
            f"You declared a variable called '{name}' but you never use it anywhere in your code. "
            "This is just dead code sitting there doing nothing.",
            f"Either delete this line, or use '{name}' somewhere in your code.",
            line.strip(),
        ))
    return out
