# code_precheck/core/issue.py
from dataclasses import dataclass
from typing import Dict, Any

from .constants import TITLE, STATUS_PENDING


@dataclass(frozen=True)
class Finding:
    line: int                 # номер строки (1-based)
    kind: str                 # стабильный вид замечания (KIND)
    severity: str             # "error" | "warning" | "info"
    explanation: str          # что не так
    suggestion: str           # как исправить
    snippet: str              # строка-источник без крайних пробелов

    @property
    def title(self) -> str:
        return TITLE.get(self.kind, self.kind)


@dataclass
class Issue:
    """
    Замечание одного прогона анализа. id и статус выдаёт только агрегатор;
    поля находки доступны лишь на чтение, меняется только status.
    """
    _id: int
    _finding: Finding
    status: str = STATUS_PENDING

    @property
    def id(self) -> int:
        return self._id

    @property
    def finding(self) -> Finding:
        return self._finding

    @property
    def line(self) -> int:
        return self.finding.line

    @property
    def kind(self) -> str:
        return self.finding.kind

    @property
    def title(self) -> str:
        return self.finding.title

    @property
    def severity(self) -> str:
        return self.finding.severity

    @property
    def explanation(self) -> str:
        return self.finding.explanation

    @property
    def suggestion(self) -> str:
        return self.finding.suggestion

    @property
    def snippet(self) -> str:
        return self.finding.snippet

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "line": self.line,
            "kind": self.kind,
            "title": self.title,
            "severity": self.severity,
            "explanation": self.explanation,
            "suggestion": self.suggestion,
            "snippet": self.snippet,
            "status": self.status,
        }
