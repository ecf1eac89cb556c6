# code_precheck/core/review.py
import logging
from typing import List, Dict, Optional, Tuple

from .issue import Issue
from .constants import DECISIONS, STATUS_ACCEPTED, STATUS_REJECTED, STATUS_PENDING

log = logging.getLogger(__name__)

ReportRow = Tuple[int, str, str, str]  # (line, kind title, severity, status)


class ReviewIncompleteError(RuntimeError):
    pass


class ReviewSession:
    """
    Ручной разбор замечаний одного прогона: принять/отклонить.
    Меняет только status; id неизвестного замечания молча игнорируется.
    """

    def __init__(self, issues: List[Issue]):
        self.issues = list(issues)
        self._by_id: Dict[int, Issue] = {it.id: it for it in self.issues}

    def get(self, issue_id: int) -> Optional[Issue]:
        return self._by_id.get(issue_id)

    def decide(self, issue_id: int, decision: str) -> bool:
        if decision not in DECISIONS:
            raise ValueError(f"decision must be one of: {', '.join(DECISIONS)}")

        issue = self.get(issue_id)
        if issue is None:
            log.info("decision %s for unknown issue %s ignored", decision, issue_id)
            return False

        issue.status = decision
        log.debug("issue %d -> %s", issue_id, decision)
        return True

    def decide_all(self, decision: str) -> int:
        return sum(1 for it in self.issues if self.decide(it.id, decision))

    def stats(self) -> Dict[str, int]:
        out = {STATUS_ACCEPTED: 0, STATUS_REJECTED: 0, STATUS_PENDING: 0}
        for it in self.issues:
            if it.status in out:
                out[it.status] += 1
        return out

    @property
    def report_ready(self) -> bool:
        return bool(self.issues) and self.stats()[STATUS_PENDING] == 0

    def generate_report(self) -> List[ReportRow]:
        if not self.report_ready:
            pending = self.stats()[STATUS_PENDING]
            if not self.issues:
                raise ReviewIncompleteError("Nothing to report: the run produced no issues.")
            raise ReviewIncompleteError(f"Review all issues first: {pending} still pending.")
        return [(it.line, it.title, it.severity, it.status) for it in self.issues]
