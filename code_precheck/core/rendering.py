# code_precheck/core/rendering.py
from html import escape
from typing import Iterable, List

from .issue import Issue
from .constants import SEVERITY_ERROR, SEVERITY_WARN, STATUS_ACCEPTED, STATUS_PENDING


def severity_class(severity: str) -> str:
    if severity == SEVERITY_ERROR:
        return "sev-error"
    if severity == SEVERITY_WARN:
        return "sev-warning"
    return "sev-info"


def _badge(status: str) -> str:
    if status == STATUS_ACCEPTED:
        return '<span class="decided-badge decided-accepted">✓ Accepted</span>'
    return '<span class="decided-badge decided-rejected">✗ Rejected</span>'


def _actions(issue: Issue) -> str:
    if issue.status != STATUS_PENDING:
        return _badge(issue.status)
    return (
        f'<button class="btn-accept" data-issue="{issue.id}" data-decision="accepted">✓ Accept</button>'
        f'<button class="btn-reject" data-issue="{issue.id}" data-decision="rejected">✗ Reject</button>'
    )


def render_card(issue: Issue) -> str:
    # всё, что пришло из исходника, экранируем
    return (
        f'<div class="issue-card" id="issue-card-{issue.id}">'
        '<div class="issue-top">'
        f'<span class="issue-line">Line {issue.line}</span>'
        f'<span class="issue-type">{escape(issue.title)}</span>'
        f'<span class="sev {severity_class(issue.severity)}">{escape(issue.severity)}</span>'
        '</div>'
        f'<div class="issue-explanation">{escape(issue.explanation)}</div>'
        f'<div class="issue-code">{escape(issue.snippet)}</div>'
        f'<div class="suggestion-box"><span>Suggestion:</span> {escape(issue.suggestion)}</div>'
        f'<div class="action-row" id="actions-{issue.id}">{_actions(issue)}</div>'
        '</div>'
    )


def render_cards(issues: Iterable[Issue]) -> str:
    cards: List[str] = [render_card(it) for it in sorted(issues, key=lambda x: x.id)]
    if not cards:
        return '<div class="no-issues">No issues found.</div>'
    return "\n".join(cards)


def render_report(rows) -> str:
    """rows — результат ReviewSession.generate_report()."""
    out = ['<div class="report">']
    for line, title, severity, status in rows:
        out.append(
            '<div class="report-row">'
            f'<div class="rl"><strong>Line {line}</strong> — {escape(title)} '
            f'<span class="sev {severity_class(severity)}">{escape(severity)}</span></div>'
            f'<div class="rr">{_badge(status)}</div>'
            '</div>'
        )
    out.append("</div>")
    return "\n".join(out)
