# code_precheck/core/reporting.py
from __future__ import annotations
import csv, json, datetime, os
from typing import List, Dict, Iterable, Sequence

from .issue import Issue
from .engine import AnalysisResult
from .constants import SEVERITY_ERROR, SEVERITY_WARN, SEVERITY_INFO
from .utils import shorten

# ---------------- helpers ---------------- #

def _now_iso() -> str:
    return datetime.datetime.now(datetime.timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")

def _group_kind_stats(issues: Iterable[Issue]) -> Dict[str, int]:
    """Подсчёт срабатываний по виду (для JSON-диагностики)."""
    out: Dict[str, int] = {}
    for i in issues:
        out[i.kind] = out.get(i.kind, 0) + 1
    return dict(sorted(out.items(), key=lambda kv: (-kv[1], kv[0])))

def calc_gate(issues: Sequence[Issue]) -> Dict:
    errors = sum(1 for i in issues if i.severity == SEVERITY_ERROR)
    warnings = sum(1 for i in issues if i.severity == SEVERITY_WARN)
    infos = sum(1 for i in issues if i.severity == SEVERITY_INFO)
    return {"errors": errors, "warnings": warnings, "infos": infos, "pass": errors == 0}

def report_paths(src_path: str):
    # расширение оставляем: index.js и index.ts не должны делить отчёт
    return src_path + ".rep", src_path + ".rep.json"

# ---------------- main API ---------------- #

def write_reports(src_path: str,
                  result: AnalysisResult,
                  gate: Dict,
                  version: str,
                  context_width: int = 60) -> None:
    """
    Пишем два отчёта: <file>.rep и <file>.rep.json.
    - .rep — человекочитаемый, с секциями по видам замечаний.
    - .rep.json — полный машинный + диагностика (timing, mode).
    """
    txt_path, json_path = report_paths(src_path)
    issues = result.issues

    errors = gate.get("errors", 0)
    warnings = gate.get("warnings", 0)
    passed = bool(gate.get("pass", False))

    by_kind_list = sorted(result.by_kind.items(), key=lambda kv: (-kv[1], kv[0]))
    kind_to_issues: Dict[str, List[Issue]] = {}
    for i in issues:
        kind_to_issues.setdefault(i.title, []).append(i)

    with open(txt_path, "w", encoding="utf-8") as f:
        f.write(f"File: {os.path.basename(src_path)}\n")
        f.write(f"Checked at: {_now_iso()}\n")
        f.write(f"Lines: {result.lines_total}\n")
        f.write(f"Issues total: {len(issues)}\n")
        if by_kind_list:
            kinds_line = "; ".join(f"{k}: {v}" for k, v in by_kind_list)
            f.write(f"By kind: {kinds_line}\n\n")
        else:
            f.write("\n")

        for title, items in kind_to_issues.items():
            f.write(f"== {title} ({len(items)}) ==\n")
            for it in items:
                ctx = shorten(it.snippet, context_width, context_width)
                f.write(
                    f"{it.id}. [{it.severity.upper()}] @ line {it.line}\n"
                    f"   Explanation: {it.explanation}\n"
                    f"   Code: {ctx}\n"
                    f"   Suggestion: {it.suggestion}\n"
                )
            f.write("\n")

        f.write(
            f"[{'OK' if passed else 'FAIL'}] Errors: {errors}; "
            f"Warnings: {warnings}; gate: {'PASS' if passed else 'BLOCK'}\n"
        )

    payload = {
        "version": version,
        "file": os.path.basename(src_path),
        "checked_at": _now_iso(),
        "lines_total": result.lines_total,
        "issues_total": len(issues),
        "issues_by_kind": result.by_kind,
        "gate": gate,
        "issues": [i.to_dict() for i in issues],
        "kind_stats": _group_kind_stats(issues),
        "debug": result.debug_meta,
    }

    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def format_review_table(rows) -> str:
    lines = [f"{'line':>6}  {'kind':<22} {'severity':<8} status"]
    for line, title, severity, status in rows:
        lines.append(f"{line:>6}  {title:<22} {severity:<8} {status}")
    return "\n".join(lines)


def write_review_report(path: str, rows) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="") as f:
        w = csv.writer(f, delimiter=';')
        w.writerow(["line", "kind", "severity", "status"])
        for row in rows:
            w.writerow(list(row))
