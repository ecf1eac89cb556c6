# code_precheck/service.py
import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, Any, List, Literal, Optional

from code_precheck.core.config import load_all, apply_overrides
from code_precheck.core.constants import VERSION
from code_precheck.core.engine import analyze_source
from code_precheck.core.loader import InvalidInputError
from code_precheck.core.rendering import render_cards, render_report
from code_precheck.core.review import ReviewSession, ReviewIncompleteError

app = FastAPI(title="code-precheck-local")
# текущий прогон; новый /analyze полностью его заменяет
app.state.session = None
app.state.profile_path = None


class EngineOverride(BaseModel):
    model_config = ConfigDict(extra="forbid")
    parallel: bool = False
    workers: int = Field(0, ge=0)                 # 0 = размер пула по умолчанию


class ReportOverride(BaseModel):
    model_config = ConfigDict(extra="forbid")
    context_width: int = Field(60, ge=1)


class SettingsOverride(BaseModel):
    model_config = ConfigDict(extra="forbid")
    engine: Optional[EngineOverride] = None
    report: Optional[ReportOverride] = None


class AnalyzeRequest(BaseModel):
    source: str                                   # исходный текст целиком
    settings_override: Optional[SettingsOverride] = None


class DecisionRequest(BaseModel):
    decision: Literal["accepted", "rejected"]


def _session() -> ReviewSession:
    session = app.state.session
    if session is None:
        raise HTTPException(status_code=404, detail="No analysis run yet. POST /analyze first.")
    return session


def _issues_payload(session: ReviewSession) -> Dict[str, Any]:
    return {
        "issues_total": len(session.issues),
        "issues": [i.to_dict() for i in session.issues],
        "stats": session.stats(),
        "report_ready": session.report_ready,
    }


def _report_rows(session: ReviewSession):
    try:
        return session.generate_report()
    except ReviewIncompleteError as e:
        raise HTTPException(status_code=409, detail=str(e))


@app.get("/health")
def health() -> Dict[str, Any]:
    return {"ok": True, "version": VERSION}


@app.post("/analyze")
def analyze(req: AnalyzeRequest) -> Dict[str, Any]:
    override = req.settings_override.model_dump(exclude_unset=True, exclude_none=True) if req.settings_override else None
    cfg = apply_overrides(load_all(app.state.profile_path), override)
    try:
        result = analyze_source(req.source, cfg)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e))

    app.state.session = ReviewSession(result.issues)
    payload = _issues_payload(app.state.session)
    payload["issues_by_kind"] = result.by_kind
    payload["lines_total"] = result.lines_total
    payload["debug"] = result.debug_meta
    return payload


@app.get("/issues")
def issues() -> Dict[str, Any]:
    return _issues_payload(_session())


@app.get("/issues/cards", response_class=HTMLResponse)
def issue_cards() -> HTMLResponse:
    return HTMLResponse(render_cards(_session().issues))


@app.post("/issues/{issue_id}/decision")
def decide(issue_id: int, req: DecisionRequest) -> Dict[str, Any]:
    session = _session()
    changed = session.decide(issue_id, req.decision)
    return {"id": issue_id, "changed": changed, "stats": session.stats(),
            "report_ready": session.report_ready}


@app.get("/report")
def report() -> Dict[str, List[Dict[str, Any]]]:
    rows = _report_rows(_session())
    return {"rows": [
        {"line": line, "kind": title, "severity": severity, "status": status}
        for line, title, severity, status in rows
    ]}


@app.get("/report/html", response_class=HTMLResponse)
def report_html() -> HTMLResponse:
    return HTMLResponse(render_report(_report_rows(_session())))


def run(host: str = "127.0.0.1", port: int = 8765, profile_path: Optional[str] = None) -> None:
    app.state.profile_path = profile_path
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    settings = load_all(None)["settings"].get("service", {})
    run(settings.get("host", "127.0.0.1"), int(settings.get("port", 8765)))
