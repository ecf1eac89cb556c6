import dataclasses

import pytest

from code_precheck.core.constants import KIND, STATUS_PENDING
from code_precheck.core.engine import aggregate, analyze_file, analyze_source, engine_options, run_rules
from code_precheck.core.issue import Finding
from code_precheck.core.loader import InvalidInputError

SAMPLE = "\n".join([
    "let unused = 1;",
    "{",
    "{",
    "{",
    "{",
    "{ retry(42);",
    "}",
    "}",
    "}",
    "}",
    "}",
])


def _finding(line: int, kind: str) -> Finding:
    return Finding(line, kind, "info", "explanation", "suggestion", "snippet")


def test_analyze_orders_by_line_then_rule():
    result = analyze_source(SAMPLE)

    got = [(it.id, it.line, it.kind) for it in result.issues]
    assert got == [
        (1, 1, KIND["UNUSED_VAR"]),
        (2, 6, KIND["NESTING"]),
        (3, 6, KIND["MAGIC_NUMBER"]),
    ]
    assert all(it.status == STATUS_PENDING for it in result.issues)
    assert result.lines_total == 11
    assert result.by_kind == {"Unused Variable": 1, "Excessive Nesting": 1, "Magic Number": 1}


def test_unused_variable_scenario():
    result = analyze_source("let x = 5;\nconsole.log(y);")
    assert len(result.issues) == 1
    assert result.issues[0].kind == KIND["UNUSED_VAR"]
    assert result.issues[0].line == 1


def test_aggregate_is_stable_across_rules():
    per_rule = [
        [_finding(9, KIND["UNUSED_VAR"])],
        [_finding(3, KIND["NESTING"])],
        [_finding(9, KIND["MAGIC_NUMBER"]), _finding(3, KIND["MAGIC_NUMBER"])],
        [_finding(1, KIND["LONG_FUNC"]), _finding(9, KIND["LONG_FUNC"])],
    ]
    issues = aggregate(per_rule)

    assert [it.id for it in issues] == [1, 2, 3, 4, 5, 6]
    assert [(it.line, it.kind) for it in issues] == [
        (1, KIND["LONG_FUNC"]),
        (3, KIND["NESTING"]),
        (3, KIND["MAGIC_NUMBER"]),
        (9, KIND["UNUSED_VAR"]),
        (9, KIND["MAGIC_NUMBER"]),
        (9, KIND["LONG_FUNC"]),
    ]


def test_analysis_is_deterministic():
    first = [it.to_dict() for it in analyze_source(SAMPLE).issues]
    second = [it.to_dict() for it in analyze_source(SAMPLE).issues]
    assert first == second


def test_parallel_matches_sequential(function_lines):
    source = "\n".join(function_lines("handler", 35, body="  step(250);") + [SAMPLE])
    sequential = analyze_source(source)
    parallel = analyze_source(source, {"settings": {"engine": {"parallel": True, "workers": 4}}})

    assert [it.to_dict() for it in parallel.issues] == [it.to_dict() for it in sequential.issues]
    assert parallel.debug_meta["mode"] == "parallel"
    assert sequential.debug_meta["mode"] == "sequential"
    assert set(parallel.debug_meta["timing"]) == {"unused_vars", "nesting", "magic_numbers", "long_functions"}


@pytest.mark.parametrize("source", ["", "   ", "\n\t\n"])
def test_blank_input_is_rejected(source):
    with pytest.raises(InvalidInputError):
        analyze_source(source)


def test_clean_source_yields_no_issues():
    result = analyze_source("const limit = 10;\nrun(limit);\n")
    assert result.issues == []
    assert result.by_kind == {}


def test_issue_fields_are_read_only():
    issue = analyze_source(SAMPLE).issues[0]

    with pytest.raises(AttributeError):
        issue.line = 5
    with pytest.raises(dataclasses.FrozenInstanceError):
        issue.finding.line = 5

    issue.status = "accepted"
    assert issue.status == "accepted"


def test_issue_id_and_finding_are_read_only():
    issue = analyze_source(SAMPLE).issues[0]

    with pytest.raises(AttributeError):
        issue.id = 9
    with pytest.raises(AttributeError):
        issue.finding = _finding(1, KIND["MAGIC_NUMBER"])
    assert issue.id == 1
    assert issue.to_dict()["id"] == 1


def test_analyze_file(tmp_path):
    src = tmp_path / "app.js"
    src.write_text("let x = 5;\r\nwait(99);\r\n", encoding="utf-8")

    result = analyze_file(str(src))

    assert [(it.line, it.kind) for it in result.issues] == [
        (1, KIND["UNUSED_VAR"]),
        (2, KIND["MAGIC_NUMBER"]),
    ]
    assert result.issues[1].snippet == "wait(99);"
    assert result.debug_meta["file"] == str(src)


def test_analyze_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        analyze_file(str(tmp_path / "missing.js"))


def test_analyze_file_strips_utf8_bom(tmp_path):
    src = tmp_path / "bom.js"
    src.write_bytes("// Copyright 2024\nrun();\n".encode("utf-8-sig"))

    assert analyze_file(str(src)).issues == []


def test_bom_does_not_leak_into_snippet(tmp_path):
    src = tmp_path / "bom.js"
    src.write_bytes("wait(99);\n".encode("utf-8-sig"))

    issues = analyze_file(str(src)).issues

    assert [(it.line, it.kind) for it in issues] == [(1, KIND["MAGIC_NUMBER"])]
    assert issues[0].snippet == "wait(99);"


@pytest.mark.parametrize("engine", [True, "fast", ["parallel"], 3])
def test_malformed_engine_section_falls_back_to_sequential(engine):
    cfg = {"settings": {"engine": engine}}

    per_rule, timing = run_rules(SAMPLE.split("\n"), cfg)
    result = analyze_source(SAMPLE, cfg)

    assert len(per_rule) == len(timing) == 4
    assert result.debug_meta["mode"] == "sequential"
    assert [it.to_dict() for it in result.issues] == [it.to_dict() for it in analyze_source(SAMPLE).issues]


@pytest.mark.parametrize("workers", [-1, "x", 2.5, None, True])
def test_bad_worker_count_uses_default_pool(workers):
    cfg = {"settings": {"engine": {"parallel": True, "workers": workers}}}

    assert engine_options(cfg) == (True, None)
    result = analyze_source(SAMPLE, cfg)
    assert result.debug_meta["mode"] == "parallel"
    assert [it.to_dict() for it in result.issues] == [it.to_dict() for it in analyze_source(SAMPLE).issues]


def test_engine_options_reads_valid_settings():
    assert engine_options({}) == (False, None)
    assert engine_options({"settings": {"engine": {"parallel": True, "workers": 2}}}) == (True, 2)
    assert engine_options({"settings": {"engine": {"workers": 0}}}) == (False, None)
