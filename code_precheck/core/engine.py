# code_precheck/core/engine.py
import logging
import time
from dataclasses import dataclass, field
from typing import List, Dict, Tuple, Any, Optional, Sequence
from concurrent.futures import ThreadPoolExecutor

from .issue import Finding, Issue
from .loader import split_lines, ensure_source, load_source
from .constants import STATUS_PENDING

# Явные импорты правил
from .checks import unused_vars, nesting, magic_numbers, long_functions

log = logging.getLogger(__name__)

# Порядок важен: он же разрешает совпадения номеров строк при сортировке
RULE_MODULES = [unused_vars, nesting, magic_numbers, long_functions]


@dataclass
class AnalysisResult:
    issues: List[Issue]
    lines_total: int
    by_kind: Dict[str, int] = field(default_factory=dict)
    debug_meta: Dict[str, Any] = field(default_factory=dict)


def _rule_name(mod) -> str:
    return mod.__name__.rsplit(".", 1)[-1]


def _rule_task(mod, lines: Sequence[str], cfg: Dict) -> Tuple[List[Finding], float]:
    t0 = time.perf_counter()
    found = mod.check(lines, cfg)
    return found, (time.perf_counter() - t0) * 1000.0


def aggregate(per_rule: Sequence[Sequence[Finding]]) -> List[Issue]:
    """
    Склейка результатов в порядке правил, стабильная сортировка по строке,
    выдача id (1-based) и статуса pending. Единственное место создания Issue.
    """
    combined: List[Finding] = []
    for found in per_rule:
        combined.extend(found)
    combined.sort(key=lambda f: f.line)  # sort() стабилен
    return [Issue(n, f, STATUS_PENDING) for n, f in enumerate(combined, start=1)]


def engine_options(cfg: Dict) -> Tuple[bool, Optional[int]]:
    """(parallel, workers) из settings.engine; кривые значения не роняют прогон."""
    engine_cfg = (cfg.get("settings") or {}).get("engine")
    if not isinstance(engine_cfg, dict):
        if engine_cfg is not None:
            log.warning("settings.engine must be an object, got %r; using defaults", engine_cfg)
        return False, None

    parallel = engine_cfg.get("parallel", False) is True
    raw = engine_cfg.get("workers", 0)
    # 0 или отсутствие = размер пула по умолчанию
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        log.warning("settings.engine.workers must be a non-negative integer, got %r; using default", raw)
        raw = 0
    return parallel, raw or None


def run_rules(lines: Sequence[str], cfg: Dict) -> Tuple[List[List[Finding]], Dict[str, float]]:
    parallel, workers = engine_options(cfg)
    timing: Dict[str, float] = {}

    if parallel:
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futs = [ex.submit(_rule_task, mod, lines, cfg) for mod in RULE_MODULES]
            # собираем строго в порядке правил, а не по мере готовности
            results = [f.result() for f in futs]
    else:
        results = [_rule_task(mod, lines, cfg) for mod in RULE_MODULES]

    per_rule: List[List[Finding]] = []
    for mod, (found, ms) in zip(RULE_MODULES, results):
        name = _rule_name(mod)
        timing[name] = round(ms, 3)
        log.debug("rule %s: %d finding(s) in %.3f ms", name, len(found), ms)
        per_rule.append(found)
    return per_rule, timing


def analyze_source(text: str, cfg: Optional[Dict] = None) -> AnalysisResult:
    cfg = cfg or {}
    try:
        ensure_source(text)
    except ValueError:
        log.warning("empty source submitted for analysis")
        raise

    lines = split_lines(text)
    per_rule, timing = run_rules(lines, cfg)
    issues = aggregate(per_rule)

    by_kind: Dict[str, int] = {}
    for it in issues:
        by_kind[it.title] = by_kind.get(it.title, 0) + 1

    parallel, _ = engine_options(cfg)
    debug_meta = {
        "timing": timing,
        "mode": "parallel" if parallel else "sequential",
    }
    log.debug("analysis done: %d line(s), %d issue(s)", len(lines), len(issues))
    return AnalysisResult(issues, len(lines), by_kind, debug_meta)


def analyze_file(path: str, cfg: Optional[Dict] = None) -> AnalysisResult:
    result = analyze_source(load_source(path), cfg)
    result.debug_meta["file"] = path
    return result
