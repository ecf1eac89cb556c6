# code_precheck/cli.py
from __future__ import annotations

import os
import sys
import glob
import logging
import argparse
from typing import Dict, Iterable, List

from .core.config import ConfigError, load_all
from .core.constants import VERSION as APP_VERSION, SOURCE_EXTENSIONS, DECISIONS
from .core.engine import analyze_file
from .core.loader import InvalidInputError
from .core.reporting import calc_gate, report_paths, write_reports, write_review_report, format_review_table
from .core.review import ReviewSession


# ------------------------------- utils --------------------------------- #

def _setup_logging(cfg: Dict, debug: bool) -> None:
    level = "DEBUG" if debug else cfg.get("settings", {}).get("logging", {}).get("level", "WARNING")
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.WARNING),
                        format="%(levelname)s %(name)s: %(message)s")


def _enumerate_targets(paths: Iterable[str], recursive: bool) -> List[str]:
    files: List[str] = []
    for p in paths:
        # маски прямо в аргументах: *.js и т.п.
        if any(ch in p for ch in "*?[]"):
            files.extend(glob.glob(p, recursive=recursive))
            continue

        if os.path.isdir(p):
            for ext in SOURCE_EXTENSIONS:
                if recursive:
                    files.extend(glob.glob(os.path.join(p, "**", "*" + ext), recursive=True))
                else:
                    files.extend(glob.glob(os.path.join(p, "*" + ext)))
        else:
            files.append(p)
    # уникализируем и стабильно сортируем
    return sorted(dict.fromkeys(files))


def _parse_ids(raw: str | None) -> List[int]:
    if not raw:
        return []
    try:
        return [int(x) for x in raw.split(",") if x.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated issue ids, got: {raw}")


# ------------------------------ commands -------------------------------- #

def do_check(paths, cfg_root=None, recursive=False, parallel=False, debug=False) -> int:
    cfg = load_all(cfg_root)
    _setup_logging(cfg, debug)
    if parallel:
        cfg["settings"].setdefault("engine", {})["parallel"] = True
    width = int(cfg["settings"].get("report", {}).get("context_width", 60))

    files = _enumerate_targets(paths, recursive)
    if not files:
        print("No files to check")
        return 4  # «no input»

    rc = 0
    for f in files:
        try:
            result = analyze_file(f, cfg)
        except InvalidInputError:
            print(f"[SKIP] {f}: empty source")
            continue
        except (OSError, ValueError) as e:
            print(f"[ERR] {f}: {e}")
            rc = 3  # внутренняя ошибка / файл
            continue

        gate = calc_gate(result.issues)
        write_reports(f, result, gate, APP_VERSION, width)

        rep, repj = report_paths(f)
        print(
            f"[OK] {f} => {rep} / {repj} | "
            f"Errors: {gate['errors']}; Warnings: {gate['warnings']}; Info: {gate['infos']}; "
            f"gate: {'PASS' if gate['pass'] else 'BLOCK'}"
        )
        if gate["errors"] and rc == 0:
            rc = 2  # есть ошибки правил

    return rc


def do_review(path, accept=None, reject=None, decide_all=None, out_csv=None,
              cfg_root=None, debug=False) -> int:
    cfg = load_all(cfg_root)
    _setup_logging(cfg, debug)

    try:
        result = analyze_file(path, cfg)
    except InvalidInputError:
        print(f"[SKIP] {path}: empty source")
        return 4

    session = ReviewSession(result.issues)
    if decide_all:
        session.decide_all(decide_all)
    for issue_id in _parse_ids(accept):
        session.decide(issue_id, "accepted")
    for issue_id in _parse_ids(reject):
        session.decide(issue_id, "rejected")

    for it in session.issues:
        print(f"#{it.id} line {it.line} [{it.severity}] {it.title}: {it.status}")
    st = session.stats()
    print(f"Accepted: {st['accepted']}; Rejected: {st['rejected']}; Pending: {st['pending']}")

    if not session.report_ready:
        print("Review all issues first to generate the final report.")
        return 1

    rows = session.generate_report()
    print(format_review_table(rows))
    if out_csv:
        write_review_report(out_csv, rows)
        print(f"[REPORT] {out_csv}")
    return 0


def do_serve(host=None, port=None, cfg_root=None, debug=False) -> None:
    # ленивый импорт: fastapi/uvicorn нужны только сервису
    from .service import run

    cfg = load_all(cfg_root)
    _setup_logging(cfg, debug)
    svc = cfg["settings"].get("service", {})
    run(host or svc.get("host", "127.0.0.1"), int(port or svc.get("port", 8765)), cfg_root)


# -------------------------------- main ---------------------------------- #

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="code-precheck",
        description=f"Line-oriented JS code precheck (v{APP_VERSION}, offline)"
    )
    sub = ap.add_subparsers(dest="cmd", required=True)

    # check
    ap_check = sub.add_parser("check", help="Check files or folders")
    ap_check.add_argument("paths", nargs="+", help="Files/folders/masks (*.js, *.ts)")
    ap_check.add_argument("--config", help="Profile folder with settings.json", default=None)
    ap_check.add_argument("--recursive", action="store_true", help="Walk folders recursively")
    ap_check.add_argument("--parallel", action="store_true", help="Run rules in a thread pool")
    ap_check.add_argument("--debug", action="store_true", help="Debug logging")

    # review
    ap_review = sub.add_parser("review", help="Accept/reject the issues of one file")
    ap_review.add_argument("path", help="Source file")
    ap_review.add_argument("--accept", default=None, help="Comma-separated issue ids")
    ap_review.add_argument("--reject", default=None, help="Comma-separated issue ids")
    ap_review.add_argument("--all", dest="decide_all", choices=list(DECISIONS), default=None,
                           help="Apply one decision to every issue first")
    ap_review.add_argument("--out", default=None, help="CSV path for the final report")
    ap_review.add_argument("--config", help="Profile folder with settings.json", default=None)
    ap_review.add_argument("--debug", action="store_true", help="Debug logging")

    # serve
    ap_serve = sub.add_parser("serve", help="Run the HTTP service")
    ap_serve.add_argument("--host", default=None)
    ap_serve.add_argument("--port", type=int, default=None)
    ap_serve.add_argument("--config", help="Profile folder with settings.json", default=None)
    ap_serve.add_argument("--debug", action="store_true", help="Debug logging")

    return ap


def main(argv: List[str] | None = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    try:
        if args.cmd == "check":
            return do_check(args.paths, cfg_root=args.config, recursive=args.recursive,
                            parallel=args.parallel, debug=args.debug)

        if args.cmd == "review":
            return do_review(args.path, accept=args.accept, reject=args.reject,
                             decide_all=args.decide_all, out_csv=args.out,
                             cfg_root=args.config, debug=args.debug)

        if args.cmd == "serve":
            do_serve(args.host, args.port, cfg_root=args.config, debug=args.debug)
            return 0
    except (ConfigError, OSError) as e:
        print(f"[ERR] {e}")
        return 3
    except argparse.ArgumentTypeError as e:
        ap.error(str(e))

    ap.error(f"Unsupported command: {args.cmd}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
