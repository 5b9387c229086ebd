from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from typing import Any, Callable, Dict, List

import colorama

from . import LabelReport, ScanReport
from .common import (
    ACCESSIBILITY_LABEL_CHECK_PASSED_OUTPUT_INDICATOR,
    XML_SYNTAX_CHECK_PASSED_OUTPUT_INDICATOR,
)
from .errors import CheckFailedError, ConfigurationError
from .exemptions import load_exemptions
from .labels import check_accessibility_labels
from .syntax import check_xml_syntax

EXIT_OK = 0
EXIT_CHECK_FAILED = 1
EXIT_CONFIG_ERROR = 2

class _Palette:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    GREEN = "\033[32m"

def _should_color(mode: str) -> bool:
    """Decide if we should emit ANSI colors."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    # auto
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False

def _clr(enabled: bool, text: str, *styles: str) -> str:
    if not enabled or not styles:
        return text
    return "".join(styles) + text + _Palette.RESET

def _report_writer(color_enabled: bool, passed_indicator: str) -> Callable[[str], None]:
    def _out(text: str) -> None:
        if text == passed_indicator:
            print(_clr(color_enabled, text, _Palette.GREEN, _Palette.BOLD))
        else:
            print(_clr(color_enabled, text, _Palette.RED))
    return _out

def _discard(_text: str) -> None:
    return None

def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    # stdout is reserved for the report
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

def _add_common_args(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--json", action="store_true", help="Emit JSON instead of human-readable")
    ap.add_argument("--color", choices=["auto", "always", "never"], default="auto",
                    help="Colorize output (default: auto)")
    ap.add_argument("-v", "--verbose", action="count", default=0,
                    help="Log progress to stderr (-v info, -vv debug)")

def _syntax_payload(report: ScanReport) -> Dict[str, Any]:
    return {
        "files_scanned": report.files_scanned,
        "problems": [asdict(p) for p in report.problems],
    }

def _label_payload(report: LabelReport) -> Dict[str, Any]:
    return {
        "manifests_scanned": report.manifests_scanned,
        "activities_scanned": report.activities_scanned,
        "violations": [asdict(v) for v in report.violations],
        "exempted": list(report.exempted),
    }

def _run(
    args: argparse.Namespace,
    passed_indicator: str,
    check: Callable[[Callable[[str], None]], Any],
    payload: Callable[[Any], Dict[str, Any]],
) -> int:
    logging.getLogger(__name__).debug("Arguments: %s", vars(args))
    color_enabled = _should_color(args.color) and not args.json
    if color_enabled:
        colorama.just_fix_windows_console()

    out = _discard if args.json else _report_writer(color_enabled, passed_indicator)
    try:
        result = check(out)
    except ConfigurationError as exc:
        print(_clr(color_enabled, f"error: {exc}", _Palette.RED, _Palette.BOLD), file=sys.stderr)
        return EXIT_CONFIG_ERROR
    except CheckFailedError as exc:
        if args.json:
            print(json.dumps({"passed": False, "indicator": exc.indicator, **payload(exc.result)}, indent=2))
        print(_clr(color_enabled, str(exc), _Palette.RED, _Palette.BOLD), file=sys.stderr)
        return EXIT_CHECK_FAILED

    if args.json:
        print(json.dumps({"passed": True, "indicator": passed_indicator, **payload(result)}, indent=2))
    return EXIT_OK

def syntax_main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="xml-syntax-check",
                                 description="Report XML syntax errors in every *.xml file under a directory")
    ap.add_argument("root", help="Root directory to scan")
    ap.add_argument("--exempt", action="append", default=[], metavar="PATH",
                    help="Root-relative file or directory to skip (repeatable)")
    _add_common_args(ap)
    args = ap.parse_args(argv)
    _configure_logging(args.verbose)

    return _run(
        args,
        XML_SYNTAX_CHECK_PASSED_OUTPUT_INDICATOR,
        lambda out: check_xml_syntax(args.root, exempt_paths=args.exempt, out=out),
        _syntax_payload,
    )

def label_main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="accessibility-label-check",
                                 description="Report <activity> declarations without android:label")
    ap.add_argument("root", help="Repository root directory")
    ap.add_argument("manifests", nargs="+", metavar="MANIFEST",
                    help="Manifest path relative to the root (one or more)")
    ap.add_argument("--exemptions", default=None, metavar="FILE",
                    help="Exemption list (.textproto); defaults to the packaged asset")
    ap.add_argument("--require-nonempty-label", action="store_true",
                    help="Treat an empty android:label as missing")
    _add_common_args(ap)
    args = ap.parse_args(argv)
    _configure_logging(args.verbose)

    def _check(out: Callable[[str], None]) -> LabelReport:
        exemptions = load_exemptions(args.exemptions)
        return check_accessibility_labels(
            args.root,
            args.manifests,
            exemptions=exemptions,
            require_nonempty_label=args.require_nonempty_label,
            out=out,
        )

    return _run(args, ACCESSIBILITY_LABEL_CHECK_PASSED_OUTPUT_INDICATOR, _check, _label_payload)
