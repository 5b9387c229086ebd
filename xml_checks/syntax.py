from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, List, Tuple

from . import ScanReport, SyntaxProblem
from .collector import collect_syntax_problems
from .common import (
    DEFAULT_EXCLUDED_DIRS,
    EXCLUDED_DIR_PREFIXES,
    XML_EXTENSION,
    XML_SYNTAX_CHECK_FAILED_OUTPUT_INDICATOR,
)
from .errors import CheckFailedError, ConfigurationError

logger = logging.getLogger(__name__)

def _require_dir(root: str | Path) -> str:
    root_abs = os.path.abspath(str(root))
    if not os.path.isdir(root_abs):
        raise ConfigurationError(f"Root directory does not exist or is not a directory: {root_abs}")
    return root_abs

def _normalize_exemptions(exempt_paths: Iterable[str]) -> List[str]:
    return [p.strip().replace("\\", "/").strip("/") for p in exempt_paths if p and p.strip()]

def _is_exempt(rel: str, exemptions: List[str]) -> bool:
    """Exact file match, or the file lies under an exempted directory."""
    return any(rel == e or rel.startswith(e + "/") for e in exemptions)

def _is_excluded_dir(name: str, excluded_dirs: Iterable[str]) -> bool:
    return name in excluded_dirs or name.startswith(EXCLUDED_DIR_PREFIXES)

def discover_xml_files(
    root: str | Path,
    exempt_paths: Iterable[str] = (),
    excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
) -> List[str]:
    """Absolute paths of every XML file under root, in lexicographic order."""
    root_abs = _require_dir(root)
    exemptions = _normalize_exemptions(exempt_paths)
    excluded = set(excluded_dirs)
    found: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root_abs):
        dirnames[:] = [d for d in dirnames if not _is_excluded_dir(d, excluded)]
        for fn in filenames:
            if not fn.lower().endswith(XML_EXTENSION):
                continue
            full = os.path.join(dirpath, fn)
            rel = os.path.relpath(full, root_abs).replace(os.sep, "/")
            if _is_exempt(rel, exemptions):
                logger.debug("Skipping exempted file %s", rel)
                continue
            found.append(full)
    return sorted(found)

def run_syntax_check(root: str | Path, exempt_paths: Iterable[str] = ()) -> ScanReport:
    """Parse every XML file under root and gather the problems of each one."""
    files = discover_xml_files(root, exempt_paths=exempt_paths)
    by_file: List[Tuple[str, Tuple[SyntaxProblem, ...]]] = []
    for path in files:
        problems = collect_syntax_problems(path)
        if problems:
            by_file.append((path, tuple(problems)))
    logger.info("Scanned %d XML file(s), %d with problems", len(files), len(by_file))
    return ScanReport(problems_by_file=tuple(by_file), files_scanned=len(files))

def check_xml_syntax(
    root: str | Path,
    exempt_paths: Iterable[str] = (),
    out: Callable[[str], None] = print,
) -> ScanReport:
    """Run the check, write the report once, and raise if any file had problems."""
    report = run_syntax_check(root, exempt_paths=exempt_paths)
    text = report.render()
    out(text)
    if not report.passed:
        raise CheckFailedError(XML_SYNTAX_CHECK_FAILED_OUTPUT_INDICATOR, text, report)
    return report
