from __future__ import annotations
import logging
from pathlib import Path
from typing import List

from lxml import etree

from . import SyntaxProblem

logger = logging.getLogger(__name__)

_LEVELS = {"WARNING": "warning", "ERROR": "error", "FATAL": "fatal"}

def _new_parser() -> etree.XMLParser:
    # Well-formedness only: nothing outside the document is fetched.
    return etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)

def _to_problem(entry, file_path: str) -> SyntaxProblem:
    return SyntaxProblem(
        file_path=file_path,
        line=max(int(entry.line or 0), 1),
        column=max(int(entry.column or 0), 1),
        message=(entry.message or "").strip(),
        severity=_LEVELS.get(entry.level_name, "error"),
    )

class SyntaxErrorCollector:
    """
    Collects every warning, error and fatal error libxml2 reports while parsing
    one document, in the order they were reported.

    A malformed document never raises out of ``collect``; the problems are
    returned as data and can be read again from ``problems``.
    """

    def __init__(self) -> None:
        self._problems: List[SyntaxProblem] = []

    @property
    def problems(self) -> List[SyntaxProblem]:
        return list(self._problems)

    def collect(self, document: bytes, file_path: str = "<string>") -> List[SyntaxProblem]:
        parser = _new_parser()
        self._problems = []
        try:
            etree.fromstring(document, parser)
        except etree.XMLSyntaxError as exc:
            # exc.error_log accumulates across parses in the thread; the parser's log is per document.
            if not parser.error_log:
                # Parse aborted without logging anything: never report that as well-formed.
                line, column = exc.position if exc.position else (exc.lineno or 1, exc.offset or 1)
                self._problems.append(
                    SyntaxProblem(
                        file_path=file_path,
                        line=max(int(line or 0), 1),
                        column=max(int(column or 0), 1),
                        message=str(exc.msg or exc).strip(),
                        severity="fatal",
                    )
                )
                return self.problems
        self._problems.extend(_to_problem(entry, file_path) for entry in parser.error_log)
        return self.problems

def collect_syntax_problems(path: str | Path) -> List[SyntaxProblem]:
    """Read one file and collect its syntax problems; an unreadable file is a fatal problem of its own."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        logger.warning("Cannot read %s: %s", path, exc)
        return [
            SyntaxProblem(
                file_path=str(path),
                line=1,
                column=1,
                message=f"Cannot read file: {exc.strerror or exc}",
                severity="fatal",
            )
        ]
    problems = SyntaxErrorCollector().collect(data, file_path=str(path))
    logger.debug("%s: %d problem(s)", path, len(problems))
    return problems
