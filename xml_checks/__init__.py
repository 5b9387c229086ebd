from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Tuple

from .common import (
    ACCESSIBILITY_LABEL_CHECK_PASSED_OUTPUT_INDICATOR,
    LABEL_FAILURE_NOTE_PART_ONE,
    LABEL_FAILURE_NOTE_PART_TWO,
    XML_SYNTAX_CHECK_PASSED_OUTPUT_INDICATOR,
)

Severity = Literal["warning", "error", "fatal"]

@dataclass(frozen=True)
class SyntaxProblem:
    file_path: str
    line: int
    column: int
    message: str
    severity: Severity = "error"

    def format(self) -> str:
        return f"{self.file_path}:{self.line}:{self.column}: {self.message}"

@dataclass(frozen=True)
class ScanReport:
    """Problems per file, stored in the order the files were scanned."""
    problems_by_file: Tuple[Tuple[str, Tuple[SyntaxProblem, ...]], ...] = ()
    files_scanned: int = 0

    @property
    def passed(self) -> bool:
        return not self.problems_by_file

    @property
    def problems(self) -> Tuple[SyntaxProblem, ...]:
        return tuple(p for _, probs in self.problems_by_file for p in probs)

    def render(self) -> str:
        if self.passed:
            return XML_SYNTAX_CHECK_PASSED_OUTPUT_INDICATOR
        # Most recently scanned file first.
        lines = []
        for _, probs in reversed(self.problems_by_file):
            lines.extend(p.format() for p in probs)
        return "\n".join(lines)

@dataclass(frozen=True)
class ActivityDeclaration:
    package_name: str
    raw_name: str
    has_label: bool

    @property
    def identity(self) -> str:
        if self.raw_name.startswith("."):
            return self.package_name + self.raw_name
        return self.raw_name

@dataclass(frozen=True)
class LabelViolation:
    activity_identity: str
    path: str
    manifest_path: str

@dataclass(frozen=True)
class LabelReport:
    violations: Tuple[LabelViolation, ...] = ()
    exempted: Tuple[str, ...] = ()
    manifests_scanned: int = 0
    activities_scanned: int = 0

    @property
    def passed(self) -> bool:
        return not self.violations

    def render(self) -> str:
        if self.passed:
            return ACCESSIBILITY_LABEL_CHECK_PASSED_OUTPUT_INDICATOR
        lines = ["Accessibility label missing for Activities:"]
        lines.extend(f"- {v.path}" for v in self.violations)
        lines.append("")
        lines.append(LABEL_FAILURE_NOTE_PART_ONE)
        lines.append(LABEL_FAILURE_NOTE_PART_TWO)
        return "\n".join(lines)
