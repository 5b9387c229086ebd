"""Exception taxonomy for both checks."""

from __future__ import annotations

from typing import Any


class CheckFailedError(Exception):
    """Raised once at the end of a run that found problems.

    The message always contains the check's FAIL indicator. ``report`` holds
    the full text already written to stdout and ``result`` the structured
    ScanReport or LabelReport it was rendered from.
    """

    def __init__(self, indicator: str, report: str, result: Any = None) -> None:
        super().__init__(indicator)
        self.indicator = indicator
        self.report = report
        self.result = result


class ConfigurationError(Exception):
    """Missing root, missing or malformed manifest, or a bad exemption asset."""
