from __future__ import annotations
import logging
import os
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, Iterable, List, Optional, Set

from . import LabelReport, LabelViolation
from .common import ACCESSIBILITY_LABEL_CHECK_FAILED_OUTPUT_INDICATOR
from .errors import CheckFailedError, ConfigurationError
from .exemptions import load_exemptions
from .manifest import scan_manifest_with_package

logger = logging.getLogger(__name__)

def activity_source_path(root: str | Path, manifest_relative_path: str, package_name: str, identity: str) -> str:
    """
    Map a fully-qualified activity name onto its source path under root.

    A manifest that lives inside its package directory (``.../java/a/b/AndroidManifest.xml``
    for package ``a.b``) has its sources rooted above that directory; any other
    manifest has them under a sibling ``java`` directory.
    """
    manifest_dir = PurePosixPath(manifest_relative_path.replace("\\", "/")).parent.parts
    pkg_parts = tuple(p for p in package_name.split(".") if p)
    if pkg_parts and manifest_dir[-len(pkg_parts):] == pkg_parts:
        source_root = manifest_dir[: len(manifest_dir) - len(pkg_parts)]
    else:
        source_root = manifest_dir + ("java",)
    return os.path.join(os.path.abspath(str(root)), *source_root, *identity.split("."))

def run_label_check(
    root: str | Path,
    manifest_paths: Iterable[str],
    exemptions: Optional[Iterable[str]] = None,
    require_nonempty_label: bool = False,
) -> LabelReport:
    """Scan each manifest and return every unlabelled, non-exempt activity, sorted by path."""
    root_abs = os.path.abspath(str(root))
    if not os.path.isdir(root_abs):
        raise ConfigurationError(f"Root directory does not exist or is not a directory: {root_abs}")
    exempt: Set[str] = set(load_exemptions() if exemptions is None else exemptions)

    by_path: Dict[str, LabelViolation] = {}
    exempted: Set[str] = set()
    manifests = 0
    activities = 0
    for rel in manifest_paths:
        manifest = os.path.join(root_abs, rel)
        package_name, decls = scan_manifest_with_package(manifest, require_nonempty_label)
        manifests += 1
        activities += len(decls)
        for d in decls:
            if d.has_label:
                continue
            if d.identity in exempt:
                exempted.add(d.identity)
                continue
            path = activity_source_path(root_abs, rel, package_name, d.identity)
            by_path.setdefault(path, LabelViolation(activity_identity=d.identity, path=path, manifest_path=manifest))

    violations: List[LabelViolation] = [by_path[p] for p in sorted(by_path)]
    logger.info(
        "Scanned %d manifest(s), %d activities: %d missing label, %d exempted",
        manifests, activities, len(violations), len(exempted),
    )
    return LabelReport(
        violations=tuple(violations),
        exempted=tuple(sorted(exempted)),
        manifests_scanned=manifests,
        activities_scanned=activities,
    )

def check_accessibility_labels(
    root: str | Path,
    manifest_paths: Iterable[str],
    exemptions: Optional[Iterable[str]] = None,
    require_nonempty_label: bool = False,
    out: Callable[[str], None] = print,
) -> LabelReport:
    """Run the check, write the report once, and raise if any violation remains."""
    report = run_label_check(root, manifest_paths, exemptions, require_nonempty_label)
    text = report.render()
    out(text)
    if not report.passed:
        raise CheckFailedError(ACCESSIBILITY_LABEL_CHECK_FAILED_OUTPUT_INDICATOR, text, report)
    return report
