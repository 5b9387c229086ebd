from __future__ import annotations
from typing import FrozenSet

# Indicator strings grepped for by CI.
XML_SYNTAX_CHECK_PASSED_OUTPUT_INDICATOR = "XML SYNTAX CHECK PASSED"
XML_SYNTAX_CHECK_FAILED_OUTPUT_INDICATOR = "XML SYNTAX CHECK FAILED"
ACCESSIBILITY_LABEL_CHECK_PASSED_OUTPUT_INDICATOR = "ACCESSIBILITY LABEL CHECK PASSED"
ACCESSIBILITY_LABEL_CHECK_FAILED_OUTPUT_INDICATOR = "ACCESSIBILITY LABEL CHECK FAILED"

# Packaged exemption asset, relative to the package root.
EXEMPTIONS_ASSET_PACKAGE = "xml_checks.assets"
EXEMPTIONS_ASSET_NAME = "accessibility_label_exemptions.textproto"
EXEMPTIONS_ASSET_LOCATION = f"xml_checks/assets/{EXEMPTIONS_ASSET_NAME}"

LABEL_FAILURE_NOTE_PART_ONE = f"If this is correct, please update {EXEMPTIONS_ASSET_LOCATION}"
LABEL_FAILURE_NOTE_PART_TWO = (
    "Note that, in general, all Activities should have labels. "
    "If you choose to add an exemption, please specifically call this out in your PR description."
)

ANDROID_NS = "http://schemas.android.com/apk/res/android"

XML_EXTENSION = ".xml"

# Directory names never descended into when looking for XML files.
DEFAULT_EXCLUDED_DIRS: FrozenSet[str] = frozenset({".git", ".gradle", ".idea", ".aswb", "build"})
EXCLUDED_DIR_PREFIXES = ("bazel-",)
