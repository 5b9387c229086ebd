from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Tuple

from lxml import etree

from . import ActivityDeclaration
from .common import ANDROID_NS
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_NAME = f"{{{ANDROID_NS}}}name"
_LABEL = f"{{{ANDROID_NS}}}label"

def resolve_activity_name(package_name: str, raw_name: str) -> str:
    """'.Foo' under package 'a.b' is 'a.b.Foo'; anything else is returned as-is."""
    if raw_name.startswith("."):
        return package_name + raw_name
    return raw_name

def _parse(path: Path) -> etree._Element:
    if not path.is_file():
        raise ConfigurationError(f"Manifest file not found: {path}")
    parser = etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)
    try:
        return etree.fromstring(path.read_bytes(), parser)
    except etree.XMLSyntaxError as exc:
        raise ConfigurationError(f"Manifest is not well-formed: {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot read manifest {path}: {exc}") from exc

def _has_label(el: etree._Element, require_nonempty: bool) -> bool:
    label = el.get(_LABEL)
    if label is None:
        return False
    return bool(label.strip()) if require_nonempty else True

def scan_manifest_with_package(
    path: str | Path, require_nonempty_label: bool = False
) -> Tuple[str, List[ActivityDeclaration]]:
    """Package attribute of the manifest root plus every activity it declares."""
    p = Path(path)
    root = _parse(p)
    package_name = root.get("package")
    if package_name is None:
        logger.warning("%s: no package attribute on <%s>, relative names stay unresolved", p, root.tag)
        package_name = ""

    decls: List[ActivityDeclaration] = []
    for el in root.iter("activity"):
        raw_name = el.get(_NAME)
        if not raw_name:
            logger.warning("%s:%s: <activity> without android:name skipped", p, el.sourceline)
            continue
        decls.append(
            ActivityDeclaration(
                package_name=package_name,
                raw_name=raw_name,
                has_label=_has_label(el, require_nonempty_label),
            )
        )
    logger.debug("%s: %d activity declaration(s)", p, len(decls))
    return package_name, decls

def scan_manifest(path: str | Path, require_nonempty_label: bool = False) -> List[ActivityDeclaration]:
    return scan_manifest_with_package(path, require_nonempty_label)[1]
