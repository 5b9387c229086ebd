from __future__ import annotations
import re
from importlib import resources
from pathlib import Path
from typing import FrozenSet, Set

from .common import EXEMPTIONS_ASSET_NAME, EXEMPTIONS_ASSET_PACKAGE
from .errors import ConfigurationError

# exempted_activity: "org.oppia.android.app.home.HomeActivity"
_ENTRY = re.compile(r'^\s*exempted_activity\s*:\s*"(?P<name>[^"]+)"\s*$')

def parse_exemptions(text: str, source: str = "inline") -> FrozenSet[str]:
    """
    Parse the text-proto exemption list. Blank lines and '#' comments are
    ignored; any other line that is not an ``exempted_activity`` entry is an error.
    """
    names: Set[str] = set()
    for i, line in enumerate((text or "").splitlines(), start=1):
        s = line.strip()
        if not s or s.startswith("#"):
            continue
        m = _ENTRY.match(line)
        if not m:
            raise ConfigurationError(f"{source}:{i}: malformed exemption entry: {s!r}")
        names.add(m.group("name").strip())
    return frozenset(names)

def load_exemptions(path: str | Path | None = None) -> FrozenSet[str]:
    """Load from path, or from the asset packaged with xml_checks when path is None."""
    if path is None:
        try:
            text = resources.files(EXEMPTIONS_ASSET_PACKAGE).joinpath(EXEMPTIONS_ASSET_NAME).read_text(encoding="utf-8")
        except (OSError, ModuleNotFoundError) as exc:
            raise ConfigurationError(f"Cannot read packaged exemption asset: {exc}") from exc
        return parse_exemptions(text, source=EXEMPTIONS_ASSET_NAME)
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read exemption asset {p}: {exc}") from exc
    return parse_exemptions(text, source=str(p))
