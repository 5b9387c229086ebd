# tests/conftest.py
import sys, pathlib, textwrap

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))  # usually enough


@pytest.fixture
def testfiles(tmp_path):
    """Scratch repository root, mirroring a checkout with a testfiles/ folder."""
    root = tmp_path / "testfiles"
    root.mkdir()
    return root


@pytest.fixture
def write_file():
    """Write dedented text to root/relative_path, creating parent folders."""
    def _write(root: pathlib.Path, relative_path: str, content: str) -> pathlib.Path:
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path
    return _write
