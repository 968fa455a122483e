import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'typeex'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from typeex.config import clear_caches  # noqa: E402
from typeex.stringify import remove_default_serializer  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_typeex_state(monkeypatch: pytest.MonkeyPatch):
    """Reset process-wide state so tests never see each other's settings."""
    for key in list(os.environ):
        if key.startswith("TYPEEX_"):
            monkeypatch.delenv(key, raising=False)
    clear_caches()
    remove_default_serializer()
    yield
    remove_default_serializer()
    clear_caches()


@pytest.fixture()
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Write YAML to a temporary file and point TYPEEX_CONFIG at it."""

    def _write(text: str) -> Path:
        path = tmp_path / "typeex.yaml"
        path.write_text(text, encoding="utf-8")
        monkeypatch.setenv("TYPEEX_CONFIG", str(path))
        clear_caches()
        return path

    return _write
