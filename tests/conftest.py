import sys
from pathlib import Path

import pytest

# Ensure the 'src' directory is on sys.path for imports in tests
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from merkle_core.hashing import hash_data  # noqa: E402


@pytest.fixture
def h():
    """Leaf hash of a string element."""
    return hash_data


@pytest.fixture
def elements_file(tmp_path):
    def _write(lines, name="elements.txt"):
        p = tmp_path / name
        p.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return p

    return _write


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in (
        "MERKLE_LOG_LEVEL",
        "MERKLE_ELEMENTS_PATH",
        "MERKLE_HASH_ELEMENTS",
        "MERKLE_MAX_ELEMENTS",
    ):
        monkeypatch.delenv(var, raising=False)
