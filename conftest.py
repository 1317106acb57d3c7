import sys
from pathlib import Path

import pytest

# Ensure 'src' directory is on sys.path for tests
PROJECT_ROOT = Path(__file__).resolve().parent
SRC_DIR = PROJECT_ROOT / 'src'
if SRC_DIR.exists() and str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


SAMPLE_INI = """\
[db]
host=localhost
port=5432
[cache]
host=redis
"""


@pytest.fixture
def write_ini(tmp_path):
    """Return a helper writing INI text to a file under ``tmp_path``."""

    def _write(text: str = SAMPLE_INI, name: str = "cfg.ini") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    # keep the developer's own settings file and environment out of the tests
    monkeypatch.setenv("PYINI_SETTINGS", str(tmp_path / "no-settings.ini"))
    for name in ("STRICT", "ENCODING", "FORMAT", "LOG_LEVEL"):
        monkeypatch.delenv(f"PYINI_{name}", raising=False)
