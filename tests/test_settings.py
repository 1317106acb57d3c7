from __future__ import annotations

from pathlib import Path

from pyini import paths
from pyini.settings import Settings, load_settings


def test_defaults_without_file(tmp_path: Path):
    assert load_settings(tmp_path / "missing.ini", environ={}) == Settings()


def test_file_values(tmp_path: Path):
    path = tmp_path / "settings.ini"
    path.write_text(
        "[pyini]\nstrict = yes\nencoding = latin-1\nformat = JSON\nlog_level = debug\n"
        "[other]\nstrict = no\n"
    )
    assert load_settings(path, environ={}) == Settings(
        strict=True, encoding="latin-1", format="json", log_level="DEBUG"
    )


def test_environment_overrides_file(tmp_path: Path):
    path = tmp_path / "settings.ini"
    path.write_text("[pyini]\nstrict = on\nformat = yaml\n")
    settings = load_settings(path, environ={"PYINI_STRICT": "0", "PYINI_FORMAT": "lines"})
    assert settings.strict is False
    assert settings.format == "lines"


def test_invalid_values_are_ignored(tmp_path: Path, caplog):
    path = tmp_path / "settings.ini"
    path.write_text("[pyini]\nstrict = maybe\nformat = xml\n")
    assert load_settings(path, environ={}) == Settings()
    assert "Ignoring strict" in caplog.text
    assert "Ignoring format" in caplog.text


def test_unreadable_settings_file_is_ignored(tmp_path: Path, caplog):
    path = tmp_path / "settings.ini"
    path.write_bytes(b"[pyini]\nstrict=\xff\n")
    assert load_settings(path, environ={}) == Settings()
    assert "Failed to read settings" in caplog.text


def test_settings_file_location(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("PYINI_SETTINGS", str(tmp_path / "custom.ini"))
    assert paths.settings_file() == (tmp_path / "custom.ini").resolve()
    monkeypatch.delenv("PYINI_SETTINGS")
    monkeypatch.setenv("PYINI_APP_NAME", "pyini-test")
    assert paths.settings_file().parent.name == "pyini-test"
    assert paths.settings_file().name == "settings.ini"
