from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path

from .errors import IniError
from .loader import load_store
from .paths import settings_file

logger = logging.getLogger(__name__)

SECTION = "pyini"
ENV_PREFIX = "PYINI_"
FORMATS = ("lines", "json", "yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_BOOLEAN_STATES = {
    "1": True, "yes": True, "true": True, "on": True,
    "0": False, "no": False, "false": False, "off": False,
}


@dataclass(frozen=True)
class Settings:
    """Defaults for the command line modifiers."""

    strict: bool = False
    encoding: str | None = None
    format: str = "lines"
    log_level: str = "WARNING"


def _coerce(name: str, raw: str) -> object:
    if name == "strict":
        try:
            return _BOOLEAN_STATES[raw.strip().lower()]
        except KeyError:
            raise ValueError(f"not a boolean: {raw!r}") from None
    if name == "format":
        value = raw.strip().lower()
        if value not in FORMATS:
            raise ValueError(f"unknown format {raw!r}")
        return value
    if name == "log_level":
        value = raw.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"unknown log level {raw!r}")
        return value
    return raw.strip() or None


def _apply(settings: Settings, values: Mapping[str, str], origin: str) -> Settings:
    changes: dict[str, object] = {}
    for f in fields(Settings):
        raw = values.get(f.name)
        if raw is None:
            continue
        try:
            changes[f.name] = _coerce(f.name, raw)
        except ValueError as exc:
            logger.warning("Ignoring %s from %s: %s", f.name, origin, exc)
    return replace(settings, **changes)


def read_file(path: Path) -> dict[str, str]:
    """Return the ``[pyini]`` section of the settings file at ``path``."""
    if not path.is_file():
        return {}
    try:
        store = load_store(path)
    except IniError as exc:
        logger.warning("Failed to read settings %s: %s", path, exc)
        return {}
    if SECTION not in store:
        return {}
    return {
        e.key: e.value
        for e in store.section(SECTION).entries.values()
        if e.value is not None
    }


def read_env(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    environ = os.environ if environ is None else environ
    result: dict[str, str] = {}
    for f in fields(Settings):
        value = environ.get(ENV_PREFIX + f.name.upper())
        if value is not None:
            result[f.name] = value
    return result


def load_settings(
    path: Path | None = None, environ: Mapping[str, str] | None = None
) -> Settings:
    """Resolve settings: environment over settings file over defaults."""
    path = settings_file() if path is None else Path(path)
    settings = _apply(Settings(), read_file(path), str(path))
    return _apply(settings, read_env(environ), "environment")
