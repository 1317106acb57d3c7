from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir as _uc

SETTINGS_FILENAME = "settings.ini"


def _app_name(default: str) -> str:
    return os.getenv("PYINI_APP_NAME", default)


def user_config_dir(app_name: str = "pyini") -> Path:
    app = _app_name(app_name)
    return Path(_uc(appname=app)).resolve()


def settings_file(app_name: str = "pyini") -> Path:
    """Return the settings file path, honouring ``PYINI_SETTINGS``."""
    env = os.getenv("PYINI_SETTINGS")
    if env:
        return Path(env).expanduser().resolve()
    return user_config_dir(app_name) / SETTINGS_FILENAME
