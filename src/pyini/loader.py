from __future__ import annotations

import logging
from pathlib import Path

from .errors import IniFileError
from .store import Store

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


def read_text(path: str | Path, *, encoding: str | None = None) -> str:
    """Return the full contents of ``path``.

    The file is opened, read and closed before anything is parsed.  Missing,
    unreadable and undecodable files all raise :class:`IniFileError`.
    """

    path = Path(path)
    try:
        with path.open("r", encoding=encoding or DEFAULT_ENCODING) as fh:
            return fh.read()
    except FileNotFoundError as exc:
        raise IniFileError(f"No such file: {path}") from exc
    except IsADirectoryError as exc:
        raise IniFileError(f"Is a directory: {path}") from exc
    except UnicodeDecodeError as exc:
        raise IniFileError(f"Cannot decode {path} as {exc.encoding}: {exc.reason}") from exc
    except LookupError as exc:
        raise IniFileError(f"Unknown encoding {encoding!r}") from exc
    except OSError as exc:
        raise IniFileError(f"Cannot read {path}: {exc.strerror or exc}") from exc


def load_store(
    path: str | Path, *, strict: bool = False, encoding: str | None = None
) -> Store:
    text = read_text(path, encoding=encoding)
    store = Store.parse(text, strict=strict)
    logger.debug("Loaded %s: %d section(s)", path, len(store))
    return store
