from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator

from .errors import (
    IniError,
    KeyNotFoundError,
    RegexCompileError,
    RegexMatchError,
    SectionNotFoundError,
)
from .posix import compile_pattern
from .store import Entry, Store

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[IniError], None]


def log_error(exc: IniError) -> None:
    """Default ``on_error`` handler: report ``exc`` through logging."""
    logger.error("%s", exc)


# ---------------------------------------------------------------------------
# Enumeration
# ---------------------------------------------------------------------------


def list_sections(store: Store) -> list[str]:
    return list(store.list_sections())


def list_keys(store: Store, section: str) -> list[str]:
    """Return the keys of ``section``; an unknown section lists nothing."""
    try:
        return store.list_keys(section)
    except SectionNotFoundError:
        logger.debug("No section %r", section)
        return []


def list_all_keys(store: Store) -> list[str]:
    return list(store.list_all_keys())


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


def exists(store: Store, qualified_key: str) -> bool:
    return store.find_entry(qualified_key) is not None


def get_value(store: Store, qualified_key: str) -> str | None:
    """Return the value stored at ``qualified_key``.

    ``None`` means the key exists without a value; a key that does not exist
    raises :class:`KeyNotFoundError`.
    """
    entry = store.find_entry(qualified_key)
    if entry is None:
        raise KeyNotFoundError(qualified_key)
    return entry.value


# ---------------------------------------------------------------------------
# Pattern matching
# ---------------------------------------------------------------------------


def _grep(
    store: Store,
    pattern: str,
    extended: bool,
    subject: Callable[[Entry], str | None],
    on_error: ErrorHandler,
) -> Iterator[str]:
    try:
        rx = compile_pattern(pattern, extended)
    except RegexCompileError as exc:
        on_error(exc)
        return
    for section in store.sections():
        for entry in section.entries.values():
            text = subject(entry)
            if text is None:
                continue
            if _search(rx, text, entry, on_error):
                yield entry.key


def _search(rx: re.Pattern[str], text: str, entry: Entry, on_error: ErrorHandler) -> bool:
    try:
        return rx.search(text) is not None
    except RecursionError as exc:
        on_error(RegexMatchError(f"matching {entry.key!r} failed: {exc}"))
        return False


def grep_keys(
    store: Store,
    pattern: str,
    extended: bool = False,
    *,
    on_error: ErrorHandler = log_error,
) -> Iterator[str]:
    """Yield key names matching ``pattern``, in section then key order.

    A malformed pattern is reported once through ``on_error`` and yields
    nothing.
    """
    return _grep(store, pattern, extended, lambda e: e.key, on_error)


def grep_values(
    store: Store,
    pattern: str,
    extended: bool = False,
    *,
    on_error: ErrorHandler = log_error,
) -> Iterator[str]:
    """Yield the names of keys whose value matches ``pattern``.

    Keys without a value never match.
    """
    return _grep(store, pattern, extended, lambda e: e.value, on_error)
