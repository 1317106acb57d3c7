"""In-memory INI document model.

A :class:`Store` is built once by :meth:`Store.parse` and never mutated
afterwards, so a single instance can be queried from several threads without
locking.  Section and key names are stored lowercased; values are kept as
trimmed strings, or ``None`` when a key has no assigned value.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .errors import IniParseError, SectionNotFoundError
from .keys import normalize_name, split_key

logger = logging.getLogger(__name__)

GLOBAL_SECTION = ""
COMMENT_CHARS = (";", "#")

_HEADER_RX = re.compile(r"^\[(?P<name>[^\]]*)\]\s*(?:[;#].*)?$")


@dataclass(frozen=True)
class Entry:
    key: str
    value: str | None = None


@dataclass(frozen=True)
class Section:
    name: str
    entries: Mapping[str, Entry] = field(default_factory=lambda: MappingProxyType({}))

    def keys(self) -> list[str]:
        return list(self.entries)


def _split_entry(line: str) -> tuple[str, str] | None:
    # ``=`` wins over ``:`` so that keys may contain colons
    for sep in ("=", ":"):
        if sep in line:
            key, value = line.split(sep, 1)
            return key, value
    return None


class Store:
    """Immutable, ordered collection of :class:`Section` objects."""

    __slots__ = ("_sections",)

    def __init__(self, sections: Mapping[str, Section] | None = None) -> None:
        self._sections: Mapping[str, Section] = MappingProxyType(dict(sections or {}))

    def __setattr__(self, name: str, value: object) -> None:
        if hasattr(self, "_sections"):
            raise AttributeError("Store is read-only")
        object.__setattr__(self, name, value)

    def __repr__(self) -> str:
        return f"Store(sections={list(self._sections)!r})"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str, *, strict: bool = False) -> Store:
        """Parse INI ``text`` into a new store.

        Keys that appear before any ``[section]`` header go to the reserved
        global section named ``""``.  In ``strict`` mode such keys, and any
        line that is neither a header, an entry, a comment nor blank, raise
        :class:`IniParseError`; otherwise they are skipped.
        """

        if text.startswith("\ufeff"):
            text = text[1:]
        raw: dict[str, dict[str, Entry]] = {}
        current: dict[str, Entry] | None = None

        for lineno, line in enumerate(text.splitlines(), start=1):
            stripped = line.strip()
            if not stripped or stripped.startswith(COMMENT_CHARS):
                continue

            m = _HEADER_RX.match(stripped)
            if m:
                name = normalize_name(m.group("name"))
                if not name:
                    cls._reject(strict, lineno, line, "empty section name")
                    continue
                current = raw.setdefault(name, {})
                continue

            parts = _split_entry(stripped)
            if parts is None:
                cls._reject(strict, lineno, line, "malformed line")
                continue
            key = normalize_name(parts[0])
            if not key:
                cls._reject(strict, lineno, line, "empty key")
                continue
            if current is None:
                if strict:
                    raise IniParseError(lineno, line, "key outside of any section")
                current = raw.setdefault(GLOBAL_SECTION, {})
            value = parts[1].strip()
            current[key] = Entry(key, value or None)

        return cls(
            {name: Section(name, MappingProxyType(entries)) for name, entries in raw.items()}
        )

    @staticmethod
    def _reject(strict: bool, lineno: int, line: str, reason: str) -> None:
        if strict:
            raise IniParseError(lineno, line, reason)
        logger.debug("Ignoring line %d (%s): %r", lineno, reason, line)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def __contains__(self, section: object) -> bool:
        return isinstance(section, str) and normalize_name(section) in self._sections

    def __len__(self) -> int:
        return len(self._sections)

    def section(self, name: str) -> Section:
        try:
            return self._sections[normalize_name(name)]
        except KeyError:
            raise SectionNotFoundError(name) from None

    def sections(self) -> Iterator[Section]:
        return iter(self._sections.values())

    def find_entry(self, qualified_key: str) -> Entry | None:
        """Resolve ``section:key`` to its entry, or ``None``."""
        try:
            section, key = split_key(qualified_key)
        except ValueError:
            return None
        sect = self._sections.get(section)
        if sect is None:
            return None
        return sect.entries.get(key)

    def list_sections(self) -> Iterator[str]:
        return iter(self._sections)

    def list_keys(self, section: str) -> list[str]:
        return self.section(section).keys()

    def list_all_keys(self) -> Iterator[str]:
        # bare names: a key present in two sections is reported twice
        for sect in self._sections.values():
            yield from sect.entries
