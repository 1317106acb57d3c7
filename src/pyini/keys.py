from __future__ import annotations

import re

QualifiedKey = tuple[str, str]

_ESCAPE_RX = re.compile(r"\\([\\:])|(:)")


def normalize_name(name: str) -> str:
    """Return ``name`` trimmed and lowercased, the form stored in a Store."""
    return name.strip().lower()


def split_key(raw: str) -> QualifiedKey:
    """Split ``section:key`` on the first unescaped colon.

    ``\\:`` stands for a literal colon and ``\\\\`` for a literal backslash in
    either half; both halves are normalised with :func:`normalize_name`.
    Raises :class:`ValueError` when ``raw`` holds no unescaped colon.
    """

    halves: list[list[str]] = [[]]
    pos = 0
    for m in _ESCAPE_RX.finditer(raw):
        halves[-1].append(raw[pos:m.start()])
        pos = m.end()
        if m.group(1) is not None:
            halves[-1].append(m.group(1))
        elif len(halves) == 1:
            halves.append([])
        else:
            halves[-1].append(":")
    halves[-1].append(raw[pos:])
    if len(halves) != 2:
        raise ValueError(f"Malformed key '{raw}'")
    section, key = ("".join(h) for h in halves)
    return normalize_name(section), normalize_name(key)


def join_key(section: str, key: str) -> str:
    """Inverse of :func:`split_key` for already normalised names."""

    def esc(part: str) -> str:
        return part.replace("\\", "\\\\").replace(":", "\\:")

    return f"{esc(section)}:{esc(key)}"
