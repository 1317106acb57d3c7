"""POSIX basic and extended regular expressions on top of :mod:`re`.

Patterns are translated into the :mod:`re` dialect and compiled with
``re.IGNORECASE``; callers only ever ask whether a pattern matches somewhere
in a string, so capture groups are accepted but their contents are never
used.  Diagnostics reuse the glibc ``regerror`` wording.
"""
from __future__ import annotations

import re
import string

from .errors import RegexCompileError

__all__ = ["compile_pattern", "translate"]

RE_DUP_MAX = 0x7FFF

ERR_BRACK = "Unmatched [, [^, [:, [., or [="
ERR_PAREN = "Unmatched ( or \\("
ERR_RPAREN = "Unmatched ) or \\)"
ERR_BRACE = "Unmatched \\{"
ERR_BADBR = "Invalid content of \\{\\}"
ERR_RANGE = "Invalid range end"
ERR_CTYPE = "Invalid character class name"
ERR_COLLATE = "Invalid collation character"
ERR_ESCAPE = "Trailing backslash"
ERR_SUBREG = "Invalid back reference"
ERR_BADRPT = "Invalid preceding regular expression"

_CLASSES = {
    "alpha": "a-zA-Z",
    "digit": "0-9",
    "alnum": "a-zA-Z0-9",
    "upper": "A-Z",
    "lower": "a-z",
    "space": " \\t\\n\\r\\f\\v",
    "blank": " \\t",
    "punct": "".join(re.escape(c) for c in string.punctuation),
    "print": "\\x20-\\x7e",
    "graph": "\\x21-\\x7e",
    "cntrl": "\\x00-\\x1f\\x7f",
    "xdigit": "0-9A-Fa-f",
}

_GNU_ESCAPES = {
    "w": "\\w",
    "W": "\\W",
    "s": "\\s",
    "S": "\\S",
    "b": "\\b",
    "B": "\\B",
    "<": "\\b(?=\\w)",
    ">": "\\b(?<=\\w)",
    "`": "\\A",
    "'": "\\Z",
}


class _Translator:
    def __init__(self, pattern: str, extended: bool) -> None:
        self.p = pattern
        self.extended = extended
        self.i = 0
        self.out: list[str] = []
        # index in ``out`` where the last repeatable item starts, or None
        self.atom: int | None = None
        self.quantified = False
        self.start = True
        self.groups: list[tuple[int, int]] = []
        self.opened = 0
        self.closed: set[int] = set()
        self._class = ""

    def fail(self, message: str) -> None:
        raise RegexCompileError(self.p, message)

    # -- emitters -----------------------------------------------------

    def emit_atom(self, text: str) -> None:
        self.atom = len(self.out)
        self.out.append(text)
        self.quantified = False
        self.start = False

    def emit_assertion(self, text: str) -> None:
        self.out.append(text)
        self.atom = None
        self.quantified = False

    def emit_repeat(self, op: str) -> None:
        if self.quantified:
            # POSIX allows stacked repeats such as ``a**``; re does not
            body = "".join(self.out[self.atom:])
            del self.out[self.atom:]
            self.out.append(f"(?:{body})")
        self.out.append(op)
        self.quantified = True
        self.start = False

    def open_group(self) -> None:
        self.opened += 1
        self.groups.append((len(self.out), self.opened))
        self.out.append("(")
        self.atom = None
        self.quantified = False
        self.start = True

    def close_group(self) -> None:
        if not self.groups:
            self.fail(ERR_RPAREN)
        index, number = self.groups.pop()
        self.out.append(")")
        self.closed.add(number)
        self.atom = index
        self.quantified = False
        self.start = False

    def alternate(self) -> None:
        self.out.append("|")
        self.atom = None
        self.quantified = False
        self.start = True

    # -- syntax -------------------------------------------------------

    def repeat(self, op: str) -> None:
        if self.atom is None:
            # nothing to repeat: GNU treats the operator as a literal
            self.emit_atom(re.escape(op))
        else:
            self.emit_repeat(op)

    def interval(self, closing: str) -> None:
        # ``self.i`` points just past the opening brace
        end = self.p.find(closing, self.i)
        if end == -1:
            self.fail(ERR_BRACE)
        body = self.p[self.i:end]
        m = re.fullmatch(r"(\d*)(,(\d*))?", body)
        if m is None or (m.group(1) == "" and m.group(2) is None):
            self.fail(ERR_BADBR)
        low = int(m.group(1) or 0)
        if m.group(2) is None:
            high: int | None = low
        elif m.group(3):
            high = int(m.group(3))
        else:
            high = None
        if low > RE_DUP_MAX or (high is not None and (high > RE_DUP_MAX or high < low)):
            self.fail(ERR_BADBR)
        if self.atom is None:
            self.fail(ERR_BADRPT)
        self.i = end + len(closing)
        if high is None:
            self.emit_repeat(f"{{{low},}}")
        elif high == low:
            self.emit_repeat(f"{{{low}}}")
        else:
            self.emit_repeat(f"{{{low},{high}}}")

    def _bracket_symbol(self, j: int) -> tuple[str | None, int]:
        """Parse ``[:name:]``, ``[.c.]`` or ``[=c=]`` at ``j``.

        Returns ``(char, next)``; ``char`` is None for a character class,
        whose translation has been stored in ``self._class``.
        """
        kind = self.p[j + 1]
        end = self.p.find(kind + "]", j + 2)
        if end == -1:
            self.fail(ERR_BRACK)
        name = self.p[j + 2:end]
        if kind == ":":
            if name not in _CLASSES:
                self.fail(ERR_CTYPE)
            self._class = _CLASSES[name]
            return None, end + 2
        if len(name) != 1:
            self.fail(ERR_COLLATE)
        return name, end + 2

    def bracket(self) -> None:
        p, n = self.p, len(self.p)
        j = self.i
        negate = j < n and p[j] == "^"
        if negate:
            j += 1
        items: list[str] = []
        first = True
        while True:
            if j >= n:
                self.fail(ERR_BRACK)
            c = p[j]
            if c == "]" and not first:
                j += 1
                break
            first = False
            if c == "[" and j + 1 < n and p[j + 1] in ":.=":
                low, j = self._bracket_symbol(j)
                if low is None:
                    items.append(self._class)
                    continue
            else:
                low = c
                j += 1
            if j + 1 < n and p[j] == "-" and p[j + 1] != "]":
                j += 1
                if p[j] == "[" and j + 1 < n and p[j + 1] in ".=":
                    high, j = self._bracket_symbol(j)
                else:
                    high = p[j]
                    j += 1
                if ord(high) < ord(low):
                    self.fail(ERR_RANGE)
                items.append(f"{re.escape(low)}-{re.escape(high)}")
            else:
                items.append(re.escape(low))
        self.i = j
        self.emit_atom(("[^" if negate else "[") + "".join(items) + "]")

    def escape(self) -> None:
        if self.i >= len(self.p):
            self.fail(ERR_ESCAPE)
        d = self.p[self.i]
        self.i += 1
        basic = not self.extended
        if basic and d == "(":
            self.open_group()
        elif basic and d == ")":
            self.close_group()
        elif basic and d == "|":
            self.alternate()
        elif basic and d == "{":
            self.interval("\\}")
        elif basic and d in "+?":
            self.repeat(d)
        elif d in "123456789":
            if int(d) not in self.closed:
                self.fail(ERR_SUBREG)
            self.emit_atom(f"(?:\\{d})")
        elif d in _GNU_ESCAPES:
            if d in "wWsS":
                self.emit_atom(_GNU_ESCAPES[d])
            else:
                self.emit_assertion(_GNU_ESCAPES[d])
        else:
            self.emit_atom(re.escape(d))

    def _basic_dollar_is_anchor(self) -> bool:
        rest = self.p[self.i:]
        return rest == "" or rest.startswith(("\\)", "\\|"))

    def run(self) -> str:
        p = self.p
        while self.i < len(p):
            c = p[self.i]
            self.i += 1
            if c == "\\":
                self.escape()
            elif c == "[":
                self.bracket()
            elif c == ".":
                self.emit_atom(".")
            elif c == "*":
                self.repeat("*")
            elif c == "^":
                if self.extended or self.start:
                    self.emit_assertion("^")
                else:
                    self.emit_atom("\\^")
            elif c == "$":
                if self.extended or self._basic_dollar_is_anchor():
                    self.emit_assertion("$")
                else:
                    self.emit_atom("\\$")
            elif self.extended and c == "(":
                self.open_group()
            elif self.extended and c == ")":
                self.close_group()
            elif self.extended and c == "|":
                self.alternate()
            elif self.extended and c in "+?":
                self.repeat(c)
            elif (
                self.extended
                and c == "{"
                and self.atom is not None
                and self.i < len(p)
                and (p[self.i].isdigit() or p[self.i] == ",")
            ):
                self.interval("}")
            else:
                self.emit_atom(re.escape(c))
        if self.groups:
            self.fail(ERR_PAREN)
        return "".join(self.out)


def translate(pattern: str, extended: bool = False) -> str:
    """Return the :mod:`re` equivalent of a POSIX BRE (or ERE) ``pattern``."""
    return _Translator(pattern, extended).run()


def compile_pattern(pattern: str, extended: bool = False) -> re.Pattern[str]:
    """Compile a POSIX pattern case-insensitively.

    Raises :class:`~pyini.errors.RegexCompileError` with a glibc-style
    message when ``pattern`` is malformed.
    """

    translated = translate(pattern, extended)
    try:
        return re.compile(translated, re.IGNORECASE)
    except re.error as exc:
        raise RegexCompileError(pattern, str(exc)) from exc
