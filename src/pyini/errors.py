class IniError(Exception):
    """Base class for pyini errors."""


class IniFileError(IniError):
    """Raised when an INI file is missing or cannot be read."""


class IniParseError(IniError):
    """Raised in strict mode when a line is neither a header nor an entry."""

    def __init__(self, lineno: int, line: str, reason: str = "malformed line") -> None:
        super().__init__(f"line {lineno}: {reason}: {line!r}")
        self.lineno = lineno
        self.line = line
        self.reason = reason


class SectionNotFoundError(IniError, LookupError):
    """Raised when a section name does not resolve."""


class KeyNotFoundError(IniError, LookupError):
    """Raised when a qualified key does not resolve."""


class RegexCompileError(IniError, ValueError):
    """Raised when a POSIX pattern cannot be compiled."""

    def __init__(self, pattern: str, message: str) -> None:
        super().__init__(message)
        self.pattern = pattern
        self.message = message


class RegexMatchError(IniError):
    """Raised when the matching engine fails on a single candidate."""
