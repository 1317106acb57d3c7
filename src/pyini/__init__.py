__version__ = "0.1.0"

from .errors import (
    IniError,
    IniFileError,
    IniParseError,
    KeyNotFoundError,
    RegexCompileError,
    RegexMatchError,
    SectionNotFoundError,
)
from .keys import join_key, split_key
from .loader import load_store
from .query import exists, get_value, grep_keys, grep_values, list_all_keys, list_keys, list_sections
from .store import Entry, Section, Store

__all__ = [
    "__version__",
    "Entry",
    "Section",
    "Store",
    "load_store",
    "split_key",
    "join_key",
    "exists",
    "get_value",
    "grep_keys",
    "grep_values",
    "list_all_keys",
    "list_keys",
    "list_sections",
    "IniError",
    "IniFileError",
    "IniParseError",
    "KeyNotFoundError",
    "SectionNotFoundError",
    "RegexCompileError",
    "RegexMatchError",
]
