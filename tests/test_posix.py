from __future__ import annotations

import pytest

from pyini import posix
from pyini.errors import RegexCompileError
from pyini.posix import compile_pattern, translate


def matches(pattern: str, text: str, extended: bool = False) -> bool:
    return compile_pattern(pattern, extended).search(text) is not None


def test_case_insensitive():
    assert matches("^DB", "db_host")
    assert matches("^db", "DB_HOST", extended=True)


def test_basic_treats_extended_operators_as_literals():
    assert translate("a+") == "a\\+"
    assert matches("a+", "a+")
    assert not matches("a+", "aa")
    assert matches("host|port", "host|port")
    assert not matches("host|port", "port")
    assert matches("(ab){2}", "x(ab){2}")


def test_extended_operators():
    assert translate("a+", extended=True) == "a+"
    assert matches("a+", "aa", extended=True)
    assert matches("host|port", "port", extended=True)
    assert matches("^(ab){2}$", "abab", extended=True)
    assert matches("colou?r", "color", extended=True)


def test_basic_escaped_operators():
    assert matches("\\(ab\\)\\{2\\}", "abab")
    assert matches("host\\|port", "port")
    assert matches("a\\+", "aaa")
    assert matches("colou\\?r", "color")


def test_leading_star_is_literal():
    assert matches("*a", "*a")
    assert not matches("*a", "a")
    assert matches("^*a", "*a")
    assert matches("*a", "*a", extended=True)


def test_stacked_repeats():
    assert translate("a**", extended=True) == "(?:a*)*"
    assert matches("^a**$", "aaa", extended=True)


def test_basic_anchors_only_at_ends():
    assert matches("a^b", "a^b")
    assert matches("a$b", "a$b")
    assert matches("\\(^a\\)", "ab")
    assert matches("a$", "ba")
    assert not matches("a$", "ab")


def test_intervals():
    assert matches("^a\\{2,3\\}$", "aaa")
    assert not matches("^a\\{2,3\\}$", "aaaa")
    assert matches("^a{2,}$", "aaaaa", extended=True)
    assert matches("^a{,1}b$", "b", extended=True)
    assert matches("a{", "a{", extended=True)


def test_bracket_expressions():
    assert matches("^[[:digit:]]\\{3\\}$", "543")
    assert matches("[]x]", "]")
    assert matches("[a-]", "-")
    assert not matches("^[^a-c]$", "b")
    assert matches("^[^a-c]$", "d")
    assert matches("[\\]", "back\\slash")
    assert matches("[[.-.]]", "-")
    assert matches("[[=e=]]", "E")


def test_escapes():
    assert not matches("a\\.b", "axb")
    assert matches("\\<host\\>", "db host")
    assert not matches("\\<host\\>", "hosts")
    assert matches("^\\w\\+$", "db_host")


def test_back_reference():
    assert matches("\\(a\\)\\1", "xaa")
    assert not matches("^\\(a\\)\\1$", "ab")


@pytest.mark.parametrize(
    "pattern, extended, message",
    [
        ("[unclosed", False, posix.ERR_BRACK),
        ("\\(a", False, posix.ERR_PAREN),
        ("a\\)", False, posix.ERR_RPAREN),
        ("(a", True, posix.ERR_PAREN),
        ("a)", True, posix.ERR_RPAREN),
        ("a\\", False, posix.ERR_ESCAPE),
        ("a\\{1", False, posix.ERR_BRACE),
        ("a\\{2,1\\}", False, posix.ERR_BADBR),
        ("a\\{x\\}", False, posix.ERR_BADBR),
        ("\\{1\\}", False, posix.ERR_BADRPT),
        ("[z-a]", False, posix.ERR_RANGE),
        ("[[:nope:]]", False, posix.ERR_CTYPE),
        ("[[.ab.]]", False, posix.ERR_COLLATE),
        ("\\1", False, posix.ERR_SUBREG),
    ],
)
def test_compile_errors(pattern, extended, message):
    with pytest.raises(RegexCompileError) as info:
        compile_pattern(pattern, extended)
    assert info.value.message == message
    assert info.value.pattern == pattern
