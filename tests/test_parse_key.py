from __future__ import annotations

import pytest

from pyini.keys import join_key, normalize_name, split_key


def test_split_key_valid():
    assert split_key("db:host") == ("db", "host")
    assert split_key("DB:Host") == ("db", "host")
    assert split_key(" db : host ") == ("db", "host")
    assert split_key(":host") == ("", "host")


def test_split_key_first_unescaped_colon():
    assert split_key("a:b:c") == ("a", "b:c")
    assert split_key("a\\:b:c") == ("a:b", "c")
    assert split_key("a:b\\:c") == ("a", "b:c")


def test_split_key_backslashes():
    assert split_key("a\\\\:b") == ("a\\", "b")
    assert split_key("a\\x:b") == ("a\\x", "b")


def test_split_key_invalid():
    with pytest.raises(ValueError):
        split_key("nocolon")
    with pytest.raises(ValueError):
        split_key("only\\:escaped")


def test_join_key_escapes():
    assert join_key("a:b", "c") == "a\\:b:c"
    assert split_key(join_key("we:ird\\", "k:ey")) == ("we:ird\\", "k:ey")


def test_normalize_name():
    assert normalize_name("  MiXeD ") == "mixed"
