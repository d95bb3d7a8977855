import pytest

from roadrouter.pointer_escape import escape, replace_substring, unescape


def test_escape_slash():
    assert escape("a/b") == "a~1b"


def test_escape_tilde_before_slash():
    assert escape("~1") == "~01"


def test_unescape_order():
    assert unescape("~01") == "~1"


@pytest.mark.parametrize("text", ["", "plain", "a/b/c", "~", "~/~0~1", "//~~"])
def test_round_trip(text):
    assert unescape(escape(text)) == text


def test_escaped_has_no_slash():
    assert "/" not in escape("x/y/~/z")


def test_replace_does_not_rescan_replacement():
    assert replace_substring("aa", "a", "aa") == "aaaa"


def test_replace_empty_search_rejected():
    with pytest.raises(ValueError):
        replace_substring("abc", "", "x")