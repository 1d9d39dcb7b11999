from urllib.parse import quote

import pytest

from urest.urlcode import split_url, url_decode


def test_decode_escapes_and_plus():
    assert url_decode("a%20b+c") == "a b c"


def test_decode_uppercase_and_lowercase_hex():
    assert url_decode("%2f%2F") == "//"


def test_decode_none():
    assert url_decode(None) is None


def test_decode_truncated_percent_is_dropped():
    assert url_decode("ab%4") == "ab4"
    assert url_decode("ab%") == "ab"


def test_decode_plain_text_unchanged():
    assert url_decode("hello-world_1.txt") == "hello-world_1.txt"


@pytest.mark.parametrize("text", ["é à ü", "a/b?c=d&e", "100% sure", "日本語"])
def test_decode_round_trip(text):
    assert url_decode(quote(text, safe="")) == text


def test_decode_invalid_utf8_keeps_raw_bytes():
    decoded = url_decode("%FFx")
    assert decoded.encode("utf-8", "surrogateescape") == b"\xffx"


def test_split_prefix_and_url():
    assert split_url("/api/", "/users/:id/") == ["api", "users", ":id"]


def test_split_skips_query_segments_in_url():
    assert split_url(None, "/users/?page=2") == ["users"]


def test_split_keeps_query_segments_in_prefix():
    assert split_url("/users/?page=2", None) == ["users", "?page=2"]


def test_split_collapses_empty_segments():
    assert split_url("//a///b//", None) == ["a", "b"]


def test_split_nothing():
    assert split_url(None, None) == []