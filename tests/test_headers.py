import pytest

from urest.cookie import SameSite
from urest.errors import ParameterError
from urest.headers import SET_COOKIE_HEADER, cookie_headers, header_items
from urest.response import Response
from urest.umap import UMap


def test_header_items_in_order():
    header_map = UMap()
    header_map.put("B", "2")
    header_map.put("A", "1")
    assert header_items(header_map) == [("B", "2"), ("A", "1")]


def test_header_items_skips_missing_values():
    header_map = UMap()
    header_map.put("Empty", None)
    header_map.put("Full", "x")
    assert header_items(header_map) == [("Full", "x")]


def test_header_items_empty_map():
    assert header_items(UMap()) == []


def test_header_items_requires_map():
    with pytest.raises(ParameterError):
        header_items(None)


def test_cookie_headers_one_per_cookie():
    response = Response()
    response.add_cookie("a", "1", path="/")
    response.add_cookie("b", "2", secure=True, same_site=SameSite.STRICT)
    result = cookie_headers(response)
    assert [name for name, _ in result] == [SET_COOKIE_HEADER, SET_COOKIE_HEADER]
    assert [value for _, value in result] == [c.header_value() for c in response.cookies]


def test_cookie_header_format():
    response = Response()
    response.add_cookie("a", "1", path="/", http_only=True)
    assert cookie_headers(response) == [("Set-Cookie", "a=1; Path=/; HttpOnly")]


def test_cookie_headers_replaced_cookie_once():
    response = Response()
    response.add_cookie("a", "1")
    response.add_cookie("a", "2")
    result = cookie_headers(response)
    assert len(result) == 1
    assert result[0][1].startswith("a=2")


def test_cookie_headers_requires_response():
    with pytest.raises(ParameterError):
        cookie_headers(None)