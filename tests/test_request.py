import json

import pytest

from urest.errors import ParameterError
from urest.request import (
    CONTENT_TYPE_HEADER,
    JSON_ENCODING,
    NetworkType,
    Request,
    SslVerify,
)


def test_defaults():
    request = Request()
    assert request.binary_body is None
    assert request.binary_body_length == 0
    assert request.check_server_certificate is True
    assert request.check_server_certificate_flag == SslVerify.PEER | SslVerify.HOSTNAME
    assert request.check_proxy_certificate_flag == SslVerify.PEER | SslVerify.HOSTNAME
    assert request.network_type == NetworkType.ALL
    assert len(request.map_header) == 0


def test_maps_are_not_shared_between_instances():
    first, second = Request(), Request()
    first.map_url.put("a", "b")
    assert len(second.map_url) == 0


def test_set_string_body():
    request = Request()
    request.set_string_body("hello")
    assert request.binary_body == "hello".encode("utf-8")
    assert request.binary_body_length == len("hello")


def test_set_string_body_none_raises():
    with pytest.raises(ParameterError):
        Request().set_string_body(None)


def test_set_binary_body():
    request = Request()
    data = b"\x00\x01\xff"
    request.set_binary_body(data)
    assert request.binary_body == data
    assert request.binary_body_length == len(data)


@pytest.mark.parametrize("body", [None, b""])
def test_set_binary_body_invalid(body):
    with pytest.raises(ParameterError):
        Request().set_binary_body(body)


def test_set_empty_body():
    request = Request()
    request.set_string_body("x")
    request.set_empty_body()
    assert request.binary_body is None
    assert request.binary_body_length == 0


def test_json_body_round_trip():
    request = Request()
    value = {"key": "value", "list": [1, 2, 3]}
    request.set_json_body(value)
    assert request.map_header.get(CONTENT_TYPE_HEADER) == JSON_ENCODING
    assert b" " not in request.binary_body
    assert json.loads(request.binary_body) == value
    assert request.get_json_body() == value


@pytest.mark.parametrize("value", ["text", 3, None])
def test_json_body_rejects_scalars(value):
    with pytest.raises(ParameterError):
        Request().set_json_body(value)


def test_get_json_body_requires_json_content_type():
    request = Request()
    request.set_string_body('{"a":1}')
    with pytest.raises(ParameterError):
        request.get_json_body()


def test_get_json_body_case_insensitive_header():
    request = Request()
    request.map_header.put(CONTENT_TYPE_HEADER.lower(), JSON_ENCODING + "; charset=utf-8")
    request.set_string_body("[1,2]")
    assert request.get_json_body() == [1, 2]


def test_get_json_body_invalid_json():
    request = Request()
    request.map_header.put(CONTENT_TYPE_HEADER, JSON_ENCODING)
    request.set_string_body("{not json")
    with pytest.raises(ParameterError):
        request.get_json_body()


def test_duplicate_is_independent():
    request = Request(http_verb="POST", http_url="http://localhost/x", timeout=5)
    request.map_url.put("p", "1")
    request.map_header.put("h", "v")
    request.set_string_body("body")
    clone = request.duplicate()
    assert clone.http_verb == request.http_verb
    assert clone.http_url == request.http_url
    assert clone.timeout == request.timeout
    assert clone.binary_body == request.binary_body
    assert clone.map_url.items() == request.map_url.items()
    clone.map_url.put("p", "2")
    clone.map_header.put("other", "x")
    assert request.map_url.get("p") == "1"
    assert not request.map_header.has_key("other")