"""HTTP request description shared by the server and client sides."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, Optional

from .errors import ParameterError
from .umap import UMap

CONTENT_TYPE_HEADER = "Content-Type"
JSON_ENCODING = "application/json"


class SslVerify(IntFlag):
    """Which parts of a TLS certificate are checked."""

    PEER = 1
    HOSTNAME = 2


class NetworkType(IntFlag):
    """Which IP families a client request may use."""

    IPV4 = 1
    IPV6 = 2
    ALL = IPV4 | IPV6


_DEFAULT_VERIFY = SslVerify.PEER | SslVerify.HOSTNAME


@dataclass
class Request:
    """An HTTP request: target, headers, parameters, body and TLS options."""

    http_protocol: Optional[str] = None
    http_verb: Optional[str] = None
    http_url: Optional[str] = None
    url_path: Optional[str] = None
    proxy: Optional[str] = None
    network_type: NetworkType = NetworkType.ALL
    timeout: int = 0
    check_server_certificate: bool = True
    check_server_certificate_flag: SslVerify = _DEFAULT_VERIFY
    check_proxy_certificate: bool = True
    check_proxy_certificate_flag: SslVerify = _DEFAULT_VERIFY
    ca_path: Optional[str] = None
    client_address: Optional[Any] = None
    auth_basic_user: Optional[str] = None
    auth_basic_password: Optional[str] = None
    map_url: UMap = field(default_factory=UMap)
    map_header: UMap = field(default_factory=UMap)
    map_cookie: UMap = field(default_factory=UMap)
    map_post_body: UMap = field(default_factory=UMap)
    binary_body: Optional[bytes] = None
    callback_position: int = 0
    client_cert: Optional[str] = None
    client_cert_file: Optional[str] = None
    client_key_file: Optional[str] = None
    client_key_password: Optional[str] = None

    @property
    def binary_body_length(self) -> int:
        """Length in bytes of the body, 0 when there is none."""
        return len(self.binary_body) if self.binary_body is not None else 0

    def set_string_body(self, body: str) -> None:
        """Use the text ``body`` as the request body."""
        if body is None:
            raise ParameterError("body is required")
        if not isinstance(body, str):
            raise ParameterError("body must be a string")
        self.binary_body = body.encode("utf-8")

    def set_binary_body(self, body: bytes) -> None:
        """Use the non-empty bytes ``body`` as the request body."""
        if body is None or not isinstance(body, (bytes, bytearray, memoryview)):
            raise ParameterError("body must be bytes")
        data = bytes(body)
        if not data:
            raise ParameterError("body must not be empty")
        self.binary_body = data

    def set_empty_body(self) -> None:
        """Remove the request body."""
        self.binary_body = None

    def set_json_body(self, value: Any) -> None:
        """Serialise a JSON object or array as the body and set the content type."""
        if not isinstance(value, (dict, list)):
            raise ParameterError("JSON body must be an object or an array")
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        self.binary_body = text.encode("utf-8")
        self.map_header.put(CONTENT_TYPE_HEADER, JSON_ENCODING)

    def get_json_body(self) -> Any:
        """Parse the body as JSON when the content type announces JSON."""
        if self.map_header is None:
            raise ParameterError("Request header not set.")
        content_type = self.map_header.get_case(CONTENT_TYPE_HEADER)
        if content_type is None or JSON_ENCODING not in content_type:
            raise ParameterError(
                f"HEADER content not valid. Expected containing '{JSON_ENCODING}' "
                f"in header - received '{content_type}'."
            )
        try:
            return json.loads((self.binary_body or b"").decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ParameterError(f"invalid JSON body: {exc}") from exc

    def duplicate(self) -> "Request":
        """Return an independent copy of this request."""
        clone = copy.copy(self)
        clone.map_url = self.map_url.copy()
        clone.map_header = self.map_header.copy()
        clone.map_cookie = self.map_cookie.copy()
        clone.map_post_body = self.map_post_body.copy()
        clone.client_address = copy.deepcopy(self.client_address)
        return clone