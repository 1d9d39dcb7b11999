"""HTTP response description: status, headers, cookies and body."""

from __future__ import annotations

import copy
import dataclasses
import json
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .cookie import Cookie, SameSite
from .errors import ParameterError
from .request import CONTENT_TYPE_HEADER, JSON_ENCODING
from .umap import UMap

STREAM_SIZE_UNKNOWN = -1
STREAM_BLOCK_SIZE_DEFAULT = 1024

StreamCallback = Callable[[Any, int, int], Optional[bytes]]
StreamFreeCallback = Callable[[Any], None]


@dataclass
class Response:
    """An HTTP response sent by an endpoint or received by the client."""

    status: int = 200
    protocol: Optional[str] = None
    auth_realm: Optional[str] = None
    map_header: UMap = field(default_factory=UMap)
    cookies: list[Cookie] = field(default_factory=list)
    binary_body: Optional[bytes] = None
    stream_callback: Optional[StreamCallback] = None
    stream_callback_free: Optional[StreamFreeCallback] = None
    stream_size: int = STREAM_SIZE_UNKNOWN
    stream_block_size: int = STREAM_BLOCK_SIZE_DEFAULT
    stream_user_data: Any = None
    timeout: int = 0
    shared_data: Any = None

    @property
    def binary_body_length(self) -> int:
        """Length in bytes of the body, 0 when there is none."""
        return len(self.binary_body) if self.binary_body is not None else 0

    def add_cookie(
        self,
        key: str,
        value: Optional[str] = None,
        expires: Optional[str] = None,
        max_age: int = 0,
        domain: Optional[str] = None,
        path: Optional[str] = None,
        secure: bool = False,
        http_only: bool = False,
        same_site: SameSite = SameSite.NONE,
    ) -> Cookie:
        """Add a cookie, replacing any cookie that has the same key."""
        if not isinstance(key, str):
            raise ParameterError("cookie key is required")
        cookie = Cookie(
            key=key,
            value=value if value is not None else "",
            expires=expires,
            max_age=max_age,
            domain=domain,
            path=path,
            secure=bool(secure),
            http_only=bool(http_only),
            same_site=same_site,
        )
        for pos, existing in enumerate(self.cookies):
            if existing.key == key:
                self.cookies[pos] = cookie
                break
        else:
            self.cookies.append(cookie)
        return cookie

    def set_string_body(self, status: int, body: str) -> None:
        """Use the text ``body`` as the response body and set ``status``."""
        if body is None or not isinstance(body, str):
            raise ParameterError("body must be a string")
        self.binary_body = body.encode("utf-8")
        self.status = status

    def set_binary_body(self, status: int, body: bytes) -> None:
        """Use the non-empty bytes ``body`` as the response body and set ``status``."""
        if body is None or not isinstance(body, (bytes, bytearray, memoryview)):
            raise ParameterError("body must be bytes")
        data = bytes(body)
        if not data:
            raise ParameterError("body must not be empty")
        self.binary_body = data
        self.status = status

    def set_empty_body(self, status: int) -> None:
        """Remove the body and set ``status``."""
        self.binary_body = None
        self.status = status

    def set_stream(
        self,
        status: int,
        callback: StreamCallback,
        callback_free: Optional[StreamFreeCallback] = None,
        size: int = STREAM_SIZE_UNKNOWN,
        block_size: int = STREAM_BLOCK_SIZE_DEFAULT,
        user_data: Any = None,
    ) -> None:
        """Send the body through ``callback`` instead of a stored body."""
        if callback is None:
            raise ParameterError("stream callback is required")
        self.binary_body = None
        self.status = status
        self.stream_callback = callback
        self.stream_callback_free = callback_free
        self.stream_size = size
        self.stream_block_size = block_size
        self.stream_user_data = user_data

    def set_json_body(self, status: int, value: Any) -> None:
        """Serialise a JSON object or array as the body and set the content type."""
        if not isinstance(value, (dict, list)):
            raise ParameterError("JSON body must be an object or an array")
        text = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
        self.binary_body = text.encode("utf-8")
        self.status = status
        self.map_header.put(CONTENT_TYPE_HEADER, JSON_ENCODING)

    def get_json_body(self) -> Any:
        """Parse the body as JSON; ``None`` unless the content type announces JSON."""
        if self.map_header is None:
            return None
        content_type = self.map_header.get_case(CONTENT_TYPE_HEADER)
        if content_type is None or JSON_ENCODING not in content_type:
            return None
        try:
            return json.loads((self.binary_body or b"").decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise ParameterError(f"invalid JSON body: {exc}") from exc

    def add_header(self, key: str, value: str) -> None:
        """Set the header ``key`` to ``value``."""
        if key is None or value is None:
            raise ParameterError("header key and value are required")
        self.map_header.put(key, value)

    def duplicate(self) -> "Response":
        """Return an independent copy of this response."""
        clone = copy.copy(self)
        clone.map_header = self.map_header.copy()
        clone.cookies = [dataclasses.replace(cookie) for cookie in self.cookies]
        return clone