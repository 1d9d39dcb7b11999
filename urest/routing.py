"""Matching request URLs against endpoint definitions."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence

from .errors import ParameterError
from .umap import UMap
from .urlcode import URL_SEPARATOR, split_url, url_decode


@dataclass
class Endpoint:
    """A route: HTTP method, optional URL prefix, URL format and priority.

    Format segments starting with ``:`` or ``@`` capture a URL parameter;
    a final ``*`` segment matches any remainder. A method of ``*`` matches
    every HTTP method.
    """

    http_method: str
    url_prefix: Optional[str] = None
    url_format: Optional[str] = None
    priority: int = 0
    callback: Optional[Callable[..., Any]] = None
    user_data: Any = None


def url_format_match(url_parts: Sequence[str], format_parts: Sequence[str]) -> bool:
    """True if the URL segments fit the format segments."""
    for pos, fmt in enumerate(format_parts):
        if fmt.startswith("*") and pos == len(format_parts) - 1:
            return True
        if pos >= len(url_parts):
            return False
        if not fmt.startswith(("@", ":")) and fmt != url_parts[pos]:
            return False
    return len(url_parts) == len(format_parts)


def endpoint_match(
    method: Optional[str], url: Optional[str], endpoints: Optional[Iterable[Endpoint]]
) -> list[Endpoint]:
    """Return copies of the endpoints matching ``method`` and ``url``, by priority."""
    if method is None or url is None or endpoints is None:
        return []
    url_parts = split_url(url, None)
    wanted = method.casefold()
    matched = [
        dataclasses.replace(endpoint)
        for endpoint in endpoints
        if (endpoint.http_method.casefold() == wanted or endpoint.http_method.startswith("*"))
        and url_format_match(url_parts, split_url(endpoint.url_prefix, endpoint.url_format))
    ]
    matched.sort(key=lambda endpoint: endpoint.priority)
    return matched


def _is_utf8(word: str) -> bool:
    try:
        word.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _segments(text: Optional[str]) -> list[str]:
    if text is None:
        return []
    return [word for word in text.split(URL_SEPARATOR) if word]


def parse_url(
    url: Optional[str], endpoint: Endpoint, params: UMap, check_utf8: bool = True
) -> None:
    """Store in ``params`` the URL parameters that ``endpoint``'s format captures.

    A parameter that appears more than once gets its values joined by commas.
    With ``check_utf8``, segments that are not valid UTF-8 are ignored.
    """
    if params is None or endpoint is None:
        raise ParameterError("endpoint and params are required")
    words = [url_decode(word) for word in _segments(url)]
    skipped = min(len(words), len(_segments(endpoint.url_prefix)))
    remaining = words[skipped:]
    for fmt, word in zip(_segments(endpoint.url_format), remaining):
        if not fmt.startswith((":", "@")):
            continue
        if check_utf8 and not _is_utf8(word):
            continue
        key = fmt[1:]
        data = word.encode("utf-8", "surrogateescape")
        if params.has_key(key):
            data = (params.get_binary(key) or b"") + b"," + data
        params.put_binary(key, data, 0)