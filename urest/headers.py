"""Header lines produced from a response's header map and cookies."""

from __future__ import annotations

from typing import Optional

from .errors import ParameterError
from .response import Response
from .umap import UMap

SET_COOKIE_HEADER = "Set-Cookie"


def header_items(header_map: Optional[UMap]) -> list[tuple[str, str]]:
    """Return the ``(name, value)`` pairs of ``header_map`` that have a value."""
    if header_map is None:
        raise ParameterError("header map is required")
    return [(key, value) for key, value in header_map.items() if value is not None]


def cookie_headers(response: Optional[Response]) -> list[tuple[str, str]]:
    """Return one ``Set-Cookie`` header pair for each cookie of ``response``."""
    if response is None:
        raise ParameterError("response is required")
    return [(SET_COOKIE_HEADER, cookie.header_value()) for cookie in response.cookies]