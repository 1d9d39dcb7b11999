"""Response cookies and their Set-Cookie header value."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .errors import ParameterError


class SameSite(Enum):
    """Value of the SameSite cookie attribute."""

    NONE = 0
    STRICT = 1
    LAX = 2


@dataclass
class Cookie:
    """A cookie sent back to the client."""

    key: str
    value: Optional[str] = ""
    expires: Optional[str] = None
    max_age: int = 0
    domain: Optional[str] = None
    path: Optional[str] = None
    secure: bool = False
    http_only: bool = False
    same_site: SameSite = SameSite.NONE

    def __post_init__(self) -> None:
        if not isinstance(self.key, str):
            raise ParameterError("cookie key is required")
        if self.value is None:
            self.value = ""
        try:
            self.same_site = SameSite(self.same_site)
        except ValueError as exc:
            raise ParameterError(f"invalid SameSite value: {self.same_site!r}") from exc

    def header_value(self) -> str:
        """Return the Set-Cookie header value as defined by RFC 6265."""
        parts = [f"{self.key}={self.value}"]
        if self.expires is not None:
            parts.append(f"; Expires={self.expires}")
        if self.max_age > 0:
            parts.append(f"; Max-Age={self.max_age}")
        if self.domain is not None:
            parts.append(f"; Domain={self.domain}")
        if self.path is not None:
            parts.append(f"; Path={self.path}")
        if self.secure:
            parts.append("; Secure")
        if self.http_only:
            parts.append("; HttpOnly")
        if self.same_site is SameSite.STRICT:
            parts.append("; SameSite=Strict")
        elif self.same_site is SameSite.LAX:
            parts.append("; SameSite=Lax")
        return "".join(parts)