"""Percent-decoding and path splitting for request URLs."""

from __future__ import annotations

from typing import Optional

URL_SEPARATOR = "/"


def _from_hex(char: int) -> int:
    if 0x30 <= char <= 0x39:
        return char - 0x30
    lowered = char + 0x20 if 0x41 <= char <= 0x5A else char
    return lowered - 0x61 + 10


def url_decode(text: Optional[str]) -> Optional[str]:
    """Decode ``%XX`` escapes and ``+`` signs in ``text``.

    A ``%`` that is not followed by two more characters is dropped.
    Bytes that are not valid UTF-8 are kept as surrogate escapes, so
    ``result.encode("utf-8", "surrogateescape")`` gives the raw bytes back.
    """
    if text is None:
        return None
    raw = text.encode("utf-8", "surrogateescape")
    decoded = bytearray()
    pos = 0
    while pos < len(raw):
        char = raw[pos]
        if char == 0x25:  # '%'
            if pos + 2 < len(raw) + 0 and pos + 2 <= len(raw) - 1:
                high, low = raw[pos + 1], raw[pos + 2]
                decoded.append(((_from_hex(high) << 4) | _from_hex(low)) & 0xFF)
                pos += 2
        elif char == 0x2B:  # '+'
            decoded.append(0x20)
        else:
            decoded.append(char)
        pos += 1
    return decoded.decode("utf-8", "surrogateescape")


def _words(text: Optional[str]) -> list[str]:
    if text is None:
        return []
    return [word for word in text.split(URL_SEPARATOR) if word]


def split_url(prefix: Optional[str], url: Optional[str]) -> list[str]:
    """Split ``prefix`` and ``url`` into their non-empty path segments.

    Segments of ``url`` that start with ``?`` are left out; segments of
    ``prefix`` are all kept.
    """
    parts = _words(prefix)
    parts.extend(word for word in _words(url) if not word.startswith("?"))
    return parts