"""An ordered string-keyed map whose values may be text or binary."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Optional, Union

from .errors import NotFoundError, ParameterError

BytesLike = Union[bytes, bytearray, memoryview]


def _to_bytes(value: Union[str, BytesLike]) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise ParameterError(f"unsupported value type: {type(value).__name__}")


def _to_text(value: Optional[bytes]) -> Optional[str]:
    if value is None:
        return None
    return value.decode("utf-8", errors="replace")


class UMap:
    """Ordered mapping of unique string keys to optional byte values.

    Keys are compared case sensitively unless a ``*_case`` method is used.
    Values are stored as bytes; text accessors decode them as UTF-8.
    """

    def __init__(self) -> None:
        self._keys: list[str] = []
        self._values: list[Optional[bytes]] = []

    # -- internal helpers -------------------------------------------------

    @staticmethod
    def _check_key(key: object) -> str:
        if not isinstance(key, str) or not key:
            raise ParameterError("key must be a non-empty string")
        return key

    def _index(self, key: object) -> Optional[int]:
        if not isinstance(key, str):
            return None
        try:
            return self._keys.index(key)
        except ValueError:
            return None

    def _index_case(self, key: object) -> Optional[int]:
        if not isinstance(key, str):
            return None
        folded = key.casefold()
        return next(
            (pos for pos, existing in enumerate(self._keys) if existing.casefold() == folded),
            None,
        )

    def _remove_where(self, predicate) -> None:
        doomed = [pos for pos, pair in enumerate(zip(self._keys, self._values)) if predicate(*pair)]
        if not doomed:
            raise NotFoundError("no matching entry")
        for pos in reversed(doomed):
            del self._keys[pos]
            del self._values[pos]

    # -- insertion --------------------------------------------------------

    def put(self, key: str, value: Optional[str]) -> None:
        """Set ``key`` to the text ``value``.

        A ``None`` value adds the key with no value, or leaves an
        existing value untouched.
        """
        self._check_key(key)
        pos = self._index(key)
        if value is None:
            if pos is None:
                self._keys.append(key)
                self._values.append(None)
            return
        data = _to_bytes(value)
        if pos is None:
            self._keys.append(key)
            self._values.append(data)
        else:
            self._values[pos] = data

    def put_binary(self, key: str, value: Optional[BytesLike], offset: int = 0) -> None:
        """Write ``value`` into the value of ``key`` starting at ``offset``.

        The stored value grows as needed, never shrinks; gaps are zero filled.
        """
        self._check_key(key)
        if not isinstance(offset, int) or offset < 0:
            raise ParameterError("offset must be a non-negative integer")
        data = b"" if value is None else _to_bytes(value)
        pos = self._index(key)
        if pos is None:
            if value is None:
                self._keys.append(key)
                self._values.append(None)
                return
            self._keys.append(key)
            self._values.append(bytes(offset) + data)
            return
        current = bytearray(self._values[pos] or b"")
        end = offset + len(data)
        if len(current) < end:
            current.extend(bytes(end - len(current)))
        current[offset:end] = data
        self._values[pos] = bytes(current)

    # -- lookup -----------------------------------------------------------

    def get(self, key: str) -> Optional[str]:
        """Return the text value of ``key`` or ``None``."""
        pos = self._index(key)
        return None if pos is None else _to_text(self._values[pos])

    def get_case(self, key: str) -> Optional[str]:
        """Return the text value of ``key`` matched case insensitively."""
        pos = self._index_case(key)
        return None if pos is None else _to_text(self._values[pos])

    def get_binary(self, key: str) -> Optional[bytes]:
        """Return the raw bytes stored for ``key`` or ``None``."""
        pos = self._index(key)
        return None if pos is None else self._values[pos]

    def get_length(self, key: str) -> Optional[int]:
        """Return the byte length of the value of ``key``, ``None`` if absent."""
        pos = self._index(key)
        if pos is None:
            return None
        return len(self._values[pos] or b"")

    def get_case_length(self, key: str) -> Optional[int]:
        """Like :meth:`get_length` with a case-insensitive key match."""
        pos = self._index_case(key)
        if pos is None:
            return None
        return len(self._values[pos] or b"")

    def has_key(self, key: str) -> bool:
        return self._index(key) is not None

    def has_key_case(self, key: str) -> bool:
        return self._index_case(key) is not None

    def has_value(self, value: str) -> bool:
        """True if some value starts with the text ``value``."""
        if value is None:
            return False
        return self.has_value_binary(_to_bytes(value))

    def has_value_binary(self, value: BytesLike) -> bool:
        """True if some value starts with the bytes ``value``."""
        if value is None:
            return False
        prefix = _to_bytes(value)
        return any(stored is not None and stored.startswith(prefix) for stored in self._values)

    def has_value_case(self, value: str) -> bool:
        """True if some value equals ``value`` ignoring case."""
        if value is None:
            return False
        folded = value.casefold()
        return any(
            stored is not None and _to_text(stored).casefold() == folded for stored in self._values
        )

    # -- removal ----------------------------------------------------------

    def remove_from_key(self, key: str) -> None:
        if key is None:
            raise ParameterError("key is required")
        self._remove_where(lambda k, _v: k == key)

    def remove_from_key_case(self, key: str) -> None:
        if key is None:
            raise ParameterError("key is required")
        folded = key.casefold()
        self._remove_where(lambda k, _v: k.casefold() == folded)

    def remove_from_value(self, value: str) -> None:
        """Remove every entry whose value starts with the text ``value``."""
        if value is None:
            raise ParameterError("value is required")
        self.remove_from_value_binary(_to_bytes(value))

    def remove_from_value_binary(self, value: BytesLike) -> None:
        """Remove every entry whose value starts with the bytes ``value``."""
        if value is None:
            raise ParameterError("value is required")
        prefix = _to_bytes(value)
        self._remove_where(lambda _k, v: v is not None and v.startswith(prefix))

    def remove_from_value_case(self, value: str) -> None:
        """Remove every entry whose value equals ``value`` ignoring case."""
        if value is None:
            raise ParameterError("value is required")
        folded = value.casefold()
        self._remove_where(lambda _k, v: v is not None and _to_text(v).casefold() == folded)

    def remove_at(self, index: int) -> None:
        if not isinstance(index, int) or index < 0:
            raise ParameterError("index must be a non-negative integer")
        if index >= len(self._keys):
            raise NotFoundError(f"index {index} out of range")
        del self._keys[index]
        del self._values[index]

    # -- whole-map operations ---------------------------------------------

    def copy(self) -> "UMap":
        duplicate = UMap()
        duplicate._keys = list(self._keys)
        duplicate._values = list(self._values)
        return duplicate

    def merge(self, source: "UMap") -> None:
        """Copy every entry of ``source`` into this map, overwriting values."""
        if source is None:
            raise ParameterError("source is required")
        for key, value in zip(source._keys, source._values):
            pos = self._index(key)
            if pos is None:
                self._keys.append(key)
                self._values.append(value)
            elif value is not None:
                self._values[pos] = value

    def keys(self) -> list[str]:
        return list(self._keys)

    def values(self) -> list[Optional[str]]:
        return [_to_text(value) for value in self._values]

    def items(self) -> list[tuple[str, Optional[str]]]:
        return list(zip(self.keys(), self.values()))

    def clear(self) -> None:
        self._keys.clear()
        self._values.clear()

    def __len__(self) -> int:
        return len(self._keys)

    def __contains__(self, key: object) -> bool:
        return self.has_key(key)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._keys))

    def __repr__(self) -> str:
        return f"UMap({dict(self.items())!r})"