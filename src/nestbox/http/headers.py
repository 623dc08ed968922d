"""Case-insensitive view over the raw ASGI request headers.

Stores raw byte pairs from the ASGI scope; decodes on access.
"""

from __future__ import annotations

from collections.abc import Mapping


class Headers:
    """Immutable request headers, looked up by case-insensitive name.

    ``get`` returns the first value sent; ``get_joined`` folds repeated
    list-valued headers (``If-None-Match``) into one comma-separated value.
    """

    __slots__ = ("_raw",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        self._raw = raw

    @classmethod
    def from_dict(cls, headers: Mapping[str, str]) -> Headers:
        """Build headers from a plain ``str -> str`` mapping."""
        return cls(
            tuple(
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in headers.items()
            )
        )

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and bool(self.get_list(key))

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the first value for *key*, or *default* if missing."""
        values = self.get_list(key)
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*, in the order they were sent."""
        key_lower = key.lower().encode("latin-1")
        return [value.decode("latin-1") for name, value in self._raw if name.lower() == key_lower]

    def get_joined(self, key: str) -> str | None:
        """Return all values for *key* joined with ``", "``, or None if absent."""
        values = self.get_list(key)
        if not values:
            return None
        return ", ".join(values)
