"""Embedded resources and the read-only table that holds them.

A ``Resource`` is one file captured at build time: its bytes, its
modification time, and its MIME type.  A resource table maps relative,
forward-slash keys to resources and is frozen once built, so every
concurrent request can read it without locking.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeAlias

from nestbox.errors import UriSegmentError
from nestbox.paths import sanitize_path

ResourceTable: TypeAlias = Mapping[str, "Resource"]

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True, slots=True)
class Resource:
    """A single embedded file.

    ``modified`` is whole seconds since the epoch, ``0`` when the
    build could not read the file's mtime.
    """

    data: bytes
    modified: int = 0
    mime_type: str = DEFAULT_MIME_TYPE


def is_servable_key(key: str) -> bool:
    """Whether *key* is already in the form the request sanitizer produces.

    Rules out absolute keys, ``..``, dot- and star-leading segments,
    segments ending in ``:``, ``<`` or ``>``, and empty segments.
    """
    try:
        return bool(key) and sanitize_path(key, backslash_separator=False) == key
    except UriSegmentError:
        return False


def freeze_table(
    entries: Mapping[str, Resource] | Iterable[tuple[str, Resource]],
) -> ResourceTable:
    """Return a read-only resource table built from *entries*.

    Raises:
        ValueError: If a key is not a servable relative path
            (see ``is_servable_key``).
    """
    items = entries.items() if isinstance(entries, Mapping) else entries
    table: dict[str, Resource] = {}
    for key, resource in items:
        if not is_servable_key(key):
            msg = f"Resource key must be a normalized relative path, got {key!r}"
            raise ValueError(msg)
        table[key] = resource
    return MappingProxyType(table)
