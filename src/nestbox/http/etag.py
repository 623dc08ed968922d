"""Entity tags and the ``If-Match`` / ``If-None-Match`` header grammar.

A header that does not parse is treated as absent, the same as a
client that never sent it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeAlias

# One list member: optional W/ prefix, a quoted opaque string, then a
# comma or the end of the value.
_MEMBER_RE = re.compile(r'[\s,]*(W/)?"([^"]*)"\s*(?:,|$)')
_EMPTY_TAIL_RE = re.compile(r"[\s,]*$")


@dataclass(frozen=True, slots=True)
class EntityTag:
    """An HTTP entity tag (RFC 7232 section 2.3)."""

    tag: str
    weak: bool = False

    @classmethod
    def strong(cls, tag: str) -> EntityTag:
        return cls(tag=tag, weak=False)

    @classmethod
    def parse(cls, value: str) -> EntityTag | None:
        """Parse a single value such as ``W/"abc"``; None if malformed."""
        tags = parse_etag_list(value)
        if isinstance(tags, tuple) and len(tags) == 1:
            return tags[0]
        return None

    def strong_eq(self, other: EntityTag) -> bool:
        """Strong comparison: neither tag is weak and the values match."""
        return not self.weak and not other.weak and self.tag == other.tag

    def weak_eq(self, other: EntityTag) -> bool:
        """Weak comparison: the values match, weakness ignored."""
        return self.tag == other.tag

    def __str__(self) -> str:
        prefix = "W/" if self.weak else ""
        return f'{prefix}"{self.tag}"'


class _AnyTag:
    """The ``*`` condition: matches any current representation."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ANY"


ANY = _AnyTag()

ETagCondition: TypeAlias = _AnyTag | tuple[EntityTag, ...]


def parse_etag_list(value: str | None) -> ETagCondition | None:
    """Parse an ``If-Match`` / ``If-None-Match`` header value.

    Returns:
        None when the header is absent or malformed, ``ANY`` for ``*``,
        otherwise the non-empty tuple of entity tags.
    """
    if value is None:
        return None
    stripped = value.strip()
    if stripped == "*":
        return ANY

    tags: list[EntityTag] = []
    pos = 0
    while not _EMPTY_TAIL_RE.fullmatch(stripped, pos):
        match = _MEMBER_RE.match(stripped, pos)
        if match is None:
            return None
        tags.append(EntityTag(tag=match.group(2), weak=match.group(1) is not None))
        pos = match.end()
    if not tags:
        return None
    return tuple(tags)
