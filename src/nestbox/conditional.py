"""Conditional-request evaluation (``If-Match`` / ``If-None-Match``).

Decides, for a resource that exists, whether to send the body, answer
``304 Not Modified``, or answer ``412 Precondition Failed``.
"""

from enum import Enum

from nestbox.http.etag import ANY, EntityTag, ETagCondition
from nestbox.resources import Resource


class Outcome(Enum):
    """What to send for a resolved resource."""

    SERVE = 200
    NOT_MODIFIED = 304
    PRECONDITION_FAILED = 412


def entity_tag(resource: Resource) -> EntityTag:
    """Strong entity tag built from the content length and mtime.

    Formatted as a hexadecimal pair, e.g. ``"c:6092a080"``.
    """
    return EntityTag.strong(f"{len(resource.data):x}:{resource.modified:x}")


def any_match(etag: EntityTag, if_match: ETagCondition | None) -> bool:
    """True when ``If-Match`` is absent, ``*``, or strong-matches *etag*."""
    if if_match is None or if_match is ANY:
        return True
    return any(item.strong_eq(etag) for item in if_match)


def none_match(etag: EntityTag, if_none_match: ETagCondition | None) -> bool:
    """True when ``If-None-Match`` does not cover *etag*.

    ``*`` covers every existing resource; a tag list covers *etag* when
    any member weak-matches it.
    """
    if if_none_match is None:
        return True
    if if_none_match is ANY:
        return False
    return not any(item.weak_eq(etag) for item in if_none_match)


def evaluate(
    etag: EntityTag,
    if_match: ETagCondition | None = None,
    if_none_match: ETagCondition | None = None,
) -> Outcome:
    """Apply conditional-GET precedence: 412 over 304 over 200."""
    if not any_match(etag, if_match):
        return Outcome.PRECONDITION_FAILED
    if not none_match(etag, if_none_match):
        return Outcome.NOT_MODIFIED
    return Outcome.SERVE
