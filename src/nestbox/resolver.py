"""Request path resolution against a resource table.

A pure decision function: given the path left after the mount prefix,
the table, and the serving configuration, pick the resource to serve
or report why there is none.  Precedence:

1. exact key lookup
2. ``<path>index.html`` when the path is empty or ends with ``/``
   (and index resolution is on)
3. sanitize the path; an unsafe segment fails with ``UriSegmentError``
4. sanitized key lookup, then the not-found fallback key
5. unresolved: not handled in guard mode without a fallback, else
   not found
"""

from dataclasses import dataclass
from enum import Enum

from nestbox.config import INDEX_HTML, ServeConfig
from nestbox.paths import sanitize_path
from nestbox.resources import Resource, ResourceTable


class ResolutionKind(Enum):
    FOUND = "found"
    FALLBACK = "fallback"
    NOT_FOUND = "not_found"
    NOT_HANDLED = "not_handled"


@dataclass(frozen=True, slots=True)
class Resolution:
    """Outcome of resolving one request path.

    ``key`` and ``resource`` are set for ``FOUND`` and ``FALLBACK``.
    """

    kind: ResolutionKind
    key: str | None = None
    resource: Resource | None = None

    @property
    def resolved(self) -> bool:
        return self.resource is not None


_NOT_FOUND = Resolution(ResolutionKind.NOT_FOUND)
_NOT_HANDLED = Resolution(ResolutionKind.NOT_HANDLED)


def resolve(path: str, table: ResourceTable, config: ServeConfig) -> Resolution:
    """Resolve *path* (mount prefix already stripped) to a resource.

    Raises:
        UriSegmentError: If the path is not found directly and contains
            an unsafe segment.
    """
    resource = table.get(path)
    if resource is not None:
        return Resolution(ResolutionKind.FOUND, path, resource)

    if config.resolve_index and (not path or path.endswith("/")):
        index_key = path + INDEX_HTML
        resource = table.get(index_key)
        if resource is not None:
            return Resolution(ResolutionKind.FOUND, index_key, resource)

    key = sanitize_path(path)
    resource = table.get(key)
    if resource is not None:
        return Resolution(ResolutionKind.FOUND, key, resource)

    fallback = config.not_found_fallback
    if fallback is not None:
        resource = table.get(fallback)
        if resource is not None:
            return Resolution(ResolutionKind.FALLBACK, fallback, resource)
        return _NOT_FOUND

    if config.skips_unmatched:
        return _NOT_HANDLED
    return _NOT_FOUND
