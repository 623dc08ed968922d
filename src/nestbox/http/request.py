"""Immutable HTTP request.

Only what the serving engine reads: the method, the decoded path, and
the headers.  Resources are read-only, so the body is never consumed.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from nestbox._internal.asgi import Scope
from nestbox.http.etag import ETagCondition, parse_etag_list
from nestbox.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request, frozen at creation."""

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)

    @property
    def if_match(self) -> ETagCondition | None:
        """Parsed ``If-Match`` header, None when absent or malformed."""
        return parse_etag_list(self.headers.get_joined("if-match"))

    @property
    def if_none_match(self) -> ETagCondition | None:
        """Parsed ``If-None-Match`` header, None when absent or malformed."""
        return parse_etag_list(self.headers.get_joined("if-none-match"))

    @classmethod
    def build(
        cls,
        method: str,
        path: str,
        headers: Mapping[str, str] | None = None,
    ) -> Request:
        """Create a Request from plain values (tests, non-ASGI hosts)."""
        return cls(
            method=method.upper(),
            path=path,
            headers=Headers.from_dict(headers or {}),
        )

    @classmethod
    def from_asgi(cls, scope: Scope) -> Request:
        """Create a Request from an ASGI HTTP scope.

        ``scope["path"]`` is already percent-decoded by the server.
        """
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
        )
