"""The serving engine: embedded resources answered over HTTP.

``ResourceFiles`` holds one read-only resource table plus an immutable
``ServeConfig`` and turns requests into responses.  It keeps no
per-request state, so a single instance can be shared by every
concurrent request the host spawns.

Three ways to plug it in:

- ``files.respond(request)`` returns a ``Response`` or ``None`` when
  the request is not handled
- ``await files(request, next)`` as middleware, falling through to
  ``next`` for unhandled requests
- ``files.asgi(app)`` as an ASGI application
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import replace
from typing import TYPE_CHECKING, TypeAlias

from nestbox.conditional import Outcome, entity_tag, evaluate
from nestbox.config import INDEX_HTML, ServeConfig
from nestbox.errors import BadRequest, HTTPError, MethodNotAllowed, NotFound, UriSegmentError
from nestbox.http.request import Request
from nestbox.http.response import Response
from nestbox.resolver import Resolution, ResolutionKind, resolve
from nestbox.resources import Resource, ResourceTable
from nestbox.server.errors import error_response

if TYPE_CHECKING:
    from nestbox._internal.asgi import ASGIApp
    from nestbox.server.app import ResourceFilesApp

logger = logging.getLogger("nestbox.server")

ALLOWED_METHODS = ("GET", "HEAD")

# The next handler in a middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[Response]]


class ResourceFiles:
    """Serves an embedded resource table under a mount prefix.

    Configuration methods return a new ``ResourceFiles`` sharing the
    same table, so a configured service is never mutated in place.

    Usage::

        from myapp.assets import generate

        # Serve the root, resolving "/" to "/index.html"
        files = ResourceFiles("/", generate())

        # Single-page app: unknown routes get index.html
        files = ResourceFiles("/", generate()).fallback_not_found_to_root()

        # Images only, let other handlers take misses
        files = (
            ResourceFiles("/imgs", generate())
            .do_not_resolve_index()
            .skip_when_unmatched()
        )
    """

    __slots__ = ("_config", "_table")

    def __init__(
        self,
        mount_path: str,
        table: ResourceTable,
        *,
        config: ServeConfig | None = None,
    ) -> None:
        self._table = table
        if config is None:
            config = ServeConfig(mount_prefix=mount_path)
        else:
            config = replace(config, mount_prefix=mount_path)
        self._config = config

    @property
    def config(self) -> ServeConfig:
        return self._config

    @property
    def table(self) -> ResourceTable:
        return self._table

    def __repr__(self) -> str:
        return (
            f"ResourceFiles(mount_prefix={self._config.mount_prefix or '/'!r}, "
            f"resources={len(self._table)})"
        )

    # ------------------------------------------------------------------
    # Chainable configuration
    # ------------------------------------------------------------------

    def _with(self, **changes: object) -> ResourceFiles:
        config = replace(self._config, **changes)
        return ResourceFiles(config.mount_prefix or "/", self._table, config=config)

    def do_not_resolve_index(self) -> ResourceFiles:
        """Stop resolving ``.../`` to ``.../index.html``."""
        return self._with(resolve_index=False)

    def fallback_not_found_to(self, path: str) -> ResourceFiles:
        """Serve resource *path* for every unmatched request.

        Useful for single-page applications with client-side routing.
        Takes precedence over ``skip_when_unmatched()``.
        """
        return self._with(not_found_fallback=path)

    def fallback_not_found_to_root(self) -> ResourceFiles:
        """Serve ``index.html`` for every unmatched request."""
        return self.fallback_not_found_to(INDEX_HTML)

    def skip_when_unmatched(self) -> ResourceFiles:
        """Decline unmatched requests instead of answering 404.

        The host then routes them to another handler.  Has no effect
        once a not-found fallback is configured.
        """
        return self._with(guard_mode=True)

    def with_cache_control(self, value: str | None) -> ResourceFiles:
        """Send *value* as ``Cache-Control`` on 200 and 304 responses."""
        return self._with(cache_control=value)

    # ------------------------------------------------------------------
    # Serving
    # ------------------------------------------------------------------

    def respond(self, request: Request) -> Response | None:
        """Answer *request*, or return None when it is not handled.

        Not handled means the path lies outside the mount prefix, or
        guard mode is on, no fallback is configured, and nothing matched.
        """
        config = self._config
        if not config.matches(request.path):
            return None

        try:
            if request.method not in ALLOWED_METHODS:
                raise MethodNotAllowed(ALLOWED_METHODS)
            path = config.strip_prefix(request.path)
            try:
                resolution = resolve(path, self._table, config)
            except UriSegmentError as exc:
                logger.debug("rejected %s %s: %s", request.method, request.path, exc)
                raise BadRequest() from exc

            match resolution:
                case Resolution(resource=Resource() as resource):
                    return self._serve(request, resource)
                case Resolution(kind=ResolutionKind.NOT_HANDLED):
                    return None
                case _:
                    raise NotFound()
        except HTTPError as exc:
            return error_response(exc, request)

    def _serve(self, request: Request, resource: Resource) -> Response:
        """Build the 200 / 304 / 412 response for an existing resource."""
        etag = entity_tag(resource)
        outcome = evaluate(etag, request.if_match, request.if_none_match)

        response = Response(
            status=outcome.value,
            content_type=resource.mime_type,
        ).with_header("ETag", str(etag))
        if self._config.cache_control and outcome is not Outcome.PRECONDITION_FAILED:
            response = response.with_header("Cache-Control", self._config.cache_control)
        if outcome is Outcome.SERVE:
            response = replace(response, body=resource.data)
        return response

    async def __call__(self, request: Request, next: Next) -> Response:
        """Middleware entry point: serve, or fall through to *next*."""
        response = self.respond(request)
        if response is None:
            return await next(request)
        return response

    def asgi(self, app: ASGIApp | None = None) -> ResourceFilesApp:
        """Wrap this service as an ASGI 3 application.

        Requests it does not handle are passed to *app*; without one
        they are answered with a plain 404.
        """
        from nestbox.server.app import ResourceFilesApp

        return ResourceFilesApp(self, app)
