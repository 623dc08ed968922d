"""Maps HTTPError exceptions to plain-text responses.

One place decides what an error looks like on the wire, so detail about
*why* a path was rejected stays in the log and out of the body.
"""

import logging

from nestbox.errors import HTTPError
from nestbox.http.request import Request
from nestbox.http.response import Response

logger = logging.getLogger("nestbox.server")


def error_response(exc: HTTPError, request: Request | None = None) -> Response:
    """Build the response for *exc*: plain text, no caching headers."""
    if request is not None:
        logger.debug("%d %s %s", exc.status, request.method, request.path)
    resp = Response(body=exc.detail or f"Error {exc.status}", status=exc.status)
    for name, value in exc.headers:
        resp = resp.with_header(name, value)
    return resp
