"""Nestbox exception hierarchy.

Shared by the collector, the resolver, and the serving engine so every
module raises and catches the same types.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class NestboxError(Exception):
    """Base for all nestbox-specific errors."""


class ConfigurationError(NestboxError):
    """Raised when a service or build configuration is invalid."""


# ---------------------------------------------------------------------------
# Request path validation
# ---------------------------------------------------------------------------


class SegmentErrorKind(Enum):
    """Which rule rejected a request path segment."""

    BAD_START = "start"
    BAD_CHAR = "char"
    BAD_END = "end"


@dataclass(frozen=True, slots=True)
class UriSegmentError(NestboxError):
    """A request path segment is unsafe to map onto the resource table.

    ``kind`` names the rule that failed and ``char`` the character that
    triggered it.  Always answered with 400; the character is never
    echoed back to the client.
    """

    kind: SegmentErrorKind
    char: str

    def __str__(self) -> str:
        match self.kind:
            case SegmentErrorKind.BAD_START:
                return f"The segment started with the invalid character {self.char!r}"
            case SegmentErrorKind.BAD_CHAR:
                return f"The segment contained the invalid character {self.char!r}"
            case SegmentErrorKind.BAD_END:
                return f"The segment ended with the invalid character {self.char!r}"


# ---------------------------------------------------------------------------
# Build time
# ---------------------------------------------------------------------------


class CollectionError(NestboxError, OSError):
    """Reading the resource directory failed.

    Fatal at build time: collection stops and no partial table is
    produced.  The underlying ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot collect {self.path}: {reason}")

    def __str__(self) -> str:
        return f"Cannot collect {self.path}: {self.reason}"


class PackageManagerError(NestboxError):
    """An external package-manager command exited unsuccessfully."""

    def __init__(self, command: tuple[str, ...], returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(f"{' '.join(command)!r} exited with status {returncode}")


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class HTTPError(NestboxError):
    """An error that maps directly to an HTTP status code.

    Raised by the serving engine and converted to a plain-text response
    by ``nestbox.server.errors.error_response``.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class BadRequest(HTTPError):  # noqa: N818
    """400: The request path contains an unsafe segment."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(status=400, detail=detail)


class NotFound(HTTPError):  # noqa: N818
    """404: No resource matched the request path."""

    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: Resources are read-only and only answer GET and HEAD.

    Carries an ``Allow`` header listing the accepted methods.
    """

    def __init__(
        self,
        allowed: tuple[str, ...] = ("GET", "HEAD"),
        detail: str = "This resource only supports GET and HEAD.",
    ) -> None:
        super().__init__(
            status=405,
            detail=detail,
            headers=(("Allow", ", ".join(allowed)),),
        )
