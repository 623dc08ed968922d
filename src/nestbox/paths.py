"""Request path sanitizing.

Turns a percent-decoded URI path into a safe, relative resource key.
``..`` pops the previous segment and can never climb above the root;
segments that could leak dotfiles or confuse a filesystem are rejected
with a classified ``UriSegmentError``.
"""

import os

from nestbox.errors import SegmentErrorKind, UriSegmentError

_BAD_START = (".", "*")
_BAD_END = (":", ">", "<")


def sanitize_path(path: str, *, backslash_separator: bool | None = None) -> str:
    """Return *path* as a normalized, forward-slash resource key.

    Segments are processed left to right:

    - ``..`` drops the last accepted segment (a no-op at the root)
    - a segment starting with ``.`` or ``*`` is rejected
    - a segment ending with ``:``, ``>`` or ``<`` is rejected
    - empty segments (``//``) are skipped
    - a segment containing ``\\`` is rejected where backslash is a
      path separator (Windows by default)

    Args:
        path: The decoded request path, with or without a leading slash.
        backslash_separator: Override the platform check for ``\\``.

    Raises:
        UriSegmentError: If a segment breaks one of the rules above.
    """
    if backslash_separator is None:
        backslash_separator = os.sep == "\\"

    accepted: list[str] = []
    for segment in path.split("/"):
        if segment == "..":
            if accepted:
                accepted.pop()
        elif segment.startswith(_BAD_START):
            raise UriSegmentError(SegmentErrorKind.BAD_START, segment[0])
        elif segment.endswith(_BAD_END):
            raise UriSegmentError(SegmentErrorKind.BAD_END, segment[-1])
        elif not segment:
            continue
        elif backslash_separator and "\\" in segment:
            raise UriSegmentError(SegmentErrorKind.BAD_CHAR, "\\")
        else:
            accepted.append(segment)
    return "/".join(accepted)
