"""Build-time resource collection.

Walks a directory tree and captures every file's bytes, modification
time, and MIME type into a resource table.  Runs once, single-threaded,
before the table is embedded; nothing here is used at request time.
"""

import logging
import mimetypes
import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TypeAlias

from nestbox.errors import CollectionError
from nestbox.resources import (
    DEFAULT_MIME_TYPE,
    Resource,
    ResourceTable,
    freeze_table,
    is_servable_key,
)

logger = logging.getLogger("nestbox.collect")

EntryFilter: TypeAlias = Callable[[Path], bool]


def guess_mime_type(name: str) -> str:
    """Best-effort MIME type from a file name's extension."""
    content_type, _ = mimetypes.guess_type(name, strict=False)
    return content_type or DEFAULT_MIME_TYPE


def iter_files(root: str | Path, filter: EntryFilter | None = None) -> Iterator[Path]:
    """Yield every file under *root*, depth-first, in sorted name order.

    *filter* is consulted for files and directories alike; a rejected
    directory is not descended into.  Entries whose name starts with a
    dot are never collected, since their keys could not be requested
    safely.

    Raises:
        CollectionError: If a directory cannot be listed.
    """
    directory = Path(root)
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        raise CollectionError(directory, exc.strerror or str(exc)) from exc

    for entry in entries:
        if entry.name.startswith("."):
            continue
        path = Path(entry.path)
        if filter is not None and not filter(path):
            continue
        try:
            is_dir = entry.is_dir()
        except OSError as exc:
            raise CollectionError(path, exc.strerror or str(exc)) from exc
        if is_dir:
            yield from iter_files(path, filter)
        else:
            yield path


def resource_key(root: str | Path, path: Path) -> str:
    """Table key for *path*: relative to *root*, forward slashes."""
    return path.relative_to(root).as_posix()


def load_resource(path: Path) -> Resource:
    """Read one file into a ``Resource``.

    A failing mtime lookup degrades to ``0``; a failing read does not.

    Raises:
        CollectionError: If the file content cannot be read.
    """
    try:
        modified = int(path.stat().st_mtime)
    except (OSError, OverflowError, ValueError):
        modified = 0
    modified = max(modified, 0)

    try:
        data = path.read_bytes()
    except OSError as exc:
        raise CollectionError(path, exc.strerror or str(exc)) from exc

    return Resource(data=data, modified=modified, mime_type=guess_mime_type(path.name))


def collect(root: str | Path, filter: EntryFilter | None = None) -> ResourceTable:
    """Collect every file under *root* into a read-only resource table.

    Keys are paths relative to *root* using forward slashes regardless
    of the host's separator.  Given an unchanged tree the keys, bytes,
    and MIME types are identical across runs.

    Usage::

        table = collect("./web/dist", filter=lambda p: p.suffix != ".map")

    Raises:
        CollectionError: On any I/O failure.  No partial table is returned.
    """
    root = Path(root)
    if not root.is_dir():
        raise CollectionError(root, "not a directory")

    entries: list[tuple[str, Resource]] = []
    total = 0
    for path in iter_files(root, filter):
        key = resource_key(root, path)
        if not is_servable_key(key):
            logger.warning("skipping %s: name cannot be requested safely", key)
            continue
        resource = load_resource(path)
        logger.debug("collected %s (%d bytes, %s)", key, len(resource.data), resource.mime_type)
        entries.append((key, resource))
        total += len(resource.data)

    logger.info("collected %d resources (%d bytes) from %s", len(entries), total, root)
    return freeze_table(entries)
