"""Generate an importable Python module from a resource table.

The generated module bakes every resource's bytes in as literals and
exposes one constructor function that returns a fresh, read-only table::

    # build step
    generate_resources("./web/dist", "myapp/assets.py")

    # at runtime
    from myapp.assets import generate
    files = ResourceFiles("/", generate())

Output is deterministic: keys are emitted in sorted order, so an
unchanged tree produces a byte-identical module unless a file's mtime
changed.
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

from nestbox.collector import collect
from nestbox.config import BuildConfig, check_split_by
from nestbox.resources import Resource, ResourceTable

logger = logging.getLogger("nestbox.build")

# Bytes per line inside a data literal.
CHUNK_SIZE = 64

MODULE_HEADER = '''\
"""Embedded resources generated by nestbox. Do not edit."""

from nestbox.resources import Resource, freeze_table
'''

SET_FUNCTION = '''

def {name}():
    return [
{entries}    ]
'''

ENTRY = """\
        (
            {key},
            Resource(
                data={data},
                modified={modified},
                mime_type={mime_type},
            ),
        ),
"""

CONSTRUCTOR = '''

def {fn_name}():
    """Return a fresh resource table ({count} resources)."""
    entries = []
{extends}    return freeze_table(entries)
'''


def _bytes_literal(data: bytes) -> str:
    if len(data) <= CHUNK_SIZE:
        return repr(data)
    lines = "".join(
        f"                    {data[i : i + CHUNK_SIZE]!r}\n" for i in range(0, len(data), CHUNK_SIZE)
    )
    return f"(\n{lines}                )"


def _chunks(items: list[tuple[str, Resource]], size: int) -> Iterator[list[tuple[str, Resource]]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


def render_module(
    table: ResourceTable,
    fn_name: str = "generate",
    *,
    split_by: int | None = None,
) -> str:
    """Return Python source that rebuilds *table* when imported.

    With *split_by*, resources are partitioned into helper functions
    of at most that many entries each; the constructor merges them.

    Raises:
        ConfigurationError: If *split_by* is less than one.
    """
    check_split_by(split_by)
    items = sorted(table.items())
    size = split_by if split_by is not None else max(len(items), 1)

    parts = [MODULE_HEADER]
    extends: list[str] = []
    for index, chunk in enumerate(_chunks(items, size)):
        name = f"_{fn_name}_{index}"
        entries = "".join(
            ENTRY.format(
                key=repr(key),
                data=_bytes_literal(resource.data),
                modified=resource.modified,
                mime_type=repr(resource.mime_type),
            )
            for key, resource in chunk
        )
        parts.append(SET_FUNCTION.format(name=name, entries=entries))
        extends.append(f"    entries.extend({name}())\n")

    parts.append(CONSTRUCTOR.format(fn_name=fn_name, count=len(items), extends="".join(extends)))
    return "".join(parts)


def generate_resources(
    resource_dir: str | Path,
    generated_filename: str | Path,
    *,
    filter: Callable[[Path], bool] | None = None,
    fn_name: str = "generate",
    split_by: int | None = None,
) -> ResourceTable:
    """Collect *resource_dir* and write the generated module.

    Returns the collected table so build scripts can inspect it.

    Raises:
        ConfigurationError: If *fn_name* or *split_by* is invalid.
        CollectionError: If the directory cannot be read.  Nothing is
            written in that case.
    """
    config = BuildConfig(
        resource_dir=Path(resource_dir),
        generated_filename=Path(generated_filename),
        generated_fn=fn_name,
        split_by=split_by,
        filter=filter,
    )
    return generate_from_config(config)


def generate_from_config(config: BuildConfig) -> ResourceTable:
    """``generate_resources`` driven by a ``BuildConfig``."""
    table = collect(config.resource_dir, config.filter)
    source = render_module(table, config.generated_fn, split_by=config.split_by)

    target = config.generated_filename
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(source, encoding="utf-8")
    logger.info(
        "wrote %s() with %d resources to %s", config.generated_fn, len(table), target
    )
    return table
