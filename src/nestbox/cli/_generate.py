"""``nestbox generate``: write an embeddable resource module."""

import argparse
import fnmatch
import sys
from collections.abc import Callable
from pathlib import Path

from nestbox.codegen import generate_resources
from nestbox.errors import CollectionError, ConfigurationError


def exclude_filter(patterns: list[str]) -> Callable[[Path], bool] | None:
    """Build a collector filter rejecting names that match any of *patterns*."""
    if not patterns:
        return None

    def accept(path: Path) -> bool:
        return not any(fnmatch.fnmatch(path.name, pattern) for pattern in patterns)

    return accept


def run_generate(args: argparse.Namespace) -> None:
    """Collect ``args.directory`` and write ``args.output``."""
    try:
        table = generate_resources(
            args.directory,
            args.output,
            filter=exclude_filter(args.exclude),
            fn_name=args.fn,
            split_by=args.split_by,
        )
    except (CollectionError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"Embedded {len(table)} resources in {args.output} ({args.fn}())")
