"""``nestbox serve``: collect a directory at startup and serve it.

Handy for previewing exactly what a generated module would serve.
"""

import argparse
import sys

from nestbox.collector import collect
from nestbox.errors import CollectionError, ConfigurationError
from nestbox.service import ResourceFiles


def build_service(args: argparse.Namespace) -> ResourceFiles:
    """Collect ``args.directory`` and configure a service from the flags."""
    files = ResourceFiles(args.prefix, collect(args.directory))
    if args.no_index:
        files = files.do_not_resolve_index()
    if args.spa:
        files = files.fallback_not_found_to_root()
    return files


def run_serve(args: argparse.Namespace) -> None:
    """Start a pounce server for the collected directory."""
    try:
        files = build_service(args)
    except CollectionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from nestbox.server.dev import run_dev_server

    try:
        run_dev_server(files.asgi(), args.host, args.port)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
