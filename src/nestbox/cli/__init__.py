"""Nestbox CLI: generate embeddable resource modules and preview them.

Entry point registered as ``nestbox`` in ``pyproject.toml``::

    [project.scripts]
    nestbox = "nestbox.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``nestbox`` command."""
    parser = argparse.ArgumentParser(
        prog="nestbox",
        description="Nestbox: embed static web assets and serve them over ASGI.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging verbosity (default: warning)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- nestbox generate -------------------------------------------------
    gen_parser = subparsers.add_parser("generate", help="Write a Python module embedding a directory")
    gen_parser.add_argument("directory", help="Directory to collect")
    gen_parser.add_argument("-o", "--output", required=True, help="Generated module path")
    gen_parser.add_argument("--fn", default="generate", help="Constructor function name")
    gen_parser.add_argument(
        "--split-by",
        type=int,
        default=None,
        help="Put at most N resources in each helper function",
    )
    gen_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="GLOB",
        help="Skip entries whose name matches GLOB (repeatable)",
    )

    # -- nestbox serve ----------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Collect a directory and serve it")
    serve_parser.add_argument("directory", help="Directory to collect")
    serve_parser.add_argument("--prefix", default="/", help="Mount prefix (default: /)")
    serve_parser.add_argument(
        "--spa",
        action="store_true",
        help="Serve index.html for unmatched paths",
    )
    serve_parser.add_argument(
        "--no-index",
        action="store_true",
        help="Do not resolve directory paths to index.html",
    )
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port number")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "generate":
        from nestbox.cli._generate import run_generate

        run_generate(args)
    elif args.command == "serve":
        from nestbox.cli._serve import run_serve

        run_serve(args)
