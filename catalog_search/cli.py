"""
Maintenance CLI.

    catalog-search rebuild-search [--data-dir DIR]
    catalog-search current-index

Progress goes to stdout; failures go to stderr with a non-zero exit status.
"""
import argparse
import asyncio
import logging
import sys
import traceback

from pydantic import ValidationError

from catalog_search.core.config import get_settings
from catalog_search.core.exceptions import RebuildError
from catalog_search.core.log import configure_logging
from catalog_search.services.rebuild import read_current_index, run_rebuild

logger = logging.getLogger(__name__)


def _rebuild_search(args: argparse.Namespace) -> int:
    settings = get_settings()
    print("Starting search index rebuild...")
    try:
        result = asyncio.run(run_rebuild(settings, data_dir=args.data_dir))
    except RebuildError as e:
        print(f"ERROR: search index rebuild failed during {e.stage}: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        return 1
    except Exception as e:
        print(f"ERROR: search index rebuild failed: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        return 1

    counts = " | ".join(f"{kind}: {count}" for kind, count in result.counts.items())
    print(f"OK | index: {result.index_name} | {counts} | total: {result.total}")
    if result.reclaim_error is not None:
        print(f"WARNING: {result.reclaim_error}", file=sys.stderr)
    return 0


def _current_index(args: argparse.Namespace) -> int:
    settings = get_settings()
    try:
        name = asyncio.run(read_current_index(settings))
    except RebuildError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    print(name if name else "No search index is live yet.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="catalog-search", description="Catalog maintenance jobs")
    subparsers = parser.add_subparsers(dest="command", required=True)

    rebuild = subparsers.add_parser(
        "rebuild-search",
        help="Build a new search index from the dataset and make it live",
    )
    rebuild.add_argument("--data-dir", default=None, help="Dataset root (defaults to DATA_DIR)")
    rebuild.set_defaults(handler=_rebuild_search)

    current = subparsers.add_parser("current-index", help="Print the name of the live search index")
    current.set_defaults(handler=_current_index)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"ERROR: invalid configuration: {e}", file=sys.stderr)
        return 1
    configure_logging(settings, stream=sys.stdout)
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
