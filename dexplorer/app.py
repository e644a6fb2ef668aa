import argparse
import asyncio
import locale
from dataclasses import replace

from .env import load_env

from . import __version__
from .client import CatalogClient
from .config import Settings, load_settings
from .controller import ReactiveController
from .criteria import FilterCriteria
from .errors import InvalidCriteria
from .fetch import FetchOrchestrator
from .logger import get_logger
from .models import EntityRecord
from .normalize import display_name, format_type_label
from .session import ExplorerSession, SessionStatus


def format_record(record: EntityRecord) -> str:
    types = "/".join(format_type_label(t) for t in record.types)
    return (
        f"#{record.id:<5} {display_name(record.name):<24} "
        f"weight={record.weight:<6} height={record.height:<4} {types}"
    )


async def open_session(settings: Settings, criteria: FilterCriteria) -> ExplorerSession:
    """Load the catalog into a fresh session."""
    client = CatalogClient(settings)
    controller = ReactiveController(
        page_size=settings.page_size,
        debounce_seconds=settings.debounce_seconds,
        criteria=criteria,
    )
    session = ExplorerSession(FetchOrchestrator(client, settings), controller)
    try:
        await session.load()
    finally:
        client.close()
    return session


def _use_locale_collation():
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        get_logger().warning("Locale collation unavailable, using the C locale", error=str(e))


def _settings_from_args(args: argparse.Namespace, settings: Settings) -> Settings:
    try:
        if getattr(args, "limit", None) is not None:
            settings = replace(settings, list_limit=args.limit)
        if getattr(args, "page_size", None) is not None:
            settings = replace(settings, page_size=args.page_size)
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}")
    return settings


def _load_or_exit(settings: Settings, criteria: FilterCriteria) -> ExplorerSession:
    session = asyncio.run(open_session(settings, criteria))
    if session.status == SessionStatus.FAILED:
        raise SystemExit(session.status_message())
    return session


def cmd_types(args: argparse.Namespace, settings: Settings) -> None:
    settings = _settings_from_args(args, settings)
    session = _load_or_exit(settings, FilterCriteria())
    types = session.controller.available_types()
    print(f"{len(types)} types across {len(session.controller.store)} entries:")
    for t in types:
        print(f" - {format_type_label(t)} ({t})")


def cmd_search(args: argparse.Namespace, settings: Settings) -> None:
    settings = _settings_from_args(args, settings)
    try:
        criteria = FilterCriteria(
            name_substring=args.name or "",
            weight_range=tuple(args.weight) if args.weight else FilterCriteria().weight_range,
            height_range=tuple(args.height) if args.height else FilterCriteria().height_range,
            type_selector=args.type or "",
        )
    except InvalidCriteria as e:
        raise SystemExit(f"Invalid filters: {e}")

    session = _load_or_exit(settings, criteria)
    controller = session.controller
    controller.set_page_number(args.page)
    page = controller.current_page()

    if not page.items:
        print(session.status_message())
        return
    print(f"Page {page.number} of {page.total_pages} ({page.total_items} results)")
    for record in page.items:
        print(f"  {format_record(record)}")


def main(argv=None):
    # Load .env if present (DEXPLORER_API_BASE, DEXPLORER_LOG_LEVEL, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="dexplorer", description="Catalog explorer with live filters")
    parser.add_argument("--version", action="store_true", help="Show version")

    subparsers = parser.add_subparsers(dest="command")
    typ = subparsers.add_parser("types", help="Load the catalog and list the available types")
    typ.add_argument("--limit", type=int, help="Maximum number of catalog entries to load")
    typ.set_defaults(func=cmd_types)

    srch = subparsers.add_parser("search", help="Load the catalog, filter it and print one page")
    srch.add_argument("--name", help="Case-insensitive substring of the name")
    srch.add_argument("--weight", nargs=2, type=float, metavar=("MIN", "MAX"), help="Inclusive weight range")
    srch.add_argument("--height", nargs=2, type=float, metavar=("MIN", "MAX"), help="Inclusive height range")
    srch.add_argument("--type", help="Only entries carrying this type, e.g. fire")
    srch.add_argument("--page", type=int, default=1, help="1-based page number (clamped to the last page)")
    srch.add_argument("--page-size", type=int, help="Entries per page (default 20)")
    srch.add_argument("--limit", type=int, help="Maximum number of catalog entries to load")
    srch.set_defaults(func=cmd_search)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if not hasattr(args, "func"):
        parser.print_help()
        return

    try:
        settings = load_settings()
    except ValueError as e:
        raise SystemExit(f"Invalid configuration: {e}")

    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)
    _use_locale_collation()
    args.func(args, settings)
    logger.log_metrics_summary()


if __name__ == "__main__":
    main()
