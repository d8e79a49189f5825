# src/main.py — v2
"""CLI entry point — fetch, show, invalidate, purge commands.

Usage:
    embedlrmi fetch <page_url>
    embedlrmi show <page_url>
    embedlrmi invalidate <page_url>
    embedlrmi purge

Settings come from EMBEDLRMI_* environment variables / .env;
--endpoint and --cache-backend override them.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from embedlrmi.version import __version__

logger = logging.getLogger(__name__)

EXIT_CONFIG_ERROR = 2


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    from embedlrmi.config.settings import ConfigurationError, load_settings

    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        settings = load_settings(**_overrides(args))
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="embedlrmi",
        description=f"embedlrmi v{__version__} — cached LRMI metadata for wiki pages",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--endpoint", default=None,
        help="Repository search endpoint (overrides EMBEDLRMI_ENDPOINT)",
    )
    parser.add_argument(
        "--cache-backend", default=None,
        choices=["memory", "json", "sqlite", "redis"],
        help="Cache backend (overrides EMBEDLRMI_CACHE_BACKEND)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- fetch ---
    p_fetch = subparsers.add_parser(
        "fetch", help="Print nodes[0] of the LRMI metadata as JSON",
    )
    p_fetch.add_argument("url", help="Page URL (rewrite rules are applied)")
    p_fetch.set_defaults(func=_cmd_fetch)

    # --- show ---
    p_show = subparsers.add_parser(
        "show", help="Print the human-readable LRMI view as HTML",
    )
    p_show.add_argument("url", help="Page URL")
    p_show.set_defaults(func=_cmd_show)

    # --- invalidate ---
    p_invalidate = subparsers.add_parser(
        "invalidate", help="Drop the cached metadata for one page",
    )
    p_invalidate.add_argument("url", help="Page URL")
    p_invalidate.set_defaults(func=_cmd_invalidate)

    # --- purge ---
    p_purge = subparsers.add_parser(
        "purge", help="Drop all cached LRMI metadata",
    )
    p_purge.set_defaults(func=_cmd_purge)

    return parser


def _overrides(args: argparse.Namespace) -> dict[str, object]:
    overrides: dict[str, object] = {}
    if args.endpoint:
        overrides["endpoint"] = args.endpoint
    if args.cache_backend:
        overrides["cache_backend"] = args.cache_backend
    return overrides


def _build_service(settings):
    from embedlrmi.api.facade import EmbedLrmi

    return EmbedLrmi.from_settings(settings)


async def _cmd_fetch(args: argparse.Namespace, settings) -> int:
    """Fetch metadata and print the first node."""
    from embedlrmi.api.host import PageContext
    from embedlrmi.core.payload import first_node

    service = _build_service(settings)
    payload = await service.metadata_for(PageContext(full_url=args.url))
    node = first_node(payload)
    if node is None:
        print(f"No LRMI metadata available for {service.canonical_url(args.url)}")
        return 1
    print(json.dumps(node, indent=2, ensure_ascii=False))
    return 0


async def _cmd_show(args: argparse.Namespace, settings) -> int:
    """Render the LRMI view the way the ?action=lrmi page does."""
    from embedlrmi.api.host import BufferedOutput, PageContext

    service = _build_service(settings)
    output = BufferedOutput()
    await service.on_perform_action("lrmi", PageContext(full_url=args.url), output)
    print(output.html)
    return 0


async def _cmd_invalidate(args: argparse.Namespace, settings) -> int:
    """Invalidate the cache entry for one page."""
    from embedlrmi.api.host import PageContext

    service = _build_service(settings)
    await service.on_page_save_complete(PageContext(full_url=args.url))
    print(f"Invalidated {service.canonical_url(args.url)}")
    return 0


async def _cmd_purge(args: argparse.Namespace, settings) -> int:
    """Delete every tracked cache entry."""
    service = _build_service(settings)
    deleted = await service.gateway.purge_all()
    print(f"Purged {deleted} entries")
    return 0


def _setup_logging(settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from embedlrmi.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
