"""CLI entry point for imagesift."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from imagesift.config.settings import Settings

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="imagesift",
        description="imagesift — Search public media APIs for openly licensed images",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"imagesift {_get_version()}",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    search_parser = subparsers.add_parser("search", help="Search a provider for images")
    search_parser.add_argument("term", help="Search term")
    search_parser.add_argument(
        "--provider",
        type=str,
        default=None,
        help="Provider id (default from config)",
    )
    search_parser.add_argument(
        "--pages",
        "-n",
        type=int,
        default=None,
        help="Maximum number of pages to fetch (overrides config)",
    )
    search_parser.add_argument(
        "--language",
        type=str,
        default="en",
        help="Language code passed to the provider",
    )
    search_parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )
    search_parser.add_argument(
        "--include-raw",
        action="store_true",
        help="Include provider metadata in JSON output",
    )

    subparsers.add_parser("providers", help="List available providers")

    args = parser.parse_args(argv)

    from imagesift.config.settings import Settings
    from imagesift.observability.logging import setup_logging

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level
    elif settings.debug:
        settings.observability.log_level = "debug"

    setup_logging(settings.observability)

    if args.command == "providers":
        exit_code = asyncio.run(_list_providers(settings))
    else:
        exit_code = asyncio.run(_run_search(settings, args))

    if exit_code:
        sys.exit(exit_code)


async def _run_search(settings: Settings, args: argparse.Namespace) -> int:
    """Fetch pages for ``args.term`` one after another and print the images."""
    from imagesift.providers import create_registry
    from imagesift.providers.base.registry import ProviderNotFoundError

    registry = create_registry()
    provider_id = args.provider or settings.search.default_provider
    max_pages = args.pages or settings.search.max_pages

    try:
        provider = await registry.initialize_provider(provider_id, **settings.provider_kwargs(provider_id))
    except ProviderNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        result = await provider.search_all(args.term, language=args.language, max_pages=max_pages)
    finally:
        await registry.shutdown_all()

    logger.info("Fetched %d images from %s for %r", len(result.images), provider_id, args.term)

    if args.json:
        exclude = None if args.include_raw else {"images": {"__all__": {"raw"}}}
        print(result.model_dump_json(by_alias=True, exclude=exclude, indent=2))
    else:
        for image in result.images:
            print(
                f"{image.web_site_url}\t{image.width}x{image.height}\t"
                f"{image.license}\t{image.creator or '-'}"
            )

    if result.error:
        print(f"Error: {result.error}", file=sys.stderr)
        return 1
    return 0


async def _list_providers(settings: Settings) -> int:
    """Print the identity of every built-in provider."""
    from imagesift.providers import create_registry

    registry = create_registry()
    try:
        for provider_id in registry.registered_providers:
            await registry.initialize_provider(provider_id, **settings.provider_kwargs(provider_id))
        for identity in registry.identities():
            print(f"{identity.id}\t{identity.label}\t{identity.logo}")
    finally:
        await registry.shutdown_all()
    return 0


def _get_version() -> str:
    """Get the package version."""
    try:
        from imagesift import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
