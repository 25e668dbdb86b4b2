# ruff: noqa: T201

from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from plankit.app import (
    archive_plans,
    create_plans,
    dashboard_urls,
    list_prices,
    list_products,
    metadata_fields,
    purge_mirror,
    sync_mirror,
    update_plans,
)
from plankit.config import ConfigurationError, PolarServer, configure_logging, parse_server
from plankit.config.env import optional_env_var

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from plankit.domain.model import MetadataFields, RemotePrice, RemoteProduct

log = logging.getLogger(__name__)

REMOTE_MUTATIONS = frozenset({"create", "update", "archive"})


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile a plan catalog with Polar")
    parser.add_argument(
        "--catalog",
        type=str,
        help="Catalog file (TOML or JSON, defaults to ./plankit.toml)",
    )
    parser.add_argument(
        "--server",
        choices=[server.value for server in PolarServer],
        help="Polar environment (defaults to POLAR_SERVER or sandbox)",
    )
    parser.add_argument(
        "--organization-id",
        type=str,
        help="Polar organization id (defaults to POLAR_ORGANIZATION_ID)",
    )
    parser.add_argument(
        "--database-uri",
        type=str,
        help="Mirror database URI (defaults to DATABASE_URI or the data directory)",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Confirm changes against the production server",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("create", help="Create missing plans as Polar products")
    subparsers.add_parser("update", help="Update existing managed products")
    subparsers.add_parser("archive", help="Archive managed products")
    subparsers.add_parser("sync", help="Mirror managed products and prices into the database")
    subparsers.add_parser("purge", help="Delete all mirrored prices and products")
    subparsers.add_parser("urls", help="Show Polar dashboard links")

    listing = subparsers.add_parser("list", help="List Polar resources")
    list_sub = listing.add_subparsers(dest="list_command", required=True)
    for name in ("products", "prices"):
        item = list_sub.add_parser(name, help=f"List {name}")
        item.add_argument(
            "--all",
            dest="include_all",
            action="store_true",
            help=f"Include {name} not managed by plankit",
        )

    return parser.parse_args(list(argv))


def _check_confirmation(args: argparse.Namespace) -> PolarServer:
    server = parse_server(args.server or optional_env_var("POLAR_SERVER"))
    if server is PolarServer.PRODUCTION and args.command in REMOTE_MUTATIONS and not args.yes:
        raise ConfigurationError(
            f"Refusing to {args.command} on the production server without --yes"
        )
    return server


def _print_products(
    products: list[RemoteProduct],
    fields: MetadataFields,
    *,
    include_all: bool,
) -> None:
    if not products:
        print("No products found.")
        return
    print(f"Found {len(products)} {'' if include_all else 'managed '}products:")
    for product in products:
        print(product.id)
        print(f"  Name: {product.name}")
        print(f"  Archived: {product.is_archived}")
        print(f"  Description: {product.description or 'N/A'}")
        print(f"  Recurring: {'Yes' if product.is_recurring else 'No'}")
        print(f"  Internal ID: {product.metadata.get(fields.product_id_field, 'N/A')}")
        if include_all:
            print(f"  Managed: {'Yes' if fields.is_managed_product(product.metadata) else 'No'}")
        print()


def _print_prices(prices: list[RemotePrice]) -> None:
    if not prices:
        print("No prices found.")
        return
    print(f"Found {len(prices)} prices:")
    for price in prices:
        amount = "N/A" if price.amount is None else f"{price.amount} {price.currency or ''}".strip()
        print(price.id)
        print(f"  Product: {price.product_id}")
        print(f"  Type: {price.amount_type} ({price.price_type or 'N/A'})")
        print(f"  Amount: {amount}")
        print(f"  Interval: {price.recurring_interval or 'N/A'}")
        print(f"  Archived: {price.is_archived}")
        print()


def _run(args: argparse.Namespace, server: PolarServer) -> None:
    remote_options = {
        "catalog_path": args.catalog,
        "server": server,
        "organization_id": args.organization_id,
    }
    if args.command == "create":
        create_plans(**remote_options)
    elif args.command == "update":
        update_plans(**remote_options)
    elif args.command == "archive":
        archive_plans(**remote_options)
    elif args.command == "sync":
        sync_mirror(**remote_options, database_uri=args.database_uri)
    elif args.command == "purge":
        purge_mirror(catalog_path=args.catalog, database_uri=args.database_uri)
    elif args.command == "list" and args.list_command == "products":
        products = list_products(include_all=args.include_all, **remote_options)
        _print_products(products, metadata_fields(args.catalog), include_all=args.include_all)
    elif args.command == "list" and args.list_command == "prices":
        _print_prices(list_prices(include_all=args.include_all, **remote_options))
    elif args.command == "urls":
        print(f"Polar dashboard ({server}):")
        for link in dashboard_urls(server):
            print(f"  {link.name}: {link.url}")
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)
        server = _check_confirmation(parsed_args)
    except (ValueError, ConfigurationError):
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _run(parsed_args, server)
    except Exception:
        log.exception(f"Fatal error during {parsed_args.command} on the {server} server")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    main()
