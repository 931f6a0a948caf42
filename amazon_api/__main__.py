#!/usr/bin/env python3
"""
Product Advertising API CLI

Signs and sends a single request, then prints the decoded response as JSON.
Credentials come from AMAZON_ACCESS_KEY, AMAZON_SECRET_KEY and
AMAZON_ASSOCIATE_TAG (environment or .env).

Usage:
    python -m amazon_api search "algorithms" --index Books --page 2
    python -m amazon_api lookup 0679722769 --response-group Images,ItemAttributes
    python -m amazon_api browse 1000
    python -m amazon_api search "algorithms" --url-only
"""
import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from amazon_api.client import ProductAdvertisingClient
from amazon_api.config import Settings
from amazon_api.exceptions import ProductAPIError
from amazon_api.operations import (
    BROWSE_NODE_LOOKUP,
    DEFAULT_BROWSE_NODE_RESPONSE_GROUP,
    DEFAULT_LOOKUP_RESPONSE_GROUP,
    DEFAULT_SEARCH_RESPONSE_GROUP,
    ITEM_LOOKUP,
    ITEM_SEARCH,
    browse_node_lookup_params,
    item_lookup_params,
    item_search_params,
)

logger = logging.getLogger("amazon_api")


def setup_logging(level: str = "INFO", verbose: bool = False):
    """Configure logging based on verbosity."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m amazon_api",
        description="Send a signed Product Advertising API request",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s search algorithms --index Books     # ItemSearch in Books
  %(prog)s lookup 0679722769                   # ItemLookup by ASIN
  %(prog)s lookup 9780262033848 --id-type ISBN --index Books
  %(prog)s browse 1000                         # BrowseNodeLookup
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--url-only",
        action="store_true",
        help="Print the signed URL instead of sending the request",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with an error when the service marks the request invalid",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="ItemSearch by keywords")
    search.add_argument("keywords", help="Search keywords")
    search.add_argument("--index", default="All", help="Search index / category (default: All)")
    search.add_argument("--page", default="1", help="1-indexed result page (default: 1)")
    search.add_argument(
        "--response-group",
        default=",".join(DEFAULT_SEARCH_RESPONSE_GROUP),
        help="Comma-separated response groups",
    )

    lookup = subparsers.add_parser("lookup", help="ItemLookup by identifier")
    lookup.add_argument("item_id", help="Item identifier(s), comma-separated")
    lookup.add_argument("--id-type", default="ASIN", help="ASIN, ISBN, EAN, UPC or SKU (default: ASIN)")
    lookup.add_argument("--index", default=None, help="Search index (required for non-ASIN id types)")
    lookup.add_argument(
        "--response-group",
        default=",".join(DEFAULT_LOOKUP_RESPONSE_GROUP),
        help="Comma-separated response groups",
    )

    browse = subparsers.add_parser("browse", help="BrowseNodeLookup")
    browse.add_argument("browse_node_id", help="Browse node id")
    browse.add_argument(
        "--response-group",
        default=",".join(DEFAULT_BROWSE_NODE_RESPONSE_GROUP),
        help="Comma-separated response groups",
    )
    return parser


def request_for(args: argparse.Namespace):
    """Map parsed arguments to (operation, params)."""
    if args.command == "search":
        return ITEM_SEARCH, item_search_params(args.keywords, args.index, args.page, args.response_group)
    if args.command == "lookup":
        return ITEM_LOOKUP, item_lookup_params(
            args.item_id, args.id_type, args.response_group, search_index=args.index
        )
    return BROWSE_NODE_LOOKUP, browse_node_lookup_params(args.browse_node_id, args.response_group)


async def run(args: argparse.Namespace, client: ProductAdvertisingClient) -> int:
    operation, params = request_for(args)

    if args.url_only:
        print(client.signed_url(operation, params).url)
        return 0

    if operation == ITEM_SEARCH:
        response = await client.search(args.index, args.keywords, args.page, args.response_group)
    elif operation == ITEM_LOOKUP:
        response = await client.lookup(args.item_id, args.id_type, args.response_group, search_index=args.index)
    else:
        response = await client.browse_node_lookup(args.browse_node_id, args.response_group)

    if args.strict:
        response.raise_for_validity()
    elif not response.is_valid:
        logger.warning(f"Service marked the {operation} request invalid")

    print(response.model_dump_json(indent=2))
    return 0


def main(argv=None):
    load_dotenv()
    args = build_parser().parse_args(argv)

    settings = Settings()
    setup_logging(settings.log_level, verbose=args.verbose)

    try:
        client = ProductAdvertisingClient(settings.to_api_config())
        exit_code = asyncio.run(run(args, client))
    except (ProductAPIError, ValueError) as e:
        logger.error(f"{type(e).__name__}: {e}")
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
