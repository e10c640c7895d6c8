"""
Command line entry point for feed generation.

Usage:
    # Print feed to stdout
    python3 generate_feed.py

    # Write feed to a file
    python3 generate_feed.py --output output/google_feed.csv

    # Serve the feed at http://127.0.0.1:8000/feed
    python3 generate_feed.py --serve --port 8000

SETUP:
    Set environment variables (or put them in .env):
    - SHOPIFY_HOST_NAME: Shop domain (e.g., "my-store.myshopify.com")
    - SHOPIFY_ADMIN_ACCESS_TOKEN: Admin API access token
"""

import argparse
import logging
import sys
from typing import List, Optional

from dotenv import load_dotenv

from .common.config_loader import ConfigurationError, load_settings
from .common.log_config import setup_logging
from .feed.generator import MerchantFeedGenerator
from .server import serve
from .shopify.api_client import ShopifyAPIError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a Google Merchant Center CSV feed from a Shopify catalog",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--output", "-o",
        help="Write feed to this file (default: stdout)",
    )
    parser.add_argument(
        "--config",
        default="feed_settings.yaml",
        help="Feed settings YAML (name in config/ or path, default: feed_settings.yaml)",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve the feed over HTTP instead of generating once",
    )
    parser.add_argument("--host", default="127.0.0.1", help="Bind address for --serve")
    parser.add_argument("--port", type=int, default=8000, help="Port for --serve")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only log warnings and errors")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(verbose=args.verbose, quiet=args.quiet)
    load_dotenv()

    if args.serve:
        serve(args.host, args.port, config_file=args.config)
        return 0

    try:
        settings = load_settings(config_file=args.config)
        with MerchantFeedGenerator.from_settings(settings) as generator:
            if args.output:
                generator.export(args.output)
            else:
                sys.stdout.write(generator.generate())
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except ShopifyAPIError as e:
        logger.error("Feed generation failed: %s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
