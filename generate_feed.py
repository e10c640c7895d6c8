#!/usr/bin/env python3
"""
Generate the Google Merchant Center feed for the Shopify store.

Usage:
    python3 generate_feed.py [--output output/google_feed.csv] [--serve --port 8000]

See shopping_feed/cli.py for all options.
"""

import sys

from shopping_feed.cli import main

if __name__ == "__main__":
    sys.exit(main())
