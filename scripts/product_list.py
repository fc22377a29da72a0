#!/usr/bin/env python3
"""
Product List: Generate the promotional product list for a store.

Loads every active, in-stock product of the store, groups it by brand
and variant, and prints the list ready to paste into a messaging app.

Usage:
    # Print the list for store 3
    python3 scripts/product_list.py --store-id 3

    # Override the store name shown in the shipping line
    python3 scripts/product_list.py --store-id 3 --store-name "Centro"

    # Save to a file and copy to the clipboard
    python3 scripts/product_list.py --store-id 3 --output output/lista.txt --copy

Settings (in order of precedence):
    1. --base-url / --token / --store-id / --store-name flags
    2. CATALOG_API_BASE_URL / CATALOG_API_TOKEN / CATALOG_STORE_ID / CATALOG_STORE_NAME
    3. config/catalog.yaml
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import pyperclip
from dotenv import load_dotenv

from src.catalog import CatalogAPIClient, CatalogError, CatalogFetcher
from src.common.config_loader import load_catalog_settings
from src.common.log_config import setup_logging
from src.common.store_id import to_positive_int
from src.listing import ListingSession

load_dotenv()

logger = logging.getLogger(__name__)


def resolve_store_name(client: CatalogAPIClient, store_id) -> str | None:
    """Look up the store's display name; None when it can't be fetched."""
    sid = to_positive_int(store_id)
    if sid is None:
        return None
    try:
        store = client.get_store(sid)
    except CatalogError as e:
        logger.warning("Could not fetch store %d name: %s", sid, e)
        return None
    if isinstance(store, dict):
        return store.get("name") or None
    return None


def main():
    parser = argparse.ArgumentParser(
        description="Generate the promotional product list for a store",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--store-id', '-s', type=str,
                        help='Store ID (default: CATALOG_STORE_ID)')
    parser.add_argument('--store-name', '-n', type=str,
                        help='Store name for the shipping line (default: fetched from the API)')
    parser.add_argument('--base-url', type=str,
                        help='Catalog API base URL')
    parser.add_argument('--token', type=str,
                        help='API bearer token')
    parser.add_argument('--output', '-o', type=str,
                        help='Also write the list to this file')
    parser.add_argument('--copy', '-c', action='store_true',
                        help='Copy the list to the clipboard')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Debug logging')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Only log warnings and errors')

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    settings = load_catalog_settings({
        'base_url': args.base_url,
        'token': args.token,
        'store_id': args.store_id,
        'store_name': args.store_name,
    })

    with CatalogAPIClient(settings['base_url'], settings['token'], settings['timeout']) as client:
        store_name = settings['store_name'] or resolve_store_name(client, settings['store_id'])

        session = ListingSession(
            CatalogFetcher(client),
            store_id=settings['store_id'],
            store_name=store_name,
            clipboard=pyperclip.copy,
        )

        if not session.refresh():
            print(f"Error: {session.error}", file=sys.stderr)
            sys.exit(1)

    print(session.text)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(session.text, encoding='utf-8')
        logger.info("Saved product list to %s", output_path)

    if args.copy and not session.copy_to_clipboard():
        print(f"Warning: {session.clipboard_error}", file=sys.stderr)


if __name__ == "__main__":
    main()
