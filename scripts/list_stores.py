#!/usr/bin/env python3
"""
List the stores known to the catalog API, to find a --store-id.

Usage:
    python3 scripts/list_stores.py
    python3 scripts/list_stores.py --active-only
    python3 scripts/list_stores.py --search centro
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from src.catalog import CatalogAPIClient, CatalogError, normalize_array_response, user_message
from src.common.config_loader import load_catalog_settings
from src.common.log_config import setup_logging
from src.models import Store

load_dotenv()

logger = logging.getLogger(__name__)


def fetch_stores(client: CatalogAPIClient, search: str | None = None,
                 active_only: bool = False) -> list[Store]:
    """Walk every page of /stores (same pagination rule as the product fetch)."""
    stores = []
    page = 1
    while True:
        response = client.list_stores(
            page=page,
            per_page=100,
            search=search,
            is_active=True if active_only else None,
            sort_by='name',
        )
        stores.extend(Store.from_api(item) for item in normalize_array_response(response)
                      if isinstance(item, dict))

        meta = response.get('meta') if isinstance(response, dict) else None
        if not isinstance(meta, dict):
            break
        current_page, last_page = meta.get('current_page'), meta.get('last_page')
        if current_page is None or last_page is None or current_page >= last_page:
            break
        page += 1
    return stores


def main():
    parser = argparse.ArgumentParser(description="List catalog stores")
    parser.add_argument('--search', type=str, help='Filter by name')
    parser.add_argument('--active-only', action='store_true', help='Only active stores')
    parser.add_argument('--base-url', type=str, help='Catalog API base URL')
    parser.add_argument('--token', type=str, help='API bearer token')
    parser.add_argument('--verbose', '-v', action='store_true')
    args = parser.parse_args()

    setup_logging(verbose=args.verbose)
    settings = load_catalog_settings({'base_url': args.base_url, 'token': args.token})

    with CatalogAPIClient(settings['base_url'], settings['token'], settings['timeout']) as client:
        try:
            stores = fetch_stores(client, search=args.search, active_only=args.active_only)
        except CatalogError as e:
            print(f"Error: {user_message(e)}", file=sys.stderr)
            sys.exit(1)

    print(f"{'ID':>6}  {'Active':<6}  Name")
    print("-" * 50)
    for store in stores:
        print(f"{store.id:>6}  {'yes' if store.is_active else 'no':<6}  {store.name}")
    print(f"\nTotal: {len(stores)} stores")


if __name__ == "__main__":
    main()
