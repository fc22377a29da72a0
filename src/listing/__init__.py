"""
Product list pipeline.

Modules:
    aggregator - Group eligible records into brand -> variant -> flavors
    formatter - Render grouped variants into the promotional text list
    session - Refresh/copy state holder for one store view
"""

from .aggregator import group_products, locale_sort_key, parse_price
from .formatter import format_price, render_product_list
from .session import ListingSession

__all__ = [
    'group_products',
    'locale_sort_key',
    'parse_price',
    'format_price',
    'render_product_list',
    'ListingSession',
]
