"""
Product Aggregator

Groups eligible stock records into brand -> variant -> flavors.

A variant is keyed by (brand, name, sale_price) using the price exactly
as the API sent it, so "10.00" and "10.0" end up in different groups.
Sorting, on the other hand, uses the numeric price.
"""

import unicodedata
from typing import Dict, Iterable, List, Tuple

from ..models import GroupedVariant, ProductStockRecord


def parse_price(value: str) -> float:
    """Parse a decimal-as-text price. Unparseable values count as 0."""
    try:
        price = float(str(value).strip())
    except (TypeError, ValueError):
        return 0.0
    if price != price:  # NaN
        return 0.0
    return price


def locale_sort_key(text: str) -> Tuple[str, str, str]:
    """
    Collation-style key: accents and case are ignored first, then case
    breaks ties (lowercase first), then the raw string.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return (base.casefold(), text.casefold(), text.swapcase())


def _variant_sort_key(variant: GroupedVariant):
    return (locale_sort_key(variant.name), parse_price(variant.sale_price))


def group_products(records: Iterable[ProductStockRecord]) -> Dict[str, List[GroupedVariant]]:
    """
    Group records by brand and variant.

    Ineligible records are filtered again here; callers are not trusted
    to have done it.

    Args:
        records: Stock records, in any order

    Returns:
        Dict of brand -> variants. Brands in ascending string order,
        variants by name (locale-aware) then numeric sale price.
    """
    variants: Dict[Tuple[str, str, str], GroupedVariant] = {}

    for record in records:
        if not record.is_eligible:
            continue

        product = record.product
        key = (product.brand, product.name, record.sale_price)

        variant = variants.get(key)
        if variant is None:
            variant = GroupedVariant(brand=product.brand, name=product.name, sale_price=record.sale_price)
            variants[key] = variant
        variant.flavors.add(product.flavor)

    by_brand: Dict[str, List[GroupedVariant]] = {}
    for variant in variants.values():
        by_brand.setdefault(variant.brand, []).append(variant)

    grouped = {}
    for brand in sorted(by_brand):
        grouped[brand] = sorted(by_brand[brand], key=_variant_sort_key)
    return grouped
