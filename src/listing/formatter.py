"""
Product List Formatter

Renders grouped variants into the plain-text promotional list that is
shown on screen and pasted into messaging apps.

Output for one variant:

    🔴 *Ignite V15 - R$89,90*
    - Menta
    - Uva

"""

from typing import Dict, List, Optional

from ..common.constants import (
    CURRENCY_SYMBOL,
    DEFAULT_STORE_NAME,
    FLAVOR_MARKER,
    LIST_TITLE,
    LOYALTY_LINE,
    SHIPPING_LINE,
    VARIANT_MARKER,
)
from ..models import GroupedVariant
from .aggregator import parse_price


def format_price(sale_price: str) -> str:
    """Format a price with two decimals and a decimal comma: "12.5" -> "12,50"."""
    return f"{parse_price(sale_price):.2f}".replace(".", ",")


def render_header(store_name: Optional[str] = None) -> List[str]:
    name = store_name.strip() if store_name and store_name.strip() else DEFAULT_STORE_NAME
    return [
        LIST_TITLE,
        "",
        "",
        LOYALTY_LINE,
        "",
        SHIPPING_LINE.format(store_name=name),
        "",
        "",
    ]


def render_variant(variant: GroupedVariant) -> List[str]:
    lines = [f"{VARIANT_MARKER} *{variant.name} - {CURRENCY_SYMBOL}{format_price(variant.sale_price)}*"]
    for flavor in sorted(variant.flavors):
        lines.append(f"{FLAVOR_MARKER} {flavor}")
    lines.append("")
    return lines


def render_product_list(
    grouped: Dict[str, List[GroupedVariant]],
    store_name: Optional[str] = None,
) -> str:
    """
    Render the full product list document.

    Args:
        grouped: Output of group_products (brand order is preserved)
        store_name: Store shown in the free-shipping line

    Returns:
        The document, lines joined with "\\n". Identical input always
        yields identical text.
    """
    lines = render_header(store_name)
    for variants in grouped.values():
        for variant in variants:
            lines.extend(render_variant(variant))
    return "\n".join(lines)
