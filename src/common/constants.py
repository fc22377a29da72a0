"""
Shared constants for the project.

This module contains application-wide constants that should have a single source of truth.
"""

# Product list template (WhatsApp-style markup: *bold*)
LIST_TITLE = "🔥 *LISTA DE PRODUTOS* 🔥"
LOYALTY_LINE = "💎 Compre e acumule pontos no nosso programa de fidelidade!"
SHIPPING_LINE = "🚚 Frete grátis para {store_name}"
VARIANT_MARKER = "🔴"
FLAVOR_MARKER = "-"
CURRENCY_SYMBOL = "R$"

# Used in the shipping line when the store name is unknown
DEFAULT_STORE_NAME = "toda a região"

# Catalog API root used when neither config nor environment provide one
DEFAULT_BASE_URL = "http://localhost:8000/api/v1"
