"""
Data models for the store catalog.

This module contains pure data classes with no business logic.
"""

from .store_product import (
    CatalogPage,
    GroupedVariant,
    Product,
    ProductStockRecord,
    Store,
)

__all__ = ['Product', 'ProductStockRecord', 'CatalogPage', 'GroupedVariant', 'Store']
