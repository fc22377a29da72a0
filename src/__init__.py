"""
Store Product List Tool

Modules:
    models   - Data models (Product, ProductStockRecord, GroupedVariant, Store)
    common   - Shared utilities (config loader, logging, store id helpers)
    catalog  - Catalog API client, paginated fetcher and errors
    listing  - Product list grouping, rendering and session state
"""
