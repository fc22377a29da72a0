"""
Catalog service integration.

Modules:
    api_client - REST client for stores, products and store products
    fetcher - Paginated load of a store's eligible products
    errors - Exception hierarchy and user-facing messages
"""

from .api_client import (
    DEFAULT_BASE_URL,
    CatalogAPIClient,
    build_query_params,
    normalize_array_response,
)
from .errors import (
    ApiError,
    CatalogError,
    ClipboardError,
    InvalidStoreError,
    LoadSuperseded,
    TransportError,
    UnexpectedResponseFormat,
    ValidationError,
    load_error_message,
    user_message,
)
from .fetcher import PER_PAGE, CatalogFetcher, parse_page

__all__ = [
    # API Client
    'CatalogAPIClient',
    'DEFAULT_BASE_URL',
    'build_query_params',
    'normalize_array_response',
    # Fetcher
    'CatalogFetcher',
    'PER_PAGE',
    'parse_page',
    # Errors
    'CatalogError',
    'InvalidStoreError',
    'UnexpectedResponseFormat',
    'TransportError',
    'ApiError',
    'ValidationError',
    'ClipboardError',
    'LoadSuperseded',
    'load_error_message',
    'user_message',
]
