"""
Catalog API Client

REST client for the store catalog service (stores, products and
per-store product stock). Handles authentication headers, query
encoding and error mapping. Requests are never retried; a failure
aborts the caller's operation.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ..common.constants import DEFAULT_BASE_URL
from .errors import ApiError, TransportError, UnexpectedResponseFormat, ValidationError

logger = logging.getLogger(__name__)


def build_query_params(params: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """
    Build query parameters, dropping empty values.

    None and blank strings are dropped. Booleans become "1"/"0", which
    every backend validator accepts.
    """
    if not params:
        return {}

    query = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        if isinstance(value, bool):
            query[key] = "1" if value else "0"
        else:
            query[key] = str(value)
    return query


def normalize_array_response(payload: Any) -> List[Any]:
    """Extract a list from `[...]`, `{"data": [...]}` or `{"data": {"data": [...]}}`."""
    if isinstance(payload, list):
        return payload

    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and isinstance(data.get("data"), list):
            return data["data"]

    return []


class CatalogAPIClient:
    """
    Client for the catalog REST API.

    Usage:
        with CatalogAPIClient(base_url="https://api.example.com/api/v1", token="...") as client:
            page = client.list_store_products(3, page=1, per_page=100)
            store = client.get_store(3)

    List endpoints return the raw `{"data": [...], "meta": {...}}` envelope.
    Single-resource endpoints return the unwrapped resource.
    """

    SUPPORTED_METHODS = {"GET", "POST", "PUT", "DELETE"}

    def __init__(self, base_url: str = DEFAULT_BASE_URL, token: Optional[str] = None, timeout: int = 30):
        """
        Initialize the API client.

        Args:
            base_url: API root, e.g. "http://localhost:8000/api/v1"
            token: Bearer token (optional)
            timeout: Per-request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self.session = requests.Session()
        self.session.headers.update({
            "Accept": "application/json",
            "Content-Type": "application/json",
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def request(
        self,
        method: str,
        path: str,
        data: Optional[Dict] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Make a REST API request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Path below the base URL (e.g., "/stores/3/products")
            data: JSON body for POST/PUT
            params: Query parameters (see build_query_params)

        Returns:
            Decoded JSON response

        Raises:
            ValueError: Unsupported HTTP method
            ValidationError: HTTP 422 with field errors
            ApiError: Any other HTTP error status
            TransportError: Network failure or timeout
            UnexpectedResponseFormat: Success response that isn't JSON
        """
        if method not in self.SUPPORTED_METHODS:
            raise ValueError(f"Unsupported method: {method}")

        url = f"{self.base_url}/{path.lstrip('/')}"

        try:
            response = self.session.request(
                method,
                url,
                params=build_query_params(params),
                json=data,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.error("Request timeout: %s %s", method, path)
            raise TransportError(f"Request timed out: {path}") from e
        except requests.exceptions.RequestException as e:
            logger.error("Request failed: %s", e)
            raise TransportError(f"Network error or server unavailable: {e}") from e

        if response.status_code >= 400:
            self._raise_for_error(response)

        try:
            return response.json()
        except ValueError as e:
            logger.error("Non-JSON response from %s %s", method, path)
            raise UnexpectedResponseFormat() from e

    def _raise_for_error(self, response: requests.Response) -> None:
        status = response.status_code
        try:
            body = response.json()
        except ValueError:
            logger.error("API Error %d: %s", status, response.text[:200])
            raise ApiError(f"Request failed with status {status}", status)

        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or ""
        errors = body.get("errors")
        if not isinstance(errors, dict):
            errors = None

        logger.error("API Error %d: %s", status, message or response.text[:200])

        if status == 422 and errors:
            raise ValidationError(message or "Validation failed", errors)

        defaults = {401: "Unauthorized", 403: "Forbidden", 409: "Conflict"}
        raise ApiError(message or defaults.get(status, "Request failed"), status, errors)

    @staticmethod
    def unwrap(payload: Any) -> Any:
        """Return `payload["data"]` for single-resource envelopes without pagination meta."""
        if isinstance(payload, dict) and "data" in payload and "meta" not in payload:
            return payload["data"]
        return payload

    # ── Stores ────────────────────────────────────────────────────────────────

    def list_stores(self, **params) -> Any:
        return self.request("GET", "/stores", params=params)

    def get_store(self, store_id: int) -> Any:
        return self.unwrap(self.request("GET", f"/stores/{store_id}"))

    def create_store(self, data: Dict) -> Any:
        return self.unwrap(self.request("POST", "/stores", data=data))

    def update_store(self, store_id: int, data: Dict) -> Any:
        return self.unwrap(self.request("PUT", f"/stores/{store_id}", data=data))

    def delete_store(self, store_id: int) -> Any:
        return self.request("DELETE", f"/stores/{store_id}")

    # ── Products ──────────────────────────────────────────────────────────────

    def list_products(self, **params) -> Any:
        return self.request("GET", "/products", params=params)

    def get_product(self, product_id: int) -> Any:
        return self.unwrap(self.request("GET", f"/products/{product_id}"))

    def create_product(self, data: Dict) -> Any:
        return self.unwrap(self.request("POST", "/products", data=data))

    def update_product(self, product_id: int, data: Dict) -> Any:
        return self.unwrap(self.request("PUT", f"/products/{product_id}", data=data))

    def delete_product(self, product_id: int) -> Any:
        return self.request("DELETE", f"/products/{product_id}")

    # ── Store products (inventory) ────────────────────────────────────────────

    def list_store_products(self, store_id: int, page: int = 1, per_page: int = 100, **params) -> Any:
        """
        List one page of a store's products.

        Returns:
            Raw envelope: {"data": [...], "meta": {"current_page": .., "last_page": ..}}
        """
        query = {"page": page, "per_page": per_page}
        query.update(params)
        return self.request("GET", f"/stores/{store_id}/products", params=query)

    def get_store_product(self, store_id: int, store_product_id: int) -> Any:
        return self.unwrap(self.request("GET", f"/stores/{store_id}/products/{store_product_id}"))

    def create_store_product(self, store_id: int, data: Dict) -> Any:
        return self.unwrap(self.request("POST", f"/stores/{store_id}/products", data=data))

    def update_store_product(self, store_id: int, store_product_id: int, data: Dict) -> Any:
        return self.unwrap(
            self.request("PUT", f"/stores/{store_id}/products/{store_product_id}", data=data)
        )

    def delete_store_product(self, store_id: int, store_product_id: int) -> Any:
        return self.request("DELETE", f"/stores/{store_id}/products/{store_product_id}")

    def test_connection(self) -> bool:
        """
        Test API connection by listing one store.

        Returns:
            True if the API answered with a list envelope
        """
        try:
            result = self.list_stores(page=1, per_page=1)
        except (TransportError, UnexpectedResponseFormat):
            return False
        if isinstance(result, dict) and "data" in result:
            logger.info("Connected to: %s", self.base_url)
            return True
        return False
