"""
Catalog Fetcher

Loads every eligible product of a store by walking the paginated
store-products endpoint until the last page.
"""

import logging
from typing import Any, Callable, List, Optional

from ..common.store_id import to_positive_int
from ..models import CatalogPage, ProductStockRecord
from .api_client import CatalogAPIClient
from .errors import InvalidStoreError, LoadSuperseded, UnexpectedResponseFormat

logger = logging.getLogger(__name__)

PER_PAGE = 100


class CatalogFetcher:
    """
    Fetches the complete set of eligible stock records for a store.

    Pages are requested one at a time; page N+1 is only requested after
    page N arrived. There are no retries: any failure aborts the load and
    the partial buffer is dropped.

    Usage:
        fetcher = CatalogFetcher(client)
        records = fetcher.fetch_all(store_id=3)
    """

    def __init__(self, client: CatalogAPIClient, per_page: int = PER_PAGE):
        self.client = client
        self.per_page = per_page

    def fetch_page(self, store_id: int, page: int) -> CatalogPage:
        """
        Fetch and parse a single page.

        Raises:
            UnexpectedResponseFormat: Response is not an object or has no `data`
        """
        response = self.client.list_store_products(store_id, page=page, per_page=self.per_page)
        return parse_page(response, page)

    def fetch_all(
        self,
        store_id: Any,
        is_cancelled: Optional[Callable[[], bool]] = None,
    ) -> List[ProductStockRecord]:
        """
        Fetch every eligible record of a store.

        Args:
            store_id: Store identifier (int or numeric string)
            is_cancelled: Checked before each page request; when it returns
                True the load stops with LoadSuperseded

        Returns:
            Fresh list of eligible records, in API order

        Raises:
            InvalidStoreError: store_id is not a positive integer
            UnexpectedResponseFormat: A page broke the response contract
            TransportError: Network or HTTP failure
            LoadSuperseded: is_cancelled reported True
        """
        sid = to_positive_int(store_id)
        if sid is None:
            raise InvalidStoreError()

        records: List[ProductStockRecord] = []
        dropped = 0
        page_number = 1

        while True:
            if is_cancelled is not None and is_cancelled():
                logger.debug("Load for store %d superseded at page %d", sid, page_number)
                raise LoadSuperseded(f"Load for store {sid} was superseded")

            page = self.fetch_page(sid, page_number)

            for record in page.items:
                if record.is_eligible:
                    records.append(record)
                else:
                    dropped += 1

            logger.debug("Store %d page %d: %d items", sid, page_number, len(page.items))

            if page.current_page is None or page.total_pages is None:
                logger.warning(
                    "Store %d: response has no pagination metadata, "
                    "stopping after page %d (results may be truncated)",
                    sid, page_number,
                )
                break

            # A server that ignores `page` would otherwise be walked forever
            if page.current_page != page_number:
                logger.warning(
                    "Store %d: requested page %d but got page %d of %d, stopping",
                    sid, page_number, page.current_page, page.total_pages,
                )
                break

            if not page.has_next:
                break

            page_number += 1

        logger.info("Store %d: %d eligible products (%d dropped) from %d page(s)",
                    sid, len(records), dropped, page_number)
        return records


def parse_page(response: Any, page_number: int) -> CatalogPage:
    """
    Validate and parse a raw list envelope into a CatalogPage.

    A `data` value that isn't a list counts as an empty page, and items
    that aren't objects are skipped.
    """
    if not isinstance(response, dict) or "data" not in response:
        logger.error("Unexpected response format on page %d: %s",
                     page_number, type(response).__name__)
        raise UnexpectedResponseFormat()

    data = response.get("data")
    if not isinstance(data, list):
        data = []

    items = [ProductStockRecord.from_api(item) for item in data if isinstance(item, dict)]

    meta = response.get("meta")
    current_page = last_page = None
    if isinstance(meta, dict):
        current_page = _meta_int(meta.get("current_page"))
        last_page = _meta_int(meta.get("last_page"))

    return CatalogPage(
        items=items,
        page_number=page_number,
        total_pages=last_page,
        current_page=current_page,
    )


def _meta_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    return None
