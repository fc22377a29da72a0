"""
Listing Session

Holds the product list state for one store view: the last successful
load, its grouping, the rendered text and a single error slot.

Recomputation is explicit: `refresh()` runs fetch -> group -> render and
then notifies subscribers. Loads are single-flight; a newer refresh
supersedes an older one, whose results are discarded on arrival.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from ..catalog.errors import CatalogError, ClipboardError, LoadSuperseded, load_error_message
from ..catalog.fetcher import CatalogFetcher
from ..models import GroupedVariant, ProductStockRecord
from .aggregator import group_products
from .formatter import render_product_list

logger = logging.getLogger(__name__)

Listener = Callable[["ListingSession"], None]


class ListingSession:
    """
    Product list state for one store.

    Usage::

        session = ListingSession(CatalogFetcher(client), store_id=3, store_name="Centro")
        if session.refresh():
            print(session.text)
        else:
            print(session.error)
        session.copy_to_clipboard(pyperclip.copy)
    """

    def __init__(
        self,
        fetcher: CatalogFetcher,
        store_id: Any = None,
        store_name: Optional[str] = None,
        clipboard: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.fetcher = fetcher
        self.store_id = store_id
        self.store_name = store_name
        self.clipboard = clipboard

        self.records: List[ProductStockRecord] = []
        self.grouped: Dict[str, List[GroupedVariant]] = {}
        self.text: str = ""
        self.error: Optional[str] = None
        self.clipboard_error: Optional[str] = None
        self.loading: bool = False

        self._generation = 0
        self._lock = threading.Lock()
        self._listeners: List[Listener] = []

    # ── Public API ────────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_store(self, store_id: Any, store_name: Optional[str] = None) -> None:
        """Switch store. Takes effect on the next refresh()."""
        with self._lock:
            self.store_id = store_id
            self.store_name = store_name

    def refresh(self) -> bool:
        """
        Run the full fetch + group + render pipeline.

        Returns:
            True if this load completed and its results are now current.
            False on error (see `error`) or when a newer refresh superseded it.
        """
        with self._lock:
            self._generation += 1
            token = self._generation
            store_id = self.store_id
            self.loading = True
            self.error = None

        def is_cancelled() -> bool:
            return token != self._generation

        try:
            records = self.fetcher.fetch_all(store_id, is_cancelled=is_cancelled)
        except LoadSuperseded:
            logger.debug("Discarding superseded load (generation %d)", token)
            return False
        except CatalogError as e:
            return self._fail(token, e)
        finally:
            # Unexpected errors propagate, but must not leave the view loading
            with self._lock:
                if token == self._generation:
                    self.loading = False

        with self._lock:
            if token != self._generation:
                logger.debug("Discarding stale results (generation %d)", token)
                return False
            self.records = records
            self._recompute()
            self.loading = False

        self._notify()
        return True

    def copy_to_clipboard(self, writer: Optional[Callable[[str], None]] = None) -> bool:
        """
        Write the rendered text to the clipboard collaborator.

        Failures only set `clipboard_error`; loaded data is untouched.

        Returns:
            True on success
        """
        writer = writer or self.clipboard
        self.clipboard_error = None

        try:
            if writer is None:
                raise ClipboardError("No clipboard available")
            try:
                writer(self.text)
            except Exception as e:
                raise ClipboardError(f"Could not copy to clipboard: {e}") from e
        except ClipboardError as e:
            logger.warning("%s", e)
            self.clipboard_error = str(e)
            self._notify()
            return False

        logger.info("Copied product list (%d chars) to clipboard", len(self.text))
        return True

    # ── Internals ─────────────────────────────────────────────────────────────

    def _recompute(self) -> None:
        self.grouped = group_products(self.records)
        self.text = render_product_list(self.grouped, self.store_name)

    def _fail(self, token: int, err: CatalogError) -> bool:
        with self._lock:
            if token != self._generation:
                logger.debug("Discarding stale error (generation %d): %s", token, err)
                return False
            logger.error("Failed to load products for store %s: %s", self.store_id, err)
            self.records = []
            self.grouped = {}
            self.text = ""
            self.error = load_error_message(err)
            self.loading = False

        self._notify()
        return False

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
