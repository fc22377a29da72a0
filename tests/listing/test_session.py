"""Tests for src/listing/session.py"""

from unittest.mock import MagicMock

import pytest

from src.catalog import ApiError, CatalogFetcher, TransportError, ValidationError
from src.listing import ListingSession


@pytest.fixture
def api():
    return MagicMock()


@pytest.fixture
def session(api):
    return ListingSession(CatalogFetcher(api), store_id=3, store_name="Centro")


class TestRefresh:
    def test_successful_refresh(self, session, api, make_item, make_page):
        api.list_store_products.return_value = make_page([
            make_item(flavor="Mint", item_id=1),
            make_item(flavor="Menta", item_id=2),
        ])

        assert session.refresh() is True

        assert session.error is None
        assert session.loading is False
        assert len(session.records) == 2
        assert list(session.grouped) == ["X"]
        assert "🔴 *A - R$10,00*\n- Menta\n- Mint\n" in session.text
        assert "Frete grátis para Centro" in session.text

    def test_malformed_response_clears_previous_data(self, session, api, make_item, make_page):
        api.list_store_products.return_value = make_page([make_item()])
        session.refresh()
        assert session.grouped

        api.list_store_products.return_value = {"meta": {}}
        assert session.refresh() is False

        assert session.grouped == {}
        assert session.records == []
        assert session.text == ""
        assert "Unexpected response format" in session.error

    def test_transport_error_surfaces_message(self, session, api):
        api.list_store_products.side_effect = TransportError("Network error or server unavailable")

        assert session.refresh() is False
        assert session.error == "Network error or server unavailable"
        assert session.loading is False

    def test_no_store_selected(self, api):
        session = ListingSession(CatalogFetcher(api))
        assert session.refresh() is False
        assert session.error == "No store selected"
        api.list_store_products.assert_not_called()

    def test_error_cleared_on_next_success(self, session, api, make_item, make_page):
        api.list_store_products.side_effect = [TransportError("down"), make_page([make_item()])]
        session.refresh()
        assert session.error == "down"

        assert session.refresh() is True
        assert session.error is None

    def test_set_store(self, session, api, make_page):
        api.list_store_products.return_value = make_page([])
        session.set_store("9", "Praia")
        session.refresh()

        assert api.list_store_products.call_args.args[0] == 9
        assert "Frete grátis para Praia" in session.text

    def test_http_error_keeps_server_message(self, session, api):
        api.list_store_products.side_effect = ApiError("Store 3 is archived", 404)

        assert session.refresh() is False
        assert session.error == "Store 3 is archived"

    def test_server_error_keeps_server_message(self, session, api):
        api.list_store_products.side_effect = ApiError("Database unavailable", 500)

        session.refresh()
        assert session.error == "Database unavailable"

    def test_validation_errors_flattened(self, session, api):
        api.list_store_products.side_effect = ValidationError(
            "Invalid", {"per_page": ["Too large"], "page": ["Must be positive"]}
        )

        session.refresh()
        assert session.error == "Too large, Must be positive"

    def test_unexpected_exception_resets_loading(self, session, api):
        api.list_store_products.side_effect = RuntimeError("bug")

        with pytest.raises(RuntimeError):
            session.refresh()

        assert session.loading is False


class TestSingleFlight:
    def test_newer_refresh_supersedes_in_flight_load(self, session, api, make_item, make_page):
        outer_page = make_page([make_item(flavor="Old")], current_page=1, last_page=2)
        inner_page = make_page([make_item(flavor="New")])
        calls = []

        def list_store_products(store_id, page, per_page):
            calls.append(page)
            if len(calls) == 1:
                # A second refresh starts while the first is between pages
                assert session.refresh() is True
                return outer_page
            return inner_page

        api.list_store_products.side_effect = list_store_products

        assert session.refresh() is False

        flavors = [r.product.flavor for r in session.records]
        assert flavors == ["New"]
        assert "- Old" not in session.text

    def test_stale_error_is_discarded(self, session, api, make_item, make_page):
        def list_store_products(store_id, page, per_page):
            if api.list_store_products.call_count == 1:
                api.list_store_products.side_effect = None
                api.list_store_products.return_value = make_page([make_item(flavor="New")])
                assert session.refresh() is True
                raise TransportError("late failure")
            raise AssertionError("unreachable")

        api.list_store_products.side_effect = list_store_products

        assert session.refresh() is False
        assert session.error is None
        assert [r.product.flavor for r in session.records] == ["New"]


class TestSubscribe:
    def test_listener_notified(self, session, api, make_page):
        api.list_store_products.return_value = make_page([])
        seen = []
        session.subscribe(lambda s: seen.append(s.text))

        session.refresh()

        assert len(seen) == 1
        assert seen[0] == session.text

    def test_unsubscribe(self, session, api, make_page):
        api.list_store_products.return_value = make_page([])
        listener = MagicMock()
        unsubscribe = session.subscribe(listener)
        unsubscribe()

        session.refresh()

        listener.assert_not_called()


class TestCopyToClipboard:
    def test_writes_rendered_text(self, session, api, make_item, make_page):
        api.list_store_products.return_value = make_page([make_item()])
        session.refresh()
        writer = MagicMock()

        assert session.copy_to_clipboard(writer) is True
        writer.assert_called_once_with(session.text)
        assert session.clipboard_error is None

    def test_failure_is_non_fatal(self, session, api, make_item, make_page):
        api.list_store_products.return_value = make_page([make_item()])
        session.refresh()
        grouped, text = session.grouped, session.text

        writer = MagicMock(side_effect=RuntimeError("no display"))
        assert session.copy_to_clipboard(writer) is False

        assert "no display" in session.clipboard_error
        assert session.error is None
        assert session.grouped is grouped
        assert session.text == text

    def test_no_clipboard_configured(self, session):
        assert session.copy_to_clipboard() is False
        assert session.clipboard_error == "No clipboard available"

    def test_uses_configured_clipboard(self, api, make_page):
        writer = MagicMock()
        session = ListingSession(CatalogFetcher(api), store_id=1, clipboard=writer)
        api.list_store_products.return_value = make_page([])
        session.refresh()

        assert session.copy_to_clipboard() is True
        writer.assert_called_once()
