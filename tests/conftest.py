"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest

from src.catalog import CatalogAPIClient
from src.models import Product, ProductStockRecord


def make_record(brand="X", name="A", flavor="Mint", sale_price="10.00",
                stock=5, active=True, with_product=True, store_id=1):
    """Build a ProductStockRecord with sensible defaults."""
    product = Product(brand=brand, name=name, flavor=flavor) if with_product else None
    return ProductStockRecord(
        store_id=store_id,
        product=product,
        is_active=active,
        stock_quantity=stock,
        cost_price="5.00",
        sale_price=sale_price,
    )


def make_item(brand="X", name="A", flavor="Mint", sale_price="10.00",
              stock=5, active=True, item_id=1):
    """Build a raw store-product item as the API returns it."""
    return {
        "id": item_id,
        "store_id": 1,
        "product_id": item_id,
        "cost_price": "5.00",
        "sale_price": sale_price,
        "stock_quantity": stock,
        "min_stock_level": 2,
        "is_active": active,
        "product": {"id": item_id, "brand": brand, "name": name, "flavor": flavor},
    }


def make_page(items, current_page=1, last_page=1):
    """Build a paginated envelope."""
    return {
        "data": items,
        "meta": {
            "current_page": current_page,
            "last_page": last_page,
            "per_page": 100,
            "total": len(items),
        },
    }


def mock_response(status_code=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def client():
    """Client pointed at a fake API root."""
    c = CatalogAPIClient(base_url="https://api.example.com/api/v1/", token="tok_test")
    yield c
    c.close()


@pytest.fixture
def mint_and_menta():
    """Two flavors of the same variant."""
    return [
        make_record(flavor="Mint", stock=5),
        make_record(flavor="Menta", stock=2),
    ]


@pytest.fixture(name="make_record")
def make_record_fixture():
    return make_record


@pytest.fixture(name="make_item")
def make_item_fixture():
    return make_item


@pytest.fixture(name="make_page")
def make_page_fixture():
    return make_page


@pytest.fixture(name="mock_response")
def mock_response_fixture():
    return mock_response
