# tests/test_catalog_store.py
import asyncio

import pytest

from app.catalog import CatalogStore
from app.core import ProductIn, ProductUpdate, changed_fields, _next_id
from app.database import JSONStorage
from app.exceptions import CatalogError, NotFound, ReferenceNotFound, StorageWriteError
from app.models import Category

@pytest.fixture
def store(data_file):
    return CatalogStore(JSONStorage(str(data_file)))

def test_next_id_uses_highest_id():
    assert _next_id([]) == 1
    assert _next_id([Category(id=5, name="a"), Category(id=2, name="b")]) == 6

def test_changed_fields_skips_unset_and_null():
    payload = ProductUpdate.model_validate({"price": 2, "name": None})
    assert changed_fields(payload) == {"price": 2}

def test_create_rejects_unknown_category(store):
    with pytest.raises(ReferenceNotFound) as err:
        asyncio.run(store.create_product(ProductIn(name="a", price=1, description="", categories=[3, 1, 4])))
    assert err.value.missing_ids == [3, 4]
    assert asyncio.run(store.list_products()) == []

def test_update_unknown_product(store):
    with pytest.raises(NotFound):
        asyncio.run(store.update_product(1, ProductUpdate(price=1)))

def test_delete_category_preserves_order(store):
    product = asyncio.run(store.create_product(
        ProductIn(name="a", price=1, description="", categories=[2, 1, 2, 1])
    ))
    asyncio.run(store.delete_category(2))
    stored = asyncio.run(store.list_products())
    assert stored[0].id == product.id
    assert stored[0].categories == [1, 1]

def test_error_messages():
    assert CatalogError().message == "Internal error"
    assert StorageWriteError().message == "Failed to write data file"
    assert NotFound("Product not found").status_code == 404
    assert str(ReferenceNotFound([7, 8])) == "Categories not found: 7, 8"
