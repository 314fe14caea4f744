import logging
from typing import List

from .core import (
    ProductIn, ProductUpdate, CategoryIn, CategoryUpdate,
    changed_fields, _missing_categories, _make_product, _make_category
)
from .database import JSONStorage
from .exceptions import NotFound, ReferenceNotFound
from .models import Category, Product

logger = logging.getLogger(__name__)


class CatalogStore:
    """Products and categories kept consistent with each other.

    Holds no state of its own: every call loads the document from storage,
    and every mutation rewrites it while holding the file's write lock. A
    failed validation or a failed write leaves the stored document as it was.
    """

    def __init__(self, storage: JSONStorage):
        self.storage = storage

    # Listing
    async def list_products(self) -> List[Product]:
        doc = await self.storage.load()
        return doc.products

    async def list_categories(self) -> List[Category]:
        doc = await self.storage.load()
        return doc.categories

    # Products
    async def create_product(self, payload: ProductIn) -> Product:
        async with self.storage.lock:
            doc = await self.storage.load()
            missing = _missing_categories(doc, payload.categories)
            if missing:
                raise ReferenceNotFound(missing)

            product = _make_product(doc, payload)
            doc.products.append(product)
            await self.storage.save(doc)

        logger.info("created product %s", product.id)
        return product

    async def update_product(self, product_id: int, payload: ProductUpdate) -> Product:
        updates = changed_fields(payload)
        async with self.storage.lock:
            doc = await self.storage.load()
            product = next((p for p in doc.products if p.id == product_id), None)
            if product is None:
                raise NotFound("Product not found")

            if "categories" in updates:
                missing = _missing_categories(doc, updates["categories"])
                if missing:
                    raise ReferenceNotFound(missing)

            for field, value in updates.items():
                setattr(product, field, value)
            await self.storage.save(doc)

        logger.info("updated product %s (%s)", product_id, ", ".join(updates) or "no changes")
        return product

    async def delete_product(self, product_id: int) -> None:
        async with self.storage.lock:
            doc = await self.storage.load()
            before = len(doc.products)
            doc.products = [p for p in doc.products if p.id != product_id]
            await self.storage.save(doc)

        if len(doc.products) != before:
            logger.info("deleted product %s", product_id)

    # Categories
    async def create_category(self, payload: CategoryIn) -> Category:
        async with self.storage.lock:
            doc = await self.storage.load()
            category = _make_category(doc, payload)
            doc.categories.append(category)
            await self.storage.save(doc)

        logger.info("created category %s", category.id)
        return category

    async def update_category(self, category_id: int, payload: CategoryUpdate) -> Category:
        updates = changed_fields(payload)
        async with self.storage.lock:
            doc = await self.storage.load()
            category = next((c for c in doc.categories if c.id == category_id), None)
            if category is None:
                raise NotFound("Category not found")

            if "name" in updates:
                category.name = updates["name"]
            await self.storage.save(doc)

        logger.info("updated category %s", category_id)
        return category

    async def delete_category(self, category_id: int) -> None:
        async with self.storage.lock:
            doc = await self.storage.load()
            doc.categories = [c for c in doc.categories if c.id != category_id]

            # cascade runs even when the category itself was already gone
            touched = 0
            for p in doc.products:
                if category_id in p.categories:
                    p.categories = [cid for cid in p.categories if cid != category_id]
                    touched += 1
            await self.storage.save(doc)

        logger.info("deleted category %s, detached from %d product(s)", category_id, touched)
