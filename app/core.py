from pydantic import BaseModel, StrictInt
from typing import Optional, Dict, Any, List, Sequence, Union

from .models import CatalogDocument, Category, Product

class ProductIn(BaseModel):
    name: str
    price: Union[int, float]
    description: str
    categories: List[StrictInt] = []

class ProductUpdate(BaseModel):
    name: Optional[str] = None
    price: Optional[Union[int, float]] = None
    description: Optional[str] = None
    categories: Optional[List[StrictInt]] = None

class CategoryIn(BaseModel):
    name: str

class CategoryUpdate(BaseModel):
    name: Optional[str] = None

def changed_fields(payload: BaseModel) -> Dict[str, Any]:
    # Unset and null fields leave the stored value alone.
    return payload.model_dump(exclude_unset=True, exclude_none=True)

def _next_id(items: Sequence[Any]) -> int:
    return max((item.id for item in items), default=0) + 1

def _missing_categories(doc: CatalogDocument, category_ids: List[int]) -> List[int]:
    known = {c.id for c in doc.categories}
    return [cid for cid in category_ids if cid not in known]

def _make_product(doc: CatalogDocument, p: ProductIn) -> Product:
    return Product(
        id=_next_id(doc.products),
        name=p.name,
        price=p.price,
        description=p.description,
        categories=list(p.categories),
    )

def _make_category(doc: CatalogDocument, c: CategoryIn) -> Category:
    return Category(id=_next_id(doc.categories), name=c.name)
