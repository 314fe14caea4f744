# app/models.py
from pydantic import BaseModel, ConfigDict, StrictInt
from typing import List, Union

class Category(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str

class Product(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    name: str
    price: Union[int, float]
    description: str
    categories: List[StrictInt] = []

class CatalogDocument(BaseModel):
    """The whole persisted unit: every product and every category."""
    model_config = ConfigDict(extra="allow")

    products: List[Product] = []
    categories: List[Category] = []
