# catalog/models.py
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List


class CamelModel(BaseModel):
    # stored and served as camelCase, used as snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StoredModel(CamelModel):
    # keys we don't declare are kept, so rewriting a file never drops them
    model_config = ConfigDict(extra="allow")


class Product(StoredModel):
    id: str
    title: str
    description: str
    code: str
    price: float
    status: bool = True
    stock: int
    category: str
    thumbnails: List[str] = Field(default_factory=list)


class CartLine(StoredModel):
    product_id: str
    quantity: int = 1


class Cart(StoredModel):
    id: str
    products: List[CartLine] = Field(default_factory=list)


class PopulatedLine(CartLine):
    product: Optional[Product] = None


class PopulatedCart(StoredModel):
    id: str
    products: List[PopulatedLine] = Field(default_factory=list)


class ProductPage(CamelModel):
    status: str = "success"
    payload: List[Product]
    total_pages: int
    prev_page: Optional[int] = None
    next_page: Optional[int] = None
    page: int
    has_prev_page: bool
    has_next_page: bool
    prev_link: Optional[str] = None
    next_link: Optional[str] = None
