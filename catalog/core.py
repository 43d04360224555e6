# catalog/core.py
import logging
import uuid
from pydantic import BaseModel, ValidationError
from typing import Any, Dict, List, Optional, Type, TypeVar

from .errors import StorageUnavailable, ValidationFailed
from .models import CartLine, Product

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

REQUIRED_FIELDS = ("title", "description", "code", "price", "stock", "category")


# Request bodies. Product fields are optional here so a missing field reaches
# the presence check below and comes back as a 400 instead of a 422.
class ProductIn(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    code: Optional[str] = None
    price: Optional[float] = None
    stock: Optional[int] = None
    category: Optional[str] = None
    thumbnails: Optional[List[str]] = None


class ProductUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    code: Optional[str] = None
    price: Optional[float] = None
    status: Optional[bool] = None
    stock: Optional[int] = None
    category: Optional[str] = None
    thumbnails: Optional[List[str]] = None


class CartProductsIn(BaseModel):
    products: List[CartLine]


class QuantityIn(BaseModel):
    quantity: int


def make_product(payload: ProductIn) -> Product:
    # falsy counts as missing, so a price or stock of 0 is rejected too
    if not all(getattr(payload, name) for name in REQUIRED_FIELDS):
        raise ValidationFailed("All fields are required")
    return Product(
        id=str(uuid.uuid4()),
        title=payload.title,
        description=payload.description,
        code=payload.code,
        price=payload.price,
        status=True,
        stock=payload.stock,
        category=payload.category,
        thumbnails=payload.thumbnails or [],
    )


def merge_product(existing: Product, update: ProductUpdate) -> Product:
    """Apply the fields the caller actually sent; everything else is kept."""
    changes = {k: v for k, v in update.model_dump(exclude_unset=True).items() if v is not None}
    return existing.model_copy(update=changes)


def parse_records(model: Type[M], records: List[Any]) -> List[M]:
    """Validate stored records one by one, logging and skipping the bad ones."""
    out = []
    for i, record in enumerate(records):
        try:
            out.append(model.model_validate(record))
        except ValidationError as e:
            logger.warning("skipping invalid %s record #%d in store: %s", model.__name__, i, e)
    return out


def parse_record(model: Type[M], record: Any) -> M:
    try:
        return model.model_validate(record)
    except ValidationError as e:
        logger.error("stored %s record is invalid: %s", model.__name__, e)
        raise StorageUnavailable(f"Stored {model.__name__.lower()} record is invalid") from e


def find_record(records: List[Any], record_id: str) -> Optional[int]:
    for i, record in enumerate(records):
        if isinstance(record, dict) and record.get("id") == record_id:
            return i
    return None


def dump_record(obj: BaseModel) -> Dict[str, Any]:
    return obj.model_dump(by_alias=True)
