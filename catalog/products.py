# catalog/products.py
import logging
import math
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel
from starlette.datastructures import URL

from .core import (
    ProductIn, ProductUpdate, dump_record, find_record, make_product, merge_product, parse_record, parse_records,
)
from .database import collection_lock, read_data, write_data
from .errors import NotFoundError
from .models import Product, ProductPage

# Product repository operations and the listing pipeline.

logger = logging.getLogger(__name__)


class ListingQuery(BaseModel):
    limit: int = 10
    page: int = 1
    sort: Optional[str] = None
    query: Optional[str] = None
    category: Optional[str] = None
    availability: Optional[str] = None


# ---------------------------
# Storage helpers
# ---------------------------
async def load_products(path: Path) -> List[Product]:
    return parse_records(Product, await read_data(path))


def find_product(products: List[Product], product_id: str) -> Optional[Product]:
    for p in products:
        if p.id == product_id:
            return p
    return None


# ---------------------------
# Listing pipeline
# ---------------------------
def paginate_products(products: List[Product], q: ListingQuery) -> ProductPage:
    limit = max(q.limit, 1)
    page = max(q.page, 1)

    out = list(products)
    if q.category:
        wanted = q.category.lower()
        out = [p for p in out if p.category.lower() == wanted]
    if q.availability:
        is_available = q.availability.lower() == "true"
        out = [p for p in out if p.status == is_available]
    if q.query:
        term = q.query.lower()
        out = [p for p in out if term in p.title.lower()]
    if q.sort in ("asc", "desc"):
        out.sort(key=lambda p: p.price, reverse=q.sort == "desc")

    total_pages = math.ceil(len(out) / limit)
    has_prev = page > 1
    has_next = page < total_pages
    return ProductPage(
        payload=out[(page - 1) * limit:page * limit],
        total_pages=total_pages,
        prev_page=page - 1 if has_prev else None,
        next_page=page + 1 if has_next else None,
        page=page,
        has_prev_page=has_prev,
        has_next_page=has_next,
    )


def add_page_links(result: ProductPage, url: URL, limit: int) -> ProductPage:
    """Fill prev/next links by re-using ``url`` with the page number swapped."""
    limit = max(limit, 1)
    if result.has_prev_page:
        result.prev_link = str(url.include_query_params(limit=limit, page=result.prev_page))
    if result.has_next_page:
        result.next_link = str(url.include_query_params(limit=limit, page=result.next_page))
    return result


async def list_products(path: Path, q: ListingQuery) -> ProductPage:
    return paginate_products(await load_products(path), q)


# ---------------------------
# Repository operations
# ---------------------------
# Mutations edit the raw record list so records they don't touch are written
# back exactly as they were read.
async def get_product(path: Path, product_id: str) -> Product:
    p = find_product(await load_products(path), product_id)
    if not p:
        raise NotFoundError("Product not found")
    return p


async def create_product(path: Path, payload: ProductIn) -> Product:
    product = make_product(payload)
    async with collection_lock(path):
        records = await read_data(path)
        records.append(dump_record(product))
        await write_data(path, records)
    logger.info("created product %s (%s)", product.id, product.code)
    return product


async def update_product(path: Path, product_id: str, update: ProductUpdate) -> Product:
    async with collection_lock(path):
        records = await read_data(path)
        i = find_record(records, product_id)
        if i is None:
            raise NotFoundError("Product not found")
        product = merge_product(parse_record(Product, records[i]), update)
        records[i] = dump_record(product)
        await write_data(path, records)
    logger.info("updated product %s", product_id)
    return product


async def delete_product(path: Path, product_id: str) -> None:
    async with collection_lock(path):
        records = await read_data(path)
        i = find_record(records, product_id)
        if i is None:
            raise NotFoundError("Product not found")
        del records[i]
        await write_data(path, records)
    logger.info("deleted product %s", product_id)
