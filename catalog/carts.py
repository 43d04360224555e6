# catalog/carts.py
import logging
from pathlib import Path
from typing import Any, List, Tuple

from .core import dump_record, find_record, parse_record, parse_records
from .database import collection_lock, read_data, write_data
from .errors import NotFoundError
from .models import Cart, CartLine, PopulatedCart, PopulatedLine
from .products import load_products

# Cart lookups, line item mutations and "populate".
# Carts are never created here; they are expected to exist in the carts file.

logger = logging.getLogger(__name__)


async def load_carts(path: Path) -> List[Cart]:
    return parse_records(Cart, await read_data(path))


async def _load_for_update(path: Path, cart_id: str) -> Tuple[List[Any], int, Cart]:
    # callers hold the collection lock
    records = await read_data(path)
    i = find_record(records, cart_id)
    if i is None:
        raise NotFoundError("Cart not found")
    return records, i, parse_record(Cart, records[i])


async def get_cart(path: Path, cart_id: str) -> Cart:
    for c in await load_carts(path):
        if c.id == cart_id:
            return c
    raise NotFoundError("Cart not found")


async def populate_cart(cart: Cart, products_path: Path) -> PopulatedCart:
    """Attach the full product record to every line, keeping line order.

    Lines pointing at a product that no longer exists get ``product=None``.
    """
    by_id = {}
    for p in await load_products(products_path):
        by_id.setdefault(p.id, p)
    lines = [
        PopulatedLine(**line.model_dump(exclude={"product"}), product=by_id.get(line.product_id))
        for line in cart.products
    ]
    return PopulatedCart(**cart.model_dump(exclude={"products"}), products=lines)


async def replace_products(path: Path, cart_id: str, lines: List[CartLine]) -> Cart:
    async with collection_lock(path):
        records, i, cart = await _load_for_update(path, cart_id)
        cart.products = list(lines)
        records[i] = dump_record(cart)
        await write_data(path, records)
    logger.info("replaced products of cart %s (%d lines)", cart_id, len(lines))
    return cart


async def set_quantity(path: Path, cart_id: str, product_id: str, quantity: int) -> Cart:
    async with collection_lock(path):
        records, i, cart = await _load_for_update(path, cart_id)
        # only the first matching line; duplicates are left alone
        line = next((l for l in cart.products if l.product_id == product_id), None)
        if line is None:
            raise NotFoundError("Product not found in cart")
        line.quantity = quantity
        records[i] = dump_record(cart)
        await write_data(path, records)
    logger.info("cart %s: set quantity of %s to %d", cart_id, product_id, quantity)
    return cart


async def remove_product(path: Path, cart_id: str, product_id: str) -> Cart:
    async with collection_lock(path):
        records, i, cart = await _load_for_update(path, cart_id)
        cart.products = [l for l in cart.products if l.product_id != product_id]
        records[i] = dump_record(cart)
        await write_data(path, records)
    logger.info("cart %s: removed product %s", cart_id, product_id)
    return cart


async def delete_cart(path: Path, cart_id: str) -> None:
    async with collection_lock(path):
        records = await read_data(path)
        i = find_record(records, cart_id)
        if i is None:
            raise NotFoundError("Cart not found")
        del records[i]
        await write_data(path, records)
    logger.info("deleted cart %s", cart_id)
