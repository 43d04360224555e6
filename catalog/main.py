# catalog/main.py
import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from . import carts, products
from .config import Settings, get_settings
from .core import CartProductsIn, ProductIn, ProductUpdate, QuantityIn
from .errors import CatalogError
from .products import ListingQuery

logger = logging.getLogger(__name__)

app = FastAPI(title="catalog (flat JSON file store)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


# ---------------------------
# Error handlers
# ---------------------------
@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"message": "Internal Server Error"})
    logger.info("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/products")
async def list_products(request: Request, q: ListingQuery = Depends(),
                        settings: Settings = Depends(get_settings)):
    result = await products.list_products(settings.products_path, q)
    return products.add_page_links(result, request.url, q.limit)


@app.get("/api/products/{pid}")
async def get_product(pid: str, settings: Settings = Depends(get_settings)):
    return await products.get_product(settings.products_path, pid)


@app.post("/api/products", status_code=201)
async def create_product(payload: ProductIn, settings: Settings = Depends(get_settings)):
    return await products.create_product(settings.products_path, payload)


@app.put("/api/products/{pid}")
async def update_product(pid: str, payload: ProductUpdate, settings: Settings = Depends(get_settings)):
    return await products.update_product(settings.products_path, pid, payload)


@app.delete("/api/products/{pid}")
async def delete_product(pid: str, settings: Settings = Depends(get_settings)):
    await products.delete_product(settings.products_path, pid)
    return {"message": "Product deleted successfully"}


# ---------------------------
# Cart endpoints
# ---------------------------
@app.get("/api/carts/{cid}")
async def get_cart(cid: str, settings: Settings = Depends(get_settings)):
    cart = await carts.get_cart(settings.carts_path, cid)
    return await carts.populate_cart(cart, settings.products_path)


@app.put("/api/carts/{cid}")
async def replace_cart_products(cid: str, payload: CartProductsIn, settings: Settings = Depends(get_settings)):
    return await carts.replace_products(settings.carts_path, cid, payload.products)


@app.put("/api/carts/{cid}/products/{pid}")
async def set_cart_quantity(cid: str, pid: str, payload: QuantityIn, settings: Settings = Depends(get_settings)):
    return await carts.set_quantity(settings.carts_path, cid, pid, payload.quantity)


@app.delete("/api/carts/{cid}/products/{pid}")
async def remove_cart_product(cid: str, pid: str, settings: Settings = Depends(get_settings)):
    await carts.remove_product(settings.carts_path, cid, pid)
    return {"message": "Product removed from cart successfully"}


@app.delete("/api/carts/{cid}")
async def delete_cart(cid: str, settings: Settings = Depends(get_settings)):
    await carts.delete_cart(settings.carts_path, cid)
    return {"message": "Cart deleted successfully"}


# ---------------------------
# HTML views
# ---------------------------
@app.get("/products", response_class=HTMLResponse)
async def products_page(request: Request, q: ListingQuery = Depends(),
                        cid: Optional[str] = None, settings: Settings = Depends(get_settings)):
    try:
        result = await products.list_products(settings.products_path, q)
        products.add_page_links(result, request.url, q.limit)
    except Exception:
        logger.exception("error while rendering products page")
        return PlainTextResponse("Internal Server Error", status_code=500)
    return templates.TemplateResponse(request, "products.html", {"page": result, "cart_id": cid})


@app.get("/carts/{cid}", response_class=HTMLResponse)
async def cart_page(request: Request, cid: str, settings: Settings = Depends(get_settings)):
    cart = await carts.get_cart(settings.carts_path, cid)
    populated = await carts.populate_cart(cart, settings.products_path)
    return templates.TemplateResponse(request, "cart.html", {"cart": populated})


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
