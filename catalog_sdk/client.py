# catalog_sdk/client.py
import requests
import httpx
from typing import Any, Dict, List, Optional


class CatalogClient:
    def __init__(self, base_url: str = "http://localhost:8080", timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    @staticmethod
    def _listing_params(limit: Optional[int] = None, page: Optional[int] = None, sort: Optional[str] = None,
                        query: Optional[str] = None, category: Optional[str] = None,
                        availability: Optional[bool] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if limit is not None:
            params["limit"] = limit
        if page is not None:
            params["page"] = page
        if sort:
            params["sort"] = sort
        if query:
            params["query"] = query
        if category:
            params["category"] = category
        if availability is not None:
            params["availability"] = "true" if availability else "false"
        return params

    # Products
    def list_products(self, **filters) -> Dict[str, Any]:
        r = self.session.get(f"{self.base_url}/api/products", params=self._listing_params(**filters), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.get(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, title: str, description: str, code: str, price: float, stock: int,
                       category: str, thumbnails: Optional[List[str]] = None) -> Dict[str, Any]:
        payload = {
            "title": title, "description": description, "code": code,
            "price": price, "stock": stock, "category": category,
        }
        if thumbnails is not None:
            payload["thumbnails"] = thumbnails
        r = self.session.post(f"{self.base_url}/api/products", json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, **fields) -> Dict[str, Any]:
        r = self.session.put(f"{self.base_url}/api/products/{product_id}", json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.delete(f"{self.base_url}/api/products/{product_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Carts
    def get_cart(self, cart_id: str) -> Dict[str, Any]:
        r = self.session.get(f"{self.base_url}/api/carts/{cart_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def replace_cart_products(self, cart_id: str, products: List[Dict[str, Any]]) -> Dict[str, Any]:
        r = self.session.put(f"{self.base_url}/api/carts/{cart_id}", json={"products": products}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def set_cart_quantity(self, cart_id: str, product_id: str, quantity: int) -> Dict[str, Any]:
        r = self.session.put(f"{self.base_url}/api/carts/{cart_id}/products/{product_id}",
                             json={"quantity": int(quantity)}, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def remove_from_cart(self, cart_id: str, product_id: str) -> Dict[str, Any]:
        r = self.session.delete(f"{self.base_url}/api/carts/{cart_id}/products/{product_id}", timeout=self.timeout)
        # a missing cart comes back as a 404 body the caller can inspect
        if r.status_code == 404:
            return r.json()
        r.raise_for_status()
        return r.json()

    def delete_cart(self, cart_id: str) -> Dict[str, Any]:
        r = self.session.delete(f"{self.base_url}/api/carts/{cart_id}", timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async listing (example)
    async def list_products_async(self, **filters) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.get(f"{self.base_url}/api/products", params=self._listing_params(**filters))
            r.raise_for_status()
            return r.json()
