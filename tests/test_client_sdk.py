# tests/test_client_sdk.py
from catalog_sdk.client import CatalogClient


def _sdk(client):
    return CatalogClient(base_url="http://testserver", session=client)


def test_product_lifecycle_through_sdk(client):
    c = _sdk(client)
    created = c.create_product("Lamp", "desk lamp", "L-1", 25.5, 3, "home", ["lamp.png"])
    assert created["status"] is True

    page = c.list_products(category="HOME", availability=True, sort="asc", limit=5)
    assert [p["id"] for p in page["payload"]] == [created["id"]]

    assert c.get_product(created["id"]) == created
    updated = c.update_product(created["id"], stock=10)
    assert updated["stock"] == 10
    assert updated["thumbnails"] == ["lamp.png"]

    assert c.delete_product(created["id"]) == {"message": "Product deleted successfully"}
    assert c.list_products()["payload"] == []


def test_cart_calls_through_sdk(client, seed):
    seed(products=[], carts=[{"id": "c1", "products": [{"productId": "a", "quantity": 1}]}])
    c = _sdk(client)
    assert c.set_cart_quantity("c1", "a", 4)["products"] == [{"productId": "a", "quantity": 4}]
    cart = c.replace_cart_products("c1", [{"productId": "b", "quantity": 2}])
    assert cart["products"] == [{"productId": "b", "quantity": 2}]
    assert c.get_cart("c1")["products"][0]["product"] is None
    assert c.remove_from_cart("c1", "b") == {"message": "Product removed from cart successfully"}
    # missing cart comes back as the 404 body instead of raising
    assert c.remove_from_cart("nope", "b") == {"message": "Cart not found"}
    assert c.delete_cart("c1") == {"message": "Cart deleted successfully"}
