#!/usr/bin/env python
import os
from catalog_sdk.client import CatalogClient


def main():
    c = CatalogClient(base_url=os.getenv("CATALOG_API_URL", "http://127.0.0.1:8080"))

    # -----------------------------
    # Create products
    # -----------------------------
    print("Creating products...")
    laptop = c.create_product("Laptop", "14 inch ultrabook", "EL-001", 1500, 3, "electronics")
    mouse = c.create_product("Mouse", "wireless mouse", "EL-002", 25, 10, "electronics")
    mug = c.create_product("Mug", "ceramic mug", "HM-001", 8, 40, "home", ["mug.png"])
    print(laptop)
    print(mouse)
    print(mug)

    # -----------------------------
    # List, filter, sort, paginate
    # -----------------------------
    print("\nElectronics, cheapest first, one per page...")
    page = c.list_products(category="electronics", sort="asc", limit=1)
    print(page["payload"], "next:", page["nextLink"])

    print("\nSearching titles for 'mu'...")
    print(c.list_products(query="mu")["payload"])

    # -----------------------------
    # Update and delete
    # -----------------------------
    print("\nMarking the mug unavailable...")
    print(c.update_product(mug["id"], status=False))
    print("Available home products:", c.list_products(category="home", availability=True)["payload"])

    print("\nDeleting the mouse...")
    print(c.delete_product(mouse["id"]))

    # -----------------------------
    # Carts (must already exist in the carts file)
    # -----------------------------
    cart_id = os.getenv("DEMO_CART_ID")
    if cart_id:
        print(f"\nFilling cart {cart_id}...")
        print(c.replace_cart_products(cart_id, [
            {"productId": laptop["id"], "quantity": 1},
            {"productId": mug["id"], "quantity": 2},
        ]))
        print(c.set_cart_quantity(cart_id, mug["id"], 4))
        print(c.get_cart(cart_id))
    else:
        print("\nSet DEMO_CART_ID to an existing cart id to try the cart calls.")


if __name__ == "__main__":
    main()
