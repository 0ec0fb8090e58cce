#!/usr/bin/env python
import sys

from sdk.cache import ProductCache, ProductSync, SyncPolicy
from sdk.errors import ProductClientError
from sdk.models import Product
from sdk.productos import ProductClient

# Run against the reference server:  uvicorn app.main:app --port 8085

def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://127.0.0.1:8085"
    with ProductClient(base_url=base_url) as c:
        # -----------------------------
        # Reset everything for demo
        # -----------------------------
        print("Resetting store...")
        c.session.post(f"{c.base_url}/reset")

        sync = ProductSync(c, ProductCache(), SyncPolicy.PATCH)

        # -----------------------------
        # Create products
        # -----------------------------
        print("\nCreating products...")
        widget = sync.create(Product.draft("Widget", 9.99))
        lamp = sync.create(Product.draft("Lamp", 25.0, image_url="https://example.com/lamp.png"))
        print(widget)
        print(lamp)

        # -----------------------------
        # Update, then compare with the server
        # -----------------------------
        print("\nUpdating the lamp price...")
        sync.update(lamp.id, Product.draft("Lamp", 19.5, image_url=lamp.image_url))
        print("cache :", sync.cache.products)
        print("server:", c.list_products())

        # -----------------------------
        # Delete
        # -----------------------------
        print(f"\nDeleting product {widget.id}...")
        sync.delete(widget.id)
        print("ids after delete:", [p.id for p in c.list_products()])

        # -----------------------------
        # A failing call leaves the cache alone
        # -----------------------------
        print("\nDeleting it again...")
        try:
            sync.delete(widget.id)
        except ProductClientError as e:
            print("failed as expected:", e)
        print("cache still:", sync.cache.ids())

if __name__ == "__main__":
    main()
