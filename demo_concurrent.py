import asyncio
import sys

from sdk.errors import ProductClientError
from sdk.models import Product
from sdk.productos import AsyncProductClient

# Fires an update and a delete for the same id at the same time.
# Nothing orders them: whichever completes last decides what a cache would show.

async def attempt(label, coro):
    try:
        result = await coro
        print(f"✅ {label} succeeded: {result}")
    except ProductClientError as e:
        print(f"❌ {label} failed: {e}")

async def main():
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://127.0.0.1:8085"
    async with AsyncProductClient(base_url=base_url) as c:
        product = await c.create_product(Product.draft("Gaming Laptop", 1500.0))
        print(f"\n🖥️  Created product: {product}")

        print("\n⚡ Racing update and delete...")
        await asyncio.gather(
            attempt("update", c.update_product(product.id, Product.draft("Gaming Laptop", 1299.0))),
            attempt("delete", c.delete_product(product.id)),
        )

        remaining = [p for p in await c.list_products() if p.id == product.id]
        print("\n📦 Server now has:", remaining or "nothing for that id")

if __name__ == "__main__":
    asyncio.run(main())
