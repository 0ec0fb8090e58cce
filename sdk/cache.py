"""Caller-side product cache and the policy used to keep it in sync.

The remote service is the source of truth. Nothing in here runs before a
remote call has succeeded, so the cache never shows a state the server
rejected. Two mutations racing on the same id land in whatever order they
complete; no ordering is imposed.
"""

import enum
import logging
from typing import Iterable, Iterator, List, Optional

from .errors import ProductClientError
from .models import Product

logger = logging.getLogger(__name__)


class SyncPolicy(str, enum.Enum):
    PATCH = "patch"      # apply the confirmed result locally
    REFETCH = "refetch"  # re-list the whole collection after each mutation


class ProductCache:
    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: List[Product] = list(products or [])

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)

    @property
    def products(self) -> List[Product]:
        return list(self._products)

    def ids(self) -> List[int]:
        return [p.id for p in self._products]

    def get(self, product_id: int) -> Optional[Product]:
        for p in self._products:
            if p.id == product_id:
                return p
        return None

    def replace_all(self, products: Iterable[Product]):
        self._products = list(products)

    def apply_created(self, product: Product):
        self._products.append(product)

    def apply_updated(self, product: Product) -> bool:
        for i, p in enumerate(self._products):
            if p.id == product.id:
                self._products[i] = product
                return True
        return False

    def apply_deleted(self, product_id: int) -> bool:
        before = len(self._products)
        self._products = [p for p in self._products if p.id != product_id]
        return len(self._products) != before


class ProductSync:
    """Runs client operations and updates a ProductCache once they succeed.

    Any ProductClientError from the mutation itself propagates with the cache
    untouched.
    """

    def __init__(self, client, cache: Optional[ProductCache] = None,
                 policy: SyncPolicy = SyncPolicy.PATCH):
        self.client = client
        self.cache = cache if cache is not None else ProductCache()
        self.policy = SyncPolicy(policy)

    def refresh(self) -> List[Product]:
        products = self.client.list_products()
        self.cache.replace_all(products)
        return products

    def create(self, draft: Product) -> Product:
        created = self.client.create_product(draft)
        self._after_mutation(lambda: self.cache.apply_created(created))
        return created

    def update(self, product_id: int, patch: Product) -> Product:
        updated = self.client.update_product(product_id, patch)
        self._after_mutation(lambda: self.cache.apply_updated(updated))
        return updated

    def delete(self, product_id: int):
        self.client.delete_product(product_id)
        self._after_mutation(lambda: self.cache.apply_deleted(product_id))

    def _after_mutation(self, patch):
        if self.policy is SyncPolicy.PATCH:
            patch()
            return
        try:
            self.refresh()
        except ProductClientError:
            # the mutation itself went through; keep the cache in line with it
            logger.warning("re-fetch after mutation failed, patching cache locally")
            patch()
            raise
