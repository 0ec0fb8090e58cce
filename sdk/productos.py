# sdk/productos.py
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, List, Optional

import httpx
import requests

from .config import get_settings
from .errors import ProductClientError, RemoteError, TransportError
from .models import Product

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/api/productos"


# ---------------------------
# Response helpers (shared by the blocking and async clients)
# ---------------------------
def _error_detail(r) -> Optional[str]:
    try:
        body = r.json()
    except ValueError:
        return r.text or None
    if isinstance(body, dict) and "detail" in body:
        detail = body["detail"]
        if isinstance(detail, list):
            # validation errors: [{"loc": [...], "msg": "...", ...}, ...]
            msgs = [str(d.get("msg", d)) if isinstance(d, dict) else str(d) for d in detail]
            return "; ".join(msgs) or None
        return str(detail)
    return r.text or None


def _check(r, method: str, url: str):
    if 200 <= r.status_code < 300:
        return r
    err = RemoteError(r.status_code, _error_detail(r))
    logger.warning("%s %s failed: %s", method, url, err)
    raise err


def _decode_product(r) -> Product:
    try:
        data = r.json()
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        return Product.from_wire(data)
    except ValueError as e:
        raise RemoteError(r.status_code, f"invalid product payload: {e}") from e


def _decode_created(r) -> Product:
    created = _decode_product(r)
    if created.id <= 0:
        raise RemoteError(r.status_code, "create response carries no server id")
    return created


def _decode_products(r) -> List[Product]:
    try:
        data = r.json()
        if not isinstance(data, list):
            raise ValueError("expected a JSON array")
        return [Product.from_wire(item) for item in data]
    except (ValueError, TypeError) as e:
        raise RemoteError(r.status_code, f"invalid product list payload: {e}") from e


def _updated_or_sent(r, sent: Product) -> Product:
    # some deployments answer PUT with an empty body
    if r.status_code == 204 or not r.content:
        return sent
    return _decode_product(r)


def _replacement(product_id: int, patch: Product) -> Product:
    return patch.model_copy(update={"id": product_id})


# ---------------------------
# Blocking client
# ---------------------------
class ProductClient:
    """Blocking client for the productos API.

    The client never touches a product list of its own: callers apply the
    returned records to whatever cache they hold (see sdk.cache).
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 max_workers: Optional[int] = None, session: Optional[requests.Session] = None):
        settings = get_settings()
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or settings.max_workers,
            thread_name_prefix="productos",
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self._executor.shutdown(wait=True)
        self.session.close()

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.warning("%s %s transport error: %s", method, url, e)
            raise TransportError(str(e)) from e
        return _check(r, method, url)

    # Products
    def list_products(self) -> List[Product]:
        r = self._request("GET", PRODUCTS_PATH)
        return _decode_products(r)

    def create_product(self, draft: Product) -> Product:
        r = self._request("POST", PRODUCTS_PATH, json=draft.as_draft().to_wire())
        return _decode_created(r)

    def update_product(self, product_id: int, patch: Product) -> Product:
        sent = _replacement(product_id, patch)
        r = self._request("PUT", f"{PRODUCTS_PATH}/{product_id}", json=sent.to_wire())
        return _updated_or_sent(r, sent)

    def delete_product(self, product_id: int) -> None:
        self._request("DELETE", f"{PRODUCTS_PATH}/{product_id}")

    # Non-blocking calls
    def enqueue(self, call: Callable[..., Any], *args,
                on_success: Optional[Callable[[Any], None]] = None,
                on_failure: Optional[Callable[[ProductClientError], None]] = None) -> Future:
        """Run ``call(*args)`` on a worker thread.

        Exactly one of ``on_success(result)`` / ``on_failure(error)`` fires once
        the request completes. The returned future carries the same outcome.
        Requests cannot be cancelled once issued. After close() the call is
        not scheduled and on_failure receives a ProductClientError.
        """
        def _run():
            try:
                result = call(*args)
            except ProductClientError as e:
                _fire(on_failure, e)
                raise
            except Exception as e:
                err = ProductClientError(f"unexpected error: {e}")
                _fire(on_failure, err)
                raise err from e
            _fire(on_success, result)
            return result

        try:
            return self._executor.submit(_run)
        except RuntimeError as e:
            err = ProductClientError(f"client is closed: {e}")
            _fire(on_failure, err)
            failed = Future()
            failed.set_exception(err)
            return failed


def _fire(callback: Optional[Callable[[Any], None]], value: Any):
    if callback is None:
        return
    try:
        callback(value)
    except Exception:
        # a failing callback must not trigger the other one
        logger.exception("completion callback %r raised", callback)


# ---------------------------
# Async client
# ---------------------------
class AsyncProductClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        settings = get_settings()
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.timeout
        self._client = httpx.AsyncClient(
            timeout=self.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            r = await self._client.request(method, url, **kwargs)
        except httpx.RequestError as e:
            logger.warning("%s %s transport error: %s", method, url, e)
            raise TransportError(str(e) or e.__class__.__name__) from e
        return _check(r, method, url)

    async def list_products(self) -> List[Product]:
        r = await self._request("GET", PRODUCTS_PATH)
        return _decode_products(r)

    async def create_product(self, draft: Product) -> Product:
        r = await self._request("POST", PRODUCTS_PATH, json=draft.as_draft().to_wire())
        return _decode_created(r)

    async def update_product(self, product_id: int, patch: Product) -> Product:
        sent = _replacement(product_id, patch)
        r = await self._request("PUT", f"{PRODUCTS_PATH}/{product_id}", json=sent.to_wire())
        return _updated_or_sent(r, sent)

    async def delete_product(self, product_id: int) -> None:
        await self._request("DELETE", f"{PRODUCTS_PATH}/{product_id}")
