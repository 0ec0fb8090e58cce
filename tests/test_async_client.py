# tests/test_async_client.py
import asyncio
import json

import httpx
import pytest

from app.main import app
from sdk.errors import RemoteError, TransportError
from sdk.models import Product
from sdk.productos import AsyncProductClient

def _asgi_client():
    return AsyncProductClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app))

def test_async_crud():
    async def scenario():
        async with _asgi_client() as c:
            created = await c.create_product(Product.draft("Widget", 9.99))
            assert created.id > 0 and created.name == "Widget" and created.price == 9.99

            await c.update_product(created.id, Product.draft("Widget", 7.5, image_url="w.png"))
            listed = await c.list_products()
            assert listed == [Product(id=created.id, name="Widget", price=7.5, image_url="w.png")]

            await c.delete_product(created.id)
            assert await c.list_products() == []

    asyncio.run(scenario())

def test_async_race_is_uncoordinated():
    # update and delete on the same id both go out; no ordering is imposed
    async def scenario():
        async with _asgi_client() as c:
            p = await c.create_product(Product.draft("Laptop", 1500.0))
            results = await asyncio.gather(
                c.update_product(p.id, Product.draft("Laptop", 1299.0)),
                c.delete_product(p.id),
                return_exceptions=True,
            )
            for r in results:
                assert r is None or isinstance(r, (Product, RemoteError))
            assert p.id not in [x.id for x in await c.list_products()]

    asyncio.run(scenario())

def _mock_client(handler):
    return AsyncProductClient(base_url="http://api.test", transport=httpx.MockTransport(handler))

def test_remote_error_carries_status_and_detail():
    def handler(request):
        return httpx.Response(500, json={"detail": "boom"})

    async def scenario():
        async with _mock_client(handler) as c:
            with pytest.raises(RemoteError) as exc:
                await c.list_products()
            assert exc.value.status_code == 500
            assert exc.value.detail == "boom"

    asyncio.run(scenario())

def test_bad_success_payload_is_a_remote_error():
    def handler(request):
        return httpx.Response(200, text="<html>maintenance</html>")

    async def scenario():
        async with _mock_client(handler) as c:
            with pytest.raises(RemoteError) as exc:
                await c.list_products()
            assert exc.value.status_code == 200
            with pytest.raises(RemoteError):
                await c.create_product(Product.draft("Widget", 1.0))

    asyncio.run(scenario())

def test_empty_put_body_returns_sent_record():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = request.content
        return httpx.Response(204)

    async def scenario():
        async with _mock_client(handler) as c:
            return await c.update_product(8, Product(id=1, name="Widget", price=2.0))

    updated = asyncio.run(scenario())
    assert updated == Product(id=8, name="Widget", price=2.0)
    assert seen["method"] == "PUT"
    assert seen["path"] == "/api/productos/8"
    assert b'"id":8' in seen["body"].replace(b" ", b"")

def test_create_sends_zeroed_id():
    def handler(request):
        body = json.loads(request.content)
        assert body["id"] == 0
        return httpx.Response(201, json={**body, "id": 31})

    async def scenario():
        async with _mock_client(handler) as c:
            return await c.create_product(Product(id=5, name="Widget", price=2.0))

    assert asyncio.run(scenario()).id == 31

def test_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario():
        async with _mock_client(handler) as c:
            with pytest.raises(TransportError):
                await c.delete_product(1)

    asyncio.run(scenario())

@pytest.mark.parametrize("body", [
    {"nombre": "Widget", "precio": 9.99},
    {"id": 0, "nombre": "Widget", "precio": 9.99},
])
def test_create_without_server_id_is_a_remote_error(body):
    def handler(request):
        return httpx.Response(201, json=body)

    async def scenario():
        async with _mock_client(handler) as c:
            with pytest.raises(RemoteError) as exc:
                await c.create_product(Product.draft("Widget", 9.99))
            assert exc.value.status_code == 201
            assert exc.value.detail == "create response carries no server id"

    asyncio.run(scenario())

def test_validation_detail_is_readable():
    def handler(request):
        return httpx.Response(422, json={"detail": [
            {"loc": ["body", "precio"], "msg": "Input should be greater than or equal to 0", "type": "greater_than_equal"},
            {"loc": ["body", "nombre"], "msg": "Field required", "type": "missing"},
        ]})

    async def scenario():
        async with _mock_client(handler) as c:
            with pytest.raises(RemoteError) as exc:
                await c.create_product(Product.draft("Widget", 1.0))
            assert exc.value.status_code == 422
            assert exc.value.detail == "Input should be greater than or equal to 0; Field required"

    asyncio.run(scenario())
