# tests/test_server.py
from fastapi.testclient import TestClient
from app.main import app
from app.database import _LOCKS

client = TestClient(app)

def test_create_list_update_delete():
    r = client.post("/api/productos", json={"id": 0, "nombre": "Widget", "precio": 9.99})
    assert r.status_code == 201
    pid = r.json()["id"]
    assert pid > 0
    assert "imagenUrl" not in r.json()

    r2 = client.put(f"/api/productos/{pid}", json={"id": pid, "nombre": "Widget", "precio": 12.5, "imagenUrl": "w.png"})
    assert r2.status_code == 200
    assert r2.json() == {"id": pid, "nombre": "Widget", "precio": 12.5, "imagenUrl": "w.png"}

    assert client.get("/api/productos").json() == [r2.json()]

    r3 = client.delete(f"/api/productos/{pid}")
    assert r3.status_code == 204
    assert r3.content == b""
    assert client.get("/api/productos").json() == []

def test_ids_are_assigned_by_server():
    a = client.post("/api/productos", json={"id": 42, "nombre": "A", "precio": 1}).json()
    b = client.post("/api/productos", json={"id": 42, "nombre": "B", "precio": 2}).json()
    assert a["id"] != b["id"]

def test_path_id_wins_on_update():
    pid = client.post("/api/productos", json={"nombre": "A", "precio": 1}).json()["id"]
    r = client.put(f"/api/productos/{pid}", json={"id": 999, "nombre": "A2", "precio": 1})
    assert r.json()["id"] == pid

def test_unknown_ids_and_invalid_bodies():
    assert client.put("/api/productos/77", json={"nombre": "x", "precio": 1}).status_code == 404
    assert client.delete("/api/productos/77").status_code == 404
    assert client.post("/api/productos", json={"nombre": "x", "precio": -1}).status_code == 422
    assert client.post("/api/productos", json={"precio": 1}).status_code == 422

def test_reset():
    client.post("/api/productos", json={"nombre": "x", "precio": 1})
    assert client.post("/reset").json() == {"status": "reset"}
    assert client.get("/api/productos").json() == []

def test_delete_releases_the_product_lock():
    pid = client.post("/api/productos", json={"nombre": "A", "precio": 1}).json()["id"]
    client.put(f"/api/productos/{pid}", json={"nombre": "A2", "precio": 1})
    assert f"producto:{pid}" in _LOCKS
    client.delete(f"/api/productos/{pid}")
    assert f"producto:{pid}" not in _LOCKS
