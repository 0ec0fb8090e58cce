# tests/conftest.py
import socket
import threading
import time

import pytest
import uvicorn

from app.main import app
from app.database import reset_store
from sdk.productos import ProductClient


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture(autouse=True)
def reset():
    reset_store()
    yield


@pytest.fixture(scope="session")
def live_server():
    # reference server on a background thread
    port = free_port()
    server = uvicorn.Server(uvicorn.Config(app, host="127.0.0.1", port=port, log_level="error"))
    t = threading.Thread(target=server.run, daemon=True)
    t.start()
    deadline = time.time() + 10
    while not server.started:
        if time.time() > deadline:
            raise RuntimeError("reference server did not start")
        time.sleep(0.05)
    yield f"http://127.0.0.1:{port}"
    server.should_exit = True
    t.join(timeout=5)


@pytest.fixture
def client(live_server):
    c = ProductClient(base_url=live_server, timeout=5)
    yield c
    c.close()


@pytest.fixture
def dead_url():
    # nothing listens here
    return f"http://127.0.0.1:{free_port()}"
