# app/main.py
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from typing import List

from .models import ProductoIn, Producto
from .database import reset_store
from .core import (
    list_productos_logic, create_producto_logic,
    update_producto_logic, delete_producto_logic,
)

app = FastAPI(title="productos (in-memory reference server)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/api/productos", response_model=List[Producto], response_model_exclude_none=True)
async def list_productos():
    return await list_productos_logic()

@app.post("/api/productos", status_code=201, response_model=Producto, response_model_exclude_none=True)
async def create_producto(payload: ProductoIn):
    return await create_producto_logic(payload)

@app.put("/api/productos/{producto_id}", response_model=Producto, response_model_exclude_none=True)
async def update_producto(producto_id: int, payload: ProductoIn):
    return await update_producto_logic(producto_id, payload)

@app.delete("/api/productos/{producto_id}", status_code=204)
async def delete_producto(producto_id: int):
    await delete_producto_logic(producto_id)
    return Response(status_code=204)

# ---------------------------
# Utility: reset (for tests/demo)
# ---------------------------
@app.post("/reset")
async def reset_all():
    reset_store()
    return {"status": "reset"}
