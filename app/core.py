import logging
from typing import Dict, Any, List

from fastapi import HTTPException

from .models import ProductoIn
from .database import PRODUCTOS, _LOCKS, _get_lock, next_id

logger = logging.getLogger(__name__)

# Core logic behind the /api/productos endpoints.

def _make_producto_dict(producto_id: int, p: ProductoIn) -> Dict[str, Any]:
    out = {"id": producto_id, "nombre": p.nombre, "precio": p.precio}
    if p.imagenUrl is not None:
        out["imagenUrl"] = p.imagenUrl
    return out

async def list_productos_logic() -> List[Dict[str, Any]]:
    return list(PRODUCTOS.values())

async def create_producto_logic(payload: ProductoIn) -> Dict[str, Any]:
    async with _get_lock("productos"):
        pid = next_id()
        PRODUCTOS[pid] = _make_producto_dict(pid, payload)
    logger.info("created producto %s", pid)
    return PRODUCTOS[pid]

async def update_producto_logic(producto_id: int, payload: ProductoIn) -> Dict[str, Any]:
    async with _get_lock(f"producto:{producto_id}"):
        if producto_id not in PRODUCTOS:
            raise HTTPException(status_code=404, detail="producto not found")
        PRODUCTOS[producto_id] = _make_producto_dict(producto_id, payload)
    return PRODUCTOS[producto_id]

async def delete_producto_logic(producto_id: int):
    async with _get_lock(f"producto:{producto_id}"):
        if PRODUCTOS.pop(producto_id, None) is None:
            raise HTTPException(status_code=404, detail="producto not found")
    _LOCKS.pop(f"producto:{producto_id}", None)
    logger.info("deleted producto %s", producto_id)
