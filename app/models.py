# app/models.py
from pydantic import BaseModel, Field
from typing import Optional

# The reference server speaks the wire names directly.

class ProductoIn(BaseModel):
    id: Optional[int] = 0  # ignored: ids are assigned by the server / taken from the path
    nombre: str = Field(..., min_length=1)
    precio: float = Field(..., ge=0)
    imagenUrl: Optional[str] = None

class Producto(ProductoIn):
    id: int
