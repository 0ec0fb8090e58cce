# sdk/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any


class Product(BaseModel):
    """A product record as exchanged with the productos API.

    Attribute names are English; the wire names (nombre, precio, imagenUrl)
    are aliases. id 0 means "not created yet".
    """
    model_config = ConfigDict(populate_by_name=True)

    id: int = 0
    name: str = Field(alias="nombre")
    price: float = Field(alias="precio", ge=0)
    image_url: Optional[str] = Field(default=None, alias="imagenUrl")

    @classmethod
    def draft(cls, name: str, price: float, image_url: Optional[str] = None) -> "Product":
        return cls(id=0, name=name, price=price, image_url=image_url)

    @property
    def is_draft(self) -> bool:
        return self.id == 0

    def as_draft(self) -> "Product":
        return self.model_copy(update={"id": 0})

    def to_wire(self) -> Dict[str, Any]:
        # imagenUrl only goes on the wire when there is one
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "Product":
        return cls.model_validate(data)
