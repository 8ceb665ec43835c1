# backend/storefront/schemas/product_schema.py
from typing import Any, Dict, Optional
from pydantic import AliasChoices, BaseModel, Field
from pydantic import ConfigDict


class ProductIn(BaseModel):
    """Create/update body. Every field is optional here; the service decides what is required."""

    name: Optional[str] = None
    slug: Optional[str] = None
    price: Optional[float] = None
    grams: Optional[int] = None
    category: Optional[str] = None
    image: Optional[str] = None
    short_desc: Optional[str] = Field(
        None, validation_alias=AliasChoices("shortDesc", "short_desc")
    )

    def provided(self) -> Dict[str, Any]:
        """Fields the client actually sent with a non-null value."""
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    slug: str
    name: str
    price: float
    grams: int
    category: Optional[str] = ""
    image: Optional[str] = ""
    short_desc: Optional[str] = Field("", serialization_alias="shortDesc")
    created_at: int = Field(serialization_alias="createdAt")


def product_to_dict(p) -> Dict[str, Any]:
    return ProductOut.model_validate(p).model_dump(by_alias=True)
