# storefront/schemas/product.py
from pydantic import field_validator
from sqlmodel import Field

from storefront.schemas.category import CategoryRead
from storefront.schemas.common import CamelModel


class ProductCreate(CamelModel):
    """
    Payload for creating a product.

    - category_id must reference an existing category (checked by the service).
    """

    name: str = Field(max_length=255)
    description: str | None = None
    price: float = Field(ge=0)
    inventory: int = Field(default=0, ge=0)
    tax_rate: float = Field(default=0.0, ge=0)
    category_id: int

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class ProductUpdate(CamelModel):
    """
    Partial update payload for products.
    All fields are optional.
    """

    name: str | None = Field(default=None, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    inventory: int | None = Field(default=None, ge=0)
    tax_rate: float | None = Field(default=None, ge=0)
    category_id: int | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class ProductRead(CamelModel):
    """
    Product representation for clients.

    Includes the product's category.
    """

    id: int
    name: str
    description: str | None = None
    price: float
    inventory: int
    tax_rate: float
    category_id: int
    category: CategoryRead | None = None
