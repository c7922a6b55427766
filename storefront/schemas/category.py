# storefront/schemas/category.py
from pydantic import field_validator
from sqlmodel import Field

from storefront.schemas.common import CamelModel


class CategoryCreate(CamelModel):
    """
    Payload for creating a category.
    """

    name: str = Field(max_length=100)

    @field_validator("name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class CategoryRead(CamelModel):
    id: int
    name: str
