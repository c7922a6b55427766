# storefront/models/product.py
from typing import Optional

from sqlmodel import SQLModel, Field, Relationship

from storefront.models.category import Category


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    The cart never mutates `inventory`; it only checks requested
    quantities against it.
    """

    __tablename__ = "products"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(
        max_length=255,
        index=True,
        description="Display name of the product",
    )

    description: str | None = Field(
        default=None,
        description="Optional long description",
    )

    price: float = Field(
        ge=0,
        description="Unit price before tax",
    )

    inventory: int = Field(
        default=0,
        ge=0,
        description="Units currently available to sell",
    )

    tax_rate: float = Field(
        default=0.0,
        ge=0,
        description="Fractional tax applied to the line subtotal (0.1 = 10%)",
    )

    category_id: int = Field(
        foreign_key="categories.id",
        index=True,
    )

    category: Optional[Category] = Relationship()
