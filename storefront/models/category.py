# storefront/models/category.py
from sqlmodel import SQLModel, Field


class Category(SQLModel, table=True):
    """
    Product category. Names are unique.
    """

    __tablename__ = "categories"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(
        max_length=100,
        unique=True,
        index=True,
        description="Display name of the category (unique)",
    )
