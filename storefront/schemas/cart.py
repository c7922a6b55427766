# storefront/schemas/cart.py
from datetime import datetime

from sqlmodel import Field

from storefront.schemas.common import CamelModel
from storefront.schemas.product import ProductRead


class CartRead(CamelModel):
    id: int
    user_id: str
    created_at: datetime


class CartItemCreate(CamelModel):
    """
    Payload for adding a product to a cart.
    """

    product_id: int
    quantity: int = Field(gt=0)


class CartItemUpdate(CamelModel):
    """
    Payload for setting the quantity of a cart item.
    """

    quantity: int = Field(gt=0)


class CartItemRead(CamelModel):
    id: int
    cart_id: int
    product_id: int
    quantity: int


class CartItemDetail(CartItemRead):
    """
    Cart item with its product and computed line amounts.
    """

    product: ProductRead
    item_subtotal: float
    item_tax: float


class CartSummary(CamelModel):
    subtotal: float = 0.0
    total_tax: float = 0.0
    total: float = 0.0


class CartItemsResponse(CamelModel):
    """
    Full cart listing with totals.
    """

    items: list[CartItemDetail]
    summary: CartSummary
