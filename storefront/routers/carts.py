# storefront/routers/carts.py
from fastapi import APIRouter, Depends, Response, status
from sqlmodel import Session

from storefront.core.config import get_settings
from storefront.core.routing import BadRequestRoute
from storefront.database import get_session
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import (
    CartItemCreate,
    CartItemRead,
    CartItemsResponse,
    CartItemUpdate,
    CartRead,
)
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/carts", tags=["Carts"], route_class=BadRequestRoute)

cart_repo = CartRepository()
product_repo = ProductRepository()
service = CartService(
    cart_repo,
    product_repo,
    enforce_merged_inventory=get_settings().CART_ENFORCE_MERGED_INVENTORY,
)


def get_cart_service() -> CartService:
    return service


@router.post(
    "/{user_id}",
    response_model=CartRead,
    status_code=status.HTTP_201_CREATED,
)
def create_cart(
    user_id: str,
    session: Session = Depends(get_session),
    cart_service: CartService = Depends(get_cart_service),
):
    """
    Create a new cart for `user_id`. The id is not validated.
    """
    return cart_service.create_cart(session, user_id)


@router.post(
    "/{cart_id}/items",
    response_model=CartItemRead,
    status_code=status.HTTP_201_CREATED,
)
def add_item(
    cart_id: int,
    payload: CartItemCreate,
    session: Session = Depends(get_session),
    cart_service: CartService = Depends(get_cart_service),
):
    """
    Add a product to the cart, or increase its quantity if already present.
    """
    return cart_service.add_item_to_cart(
        session, cart_id, payload.product_id, payload.quantity
    )


@router.get("/{cart_id}/items", response_model=CartItemsResponse)
def list_items(
    cart_id: int,
    session: Session = Depends(get_session),
    cart_service: CartService = Depends(get_cart_service),
):
    """
    Items of the cart with subtotal, tax and total.
    """
    return cart_service.get_cart_items(session, cart_id)


@router.put("/{cart_id}/items/{item_id}", response_model=CartItemRead)
def update_item(
    cart_id: int,
    item_id: int,
    payload: CartItemUpdate,
    session: Session = Depends(get_session),
    cart_service: CartService = Depends(get_cart_service),
):
    """
    Set the quantity of an item. The item must belong to `cart_id`.
    """
    return cart_service.update_cart_item(
        session, item_id, payload.quantity, cart_id=cart_id
    )


@router.delete(
    "/{cart_id}/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def remove_item(
    cart_id: int,
    item_id: int,
    session: Session = Depends(get_session),
    cart_service: CartService = Depends(get_cart_service),
):
    """
    Remove an item. The item must belong to `cart_id`.
    """
    cart_service.remove_cart_item(session, item_id, cart_id=cart_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
