# storefront/repositories/cart_repo.py
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from storefront.models.cart import Cart, CartItem
from storefront.models.product import Product


class CartRepository:
    """
    Data access layer for carts and cart_items.

    NOTE:
      - Item writes only flush; adding or updating an item is a
        read-modify-write transaction and the service calls
        session.commit() once it is complete.
    """

    # ---- Carts ----

    def create_cart(self, session: Session, cart: Cart) -> Cart:
        session.add(cart)
        session.commit()
        session.refresh(cart)
        return cart

    # ---- Items ----

    def get_by_id(self, session: Session, item_id: int) -> CartItem | None:
        return session.get(CartItem, item_id)

    def get_item(
        self, session: Session, cart_id: int, product_id: int
    ) -> CartItem | None:
        stmt = select(CartItem).where(
            CartItem.cart_id == cart_id, CartItem.product_id == product_id
        )
        return session.exec(stmt).first()

    def get_with_product(
        self,
        session: Session,
        item_id: int,
        for_update: bool = False,
    ) -> tuple[CartItem, Product] | None:
        stmt = (
            select(CartItem, Product)
            .join(Product, Product.id == CartItem.product_id)
            .where(CartItem.id == item_id)
        )
        if for_update:
            stmt = stmt.with_for_update()
        return session.exec(stmt).first()

    def list_with_products(
        self, session: Session, cart_id: int
    ) -> list[tuple[CartItem, Product]]:
        stmt = (
            select(CartItem, Product)
            .join(Product, Product.id == CartItem.product_id)
            .where(CartItem.cart_id == cart_id)
            .options(selectinload(Product.category))
            .order_by(CartItem.id)
        )
        return session.exec(stmt).all()

    def save(self, session: Session, item: CartItem) -> CartItem:
        """
        Stage an insert or update without committing, but ensure id is populated.
        """
        session.add(item)
        session.flush()
        return item

    def delete(self, session: Session, item: CartItem) -> None:
        session.delete(item)
        session.commit()
