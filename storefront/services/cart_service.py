# storefront/services/cart_service.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from storefront.core.errors import (
    InsufficientInventoryError,
    InvalidParameterError,
    ItemNotFoundError,
    ProductNotFoundError,
)
from storefront.models.cart import Cart, CartItem
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import (
    CartItemDetail,
    CartItemsResponse,
    CartSummary,
)
from storefront.schemas.product import ProductRead

logger = logging.getLogger(__name__)


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - create carts
      - add items, merging into an existing line for the same product
      - validate requested quantities against product inventory
      - compute line subtotals, tax and cart totals

    Inventory checks are point-in-time: product.inventory is never
    decremented here. Adds and updates lock the product row and commit
    once, so the lookup-then-write sequence runs in one transaction.
    """

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        enforce_merged_inventory: bool = False,
    ):
        self.cart_repo = cart_repo
        self.product_repo = product_repo
        self.enforce_merged_inventory = enforce_merged_inventory

    # ---- internal helpers ----

    @staticmethod
    def _check_quantity(quantity: int) -> None:
        if quantity <= 0:
            raise InvalidParameterError("Quantity must be a positive integer")

    def _stage_add(
        self,
        session: Session,
        cart_id: int,
        product_id: int,
        quantity: int,
    ) -> CartItem:
        product = self.product_repo.get_by_id(session, product_id, for_update=True)
        if not product:
            logger.warning("Add to cart %s rejected: product %s not found", cart_id, product_id)
            raise ProductNotFoundError()

        if product.inventory < quantity:
            logger.warning(
                "Add to cart %s rejected: product %s has %s in inventory, requested %s",
                cart_id, product_id, product.inventory, quantity,
            )
            raise InsufficientInventoryError()

        existing = self.cart_repo.get_item(session, cart_id, product_id)

        if existing:
            new_qty = existing.quantity + quantity
            if self.enforce_merged_inventory and new_qty > product.inventory:
                logger.warning(
                    "Add to cart %s rejected: merged quantity %s exceeds inventory %s",
                    cart_id, new_qty, product.inventory,
                )
                raise InsufficientInventoryError()
            existing.quantity = new_qty
            logger.info("Cart %s: product %s quantity now %s", cart_id, product_id, new_qty)
            return self.cart_repo.save(session, existing)

        item = CartItem(cart_id=cart_id, product_id=product_id, quantity=quantity)
        logger.info("Cart %s: added product %s x%s", cart_id, product_id, quantity)
        return self.cart_repo.save(session, item)

    # ---- public operations ----

    def create_cart(self, session: Session, user_id: str) -> Cart:
        cart = self.cart_repo.create_cart(session, Cart(user_id=user_id))
        logger.info("Created cart %s for user %s", cart.id, user_id)
        return cart

    def add_item_to_cart(
        self,
        session: Session,
        cart_id: int,
        product_id: int,
        quantity: int,
    ) -> CartItem:
        """
        Add `quantity` units of a product to a cart.

        Rules:
          - product must exist
          - requested quantity <= product.inventory
          - an existing line for the same product is incremented,
            otherwise a new line is created

        A concurrent request can insert the same (cart, product) line
        between our lookup and our insert; the unique constraint rejects
        the second insert and we retry once, which then merges.
        """
        self._check_quantity(quantity)

        try:
            item = self._stage_add(session, cart_id, product_id, quantity)
            session.commit()
        except IntegrityError:
            session.rollback()
            logger.info(
                "Cart %s: concurrent insert for product %s, retrying as merge",
                cart_id, product_id,
            )
            item = self._stage_add(session, cart_id, product_id, quantity)
            session.commit()

        session.refresh(item)
        return item

    def get_cart_items(self, session: Session, cart_id: int) -> CartItemsResponse:
        """
        Return all items of a cart with per-line amounts and totals:
          - item_subtotal = price * quantity
          - item_tax      = item_subtotal * tax_rate
          - summary: subtotal, total_tax, total = subtotal + total_tax
        """
        rows = self.cart_repo.list_with_products(session, cart_id)

        items: list[CartItemDetail] = []
        subtotal = 0.0
        total_tax = 0.0

        for item, product in rows:
            item_subtotal = product.price * item.quantity
            item_tax = item_subtotal * product.tax_rate
            subtotal += item_subtotal
            total_tax += item_tax

            items.append(
                CartItemDetail(
                    id=item.id,
                    cart_id=item.cart_id,
                    product_id=item.product_id,
                    quantity=item.quantity,
                    product=ProductRead.model_validate(product),
                    item_subtotal=item_subtotal,
                    item_tax=item_tax,
                )
            )

        return CartItemsResponse(
            items=items,
            summary=CartSummary(
                subtotal=subtotal,
                total_tax=total_tax,
                total=subtotal + total_tax,
            ),
        )

    def update_cart_item(
        self,
        session: Session,
        item_id: int,
        quantity: int,
        cart_id: int | None = None,
    ) -> CartItem:
        """
        Set the quantity of a cart item (absolute, not an increment).

        quantity == inventory is allowed; anything above => InsufficientInventoryError.
        When `cart_id` is given, an item of another cart is reported as not found.
        """
        self._check_quantity(quantity)

        row = self.cart_repo.get_with_product(session, item_id, for_update=True)
        if row is None or (cart_id is not None and row[0].cart_id != cart_id):
            raise ItemNotFoundError()

        item, product = row
        if product.inventory < quantity:
            logger.warning(
                "Update of item %s rejected: product %s has %s in inventory, requested %s",
                item_id, product.id, product.inventory, quantity,
            )
            raise InsufficientInventoryError()

        item.quantity = quantity
        self.cart_repo.save(session, item)
        session.commit()
        session.refresh(item)

        logger.info("Cart item %s quantity set to %s", item_id, quantity)
        return item

    def remove_cart_item(
        self,
        session: Session,
        item_id: int,
        cart_id: int | None = None,
    ) -> None:
        item = self.cart_repo.get_by_id(session, item_id)
        if not item or (cart_id is not None and item.cart_id != cart_id):
            raise ItemNotFoundError()

        self.cart_repo.delete(session, item)
        logger.info("Removed cart item %s", item_id)
