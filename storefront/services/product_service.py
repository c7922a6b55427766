# storefront/services/product_service.py
import logging

from sqlmodel import Session

from storefront.core.errors import (
    CategoryNotFoundError,
    InvalidParameterError,
    MissingParameterError,
    ProductNotFoundError,
)
from storefront.models.product import Product
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

# Accepted `sort` field names (API spelling -> column)
SORTABLE_FIELDS: dict[str, str] = {
    "id": "id",
    "name": "name",
    "price": "price",
    "inventory": "inventory",
    "taxRate": "tax_rate",
    "tax_rate": "tax_rate",
    "categoryId": "category_id",
    "category_id": "category_id",
}

SORT_DIRECTIONS = ("ASC", "DESC")


class ProductService:
    """
    Business logic for products.

    Responsibilities:
      - referential check of category_id on create/update
      - listing by one or many categories with sort / limit / offset
    """

    def __init__(self, repo: ProductRepository, category_repo: CategoryRepository):
        self.repo = repo
        self.category_repo = category_repo

    # ----- Helpers -----

    def _ensure_category_exists(self, session: Session, category_id: int) -> None:
        if self.category_repo.get_by_id(session, category_id) is None:
            logger.warning("Category %s does not exist", category_id)
            raise CategoryNotFoundError(category_id)

    @staticmethod
    def _parse_sort(sort: str | None) -> tuple[str, str] | None:
        """
        Parse `field[,DIRECTION]` into (column, direction).

        Direction defaults to ASC and is case-insensitive.
        """
        if not sort:
            return None

        field, _, direction = sort.partition(",")
        field = field.strip()
        direction = direction.strip().upper() or "ASC"

        if field not in SORTABLE_FIELDS:
            raise InvalidParameterError(f"Invalid sort field: {field}")
        if direction not in SORT_DIRECTIONS:
            raise InvalidParameterError(f"Invalid sort direction: {direction}")
        return SORTABLE_FIELDS[field], direction

    @staticmethod
    def _parse_category_ids(categories: str | list[int] | None) -> list[int]:
        if not categories:
            raise MissingParameterError("Categories parameter is required")

        if not isinstance(categories, str):
            return list(categories)

        parts = [p.strip() for p in categories.split(",") if p.strip()]
        if not parts:
            raise MissingParameterError("Categories parameter is required")
        try:
            return [int(p) for p in parts]
        except ValueError:
            raise InvalidParameterError(f"Invalid categories parameter: {categories}")

    # ----- Products -----

    def get_all_products(self, session: Session) -> list[Product]:
        return self.repo.list_all(session)

    def get_product_by_id(self, session: Session, product_id: int) -> Product | None:
        return self.repo.get_by_id(session, product_id)

    def create_product(self, session: Session, payload: ProductCreate) -> Product:
        self._ensure_category_exists(session, payload.category_id)

        product = Product(
            name=payload.name,
            description=payload.description,
            price=payload.price,
            inventory=payload.inventory,
            tax_rate=payload.tax_rate,
            category_id=payload.category_id,
        )
        product = self.repo.create(session, product)
        logger.info("Created product %s (%s)", product.id, product.name)
        return product

    def update_product(
        self,
        session: Session,
        product_id: int,
        payload: ProductUpdate,
    ) -> Product:
        """
        Partial update of a product.

        - If category_id is given, the category must exist.
        """
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise ProductNotFoundError()

        if payload.category_id is not None:
            self._ensure_category_exists(session, payload.category_id)
            product.category_id = payload.category_id

        if payload.name is not None:
            product.name = payload.name

        if payload.description is not None:
            product.description = payload.description

        if payload.price is not None:
            product.price = payload.price

        if payload.inventory is not None:
            product.inventory = payload.inventory

        if payload.tax_rate is not None:
            product.tax_rate = payload.tax_rate

        return self.repo.update(session, product)

    def delete_product(self, session: Session, product_id: int) -> bool:
        """
        Delete a product. Returns False if it did not exist.
        """
        product = self.repo.get_by_id(session, product_id)
        if not product:
            return False
        self.repo.delete(session, product)
        logger.info("Deleted product %s", product_id)
        return True

    # ----- Listing -----

    def get_products_by_category(
        self,
        session: Session,
        category_id: int,
        sort: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Product]:
        return self.repo.list_by_categories(
            session,
            [category_id],
            order=self._parse_sort(sort),
            limit=limit,
            offset=offset,
        )

    def get_products_by_categories(
        self,
        session: Session,
        categories: str | list[int] | None,
        sort: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Product]:
        """
        Products belonging to any of the given categories.

        Args:
            categories: comma-separated ids ("1,2,3") or a list of ids.
        """
        category_ids = self._parse_category_ids(categories)
        return self.repo.list_by_categories(
            session,
            category_ids,
            order=self._parse_sort(sort),
            limit=limit,
            offset=offset,
        )
