# storefront/repositories/product_repo.py
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from storefront.models.product import Product


class ProductRepository:
    """
    Data access layer for Product.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(
        self,
        session: Session,
        product_id: int,
        for_update: bool = False,
    ) -> Product | None:
        """
        Fetch a product by primary key.

        `for_update=True` locks the row (SELECT ... FOR UPDATE) until the
        session's transaction ends; dialects without row locks ignore it.
        """
        return session.get(Product, product_id, with_for_update=for_update)

    def list_all(self, session: Session) -> list[Product]:
        stmt = (
            select(Product)
            .options(selectinload(Product.category))
            .order_by(Product.id)
        )
        return session.exec(stmt).all()

    def list_by_categories(
        self,
        session: Session,
        category_ids: list[int],
        order: tuple[str, str] | None = None,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Product]:
        """
        Products whose category_id is in `category_ids`.

        Args:
            order: (column name, "ASC" | "DESC"), already validated.
        """
        if len(category_ids) == 1:
            stmt = select(Product).where(Product.category_id == category_ids[0])
        else:
            stmt = select(Product).where(Product.category_id.in_(category_ids))
        stmt = stmt.options(selectinload(Product.category))

        if order is not None:
            field, direction = order
            column = getattr(Product, field)
            stmt = stmt.order_by(column.desc() if direction == "DESC" else column.asc())

        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        return session.exec(stmt).all()

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def delete(self, session: Session, product: Product) -> None:
        session.delete(product)
        session.commit()
