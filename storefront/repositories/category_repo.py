# storefront/repositories/category_repo.py
from sqlmodel import Session, select

from storefront.models.category import Category


class CategoryRepository:

    def get_by_id(self, session: Session, category_id: int) -> Category | None:
        return session.get(Category, category_id)

    def list_all(self, session: Session) -> list[Category]:
        stmt = select(Category).order_by(Category.id)
        return session.exec(stmt).all()

    def create(self, session: Session, category: Category) -> Category:
        session.add(category)
        session.commit()
        session.refresh(category)
        return category
