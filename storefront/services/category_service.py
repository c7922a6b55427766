# storefront/services/category_service.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from storefront.models.category import Category
from storefront.repositories.category_repo import CategoryRepository
from storefront.schemas.category import CategoryCreate

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, repo: CategoryRepository):
        self.repo = repo

    def list_categories(self, session: Session) -> list[Category]:
        return self.repo.list_all(session)

    def get_category(self, session: Session, category_id: int) -> Category | None:
        return self.repo.get_by_id(session, category_id)

    def create_category(self, session: Session, payload: CategoryCreate) -> Category:
        """
        Create a category.

        A duplicate name violates the unique constraint; the IntegrityError
        is propagated and reported as an internal error.
        """
        try:
            category = self.repo.create(session, Category(name=payload.name))
        except IntegrityError:
            session.rollback()
            logger.warning("Category %r could not be created", payload.name)
            raise
        logger.info("Created category %s (%s)", category.id, category.name)
        return category
