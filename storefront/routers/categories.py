# storefront/routers/categories.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from storefront.core.handlers import INTERNAL_ERROR_MESSAGE
from storefront.core.routing import error_route
from storefront.database import get_session
from storefront.repositories.category_repo import CategoryRepository
from storefront.schemas.category import CategoryCreate, CategoryRead
from storefront.services.category_service import CategoryService

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
    route_class=error_route(
        status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE
    ),
)

repo = CategoryRepository()
service = CategoryService(repo)


def get_category_service() -> CategoryService:
    return service


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    payload: CategoryCreate,
    session: Session = Depends(get_session),
    category_service: CategoryService = Depends(get_category_service),
):
    """
    Create a category.

    - Missing/empty name => 400.
    - Duplicate name or any store failure => 500.
    """
    return category_service.create_category(session, payload)


@router.get("", response_model=list[CategoryRead])
def list_categories(
    session: Session = Depends(get_session),
    category_service: CategoryService = Depends(get_category_service),
):
    return category_service.list_categories(session)
