# storefront/routers/products.py
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlmodel import Session

from storefront.core.routing import BadRequestRoute, error_response
from storefront.database import get_session
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import ProductCreate, ProductRead, ProductUpdate
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"], route_class=BadRequestRoute)

repo = ProductRepository()
category_repo = CategoryRepository()
service = ProductService(repo, category_repo)


def get_product_service() -> ProductService:
    return service


# -------- Listing --------


@router.get("", response_model=list[ProductRead])
@error_response(status.HTTP_500_INTERNAL_SERVER_ERROR)
def list_products(
    session: Session = Depends(get_session),
    product_service: ProductService = Depends(get_product_service),
):
    return product_service.get_all_products(session)


@router.get("/categories", response_model=list[ProductRead])
def list_products_by_categories(
    categories: str | None = None,
    sort: str | None = Query(default=None, description="field[,ASC|DESC]"),
    limit: int | None = Query(default=None, ge=0),
    offset: int | None = Query(default=None, ge=0),
    session: Session = Depends(get_session),
    product_service: ProductService = Depends(get_product_service),
):
    """
    Products in any of the given categories.

    - `categories`: comma-separated ids, e.g. `1,2,3` (required).
    """
    return product_service.get_products_by_categories(
        session, categories, sort=sort, limit=limit, offset=offset
    )


@router.get("/category/{category_id}", response_model=list[ProductRead])
def list_products_by_category(
    category_id: int,
    sort: str | None = Query(default=None, description="field[,ASC|DESC]"),
    limit: int | None = Query(default=None, ge=0),
    offset: int | None = Query(default=None, ge=0),
    session: Session = Depends(get_session),
    product_service: ProductService = Depends(get_product_service),
):
    return product_service.get_products_by_category(
        session, category_id, sort=sort, limit=limit, offset=offset
    )


# -------- Single product --------


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: int,
    session: Session = Depends(get_session),
    product_service: ProductService = Depends(get_product_service),
):
    product = product_service.get_product_by_id(session, product_id)
    if not product:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return product


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
    product_service: ProductService = Depends(get_product_service),
):
    """
    Create a product. The referenced category must exist.
    """
    return product_service.create_product(session, payload)


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
    product_service: ProductService = Depends(get_product_service),
):
    if product_service.get_product_by_id(session, product_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return product_service.update_product(session, product_id, payload)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    session: Session = Depends(get_session),
    product_service: ProductService = Depends(get_product_service),
):
    if not product_service.delete_product(session, product_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Product not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
