# storefront/core/errors.py
from fastapi import status


class StorefrontError(Exception):
    """
    Base class for expected business failures.

    Services raise these; the handlers in `storefront.core.handlers`
    render them as `{"error": <message>}` with `status_code`.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST
    message: str = "Request could not be processed"

    def __init__(self, message: str | None = None):
        self.message = message or self.message
        super().__init__(self.message)


class NotFoundError(StorefrontError):
    message = "Not found"


class ProductNotFoundError(NotFoundError):
    message = "Product not found"


class ItemNotFoundError(NotFoundError):
    message = "Item not found"


class CategoryNotFoundError(NotFoundError):
    def __init__(self, category_id: int):
        self.category_id = category_id
        super().__init__(f"Category with id {category_id} does not exist")


class InsufficientInventoryError(StorefrontError):
    message = "Not enough inventory available"


class MissingParameterError(StorefrontError):
    message = "Missing required parameter"


class InvalidParameterError(StorefrontError):
    message = "Invalid parameter"
