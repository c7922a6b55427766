# storefront/core/routing.py
import logging
from typing import Any, Callable, Coroutine

from fastapi import Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.errors import StorefrontError

logger = logging.getLogger(__name__)

# Rendered by the app-level handlers in storefront.core.handlers
HANDLED_ELSEWHERE = (StorefrontError, StarletteHTTPException, RequestValidationError)


def error_response(status_code: int, message: str | None = None):
    """
    Override, for one endpoint, how unexpected failures are reported.

    Apply below the router decorator:

        @router.get("")
        @error_response(status.HTTP_500_INTERNAL_SERVER_ERROR)
        def list_products(...):
            ...

    `message=None` passes the exception text through.
    """

    def decorator(endpoint: Callable) -> Callable:
        endpoint.error_status_code = status_code
        endpoint.error_message = message
        return endpoint

    return decorator


def error_route(status_code: int, message: str | None = None) -> type[APIRoute]:
    """
    Build an APIRoute class that turns any unexpected exception raised by
    an endpoint into `{"error": <message>}` with `status_code`.

    Business errors, HTTP errors and validation errors are re-raised so
    the app-level handlers render them with their own status.
    """

    class ErrorMappingRoute(APIRoute):
        def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
            original_route_handler = super().get_route_handler()
            route_status = getattr(self.endpoint, "error_status_code", status_code)
            route_message = getattr(self.endpoint, "error_message", message)

            async def route_handler(request: Request) -> Response:
                try:
                    return await original_route_handler(request)
                except HANDLED_ELSEWHERE:
                    raise
                except Exception as exc:
                    logger.error(
                        "Unhandled error on %s %s", request.method, request.url.path,
                        exc_info=exc,
                    )
                    return JSONResponse(
                        status_code=route_status,
                        content={"error": route_message or str(exc)},
                    )

            return route_handler

    return ErrorMappingRoute


# Default for routers whose failures are all client-facing
BadRequestRoute = error_route(status.HTTP_400_BAD_REQUEST)
