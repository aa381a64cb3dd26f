from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import ResponseValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from itemsvc.config import APP_NAME, APP_VERSION
from itemsvc.errors import ItemServiceError, MethodNotAllowedError, SerializationError
from itemsvc.observability import RequestContextMiddleware
from itemsvc.routes.items import get_store
from itemsvc.routes.items import router as items_router
from itemsvc.schemas import HealthResponse
from itemsvc.storage import ItemStore, NanosecondKeys


def allowed_methods(request: Request) -> str:
    """Every method some route accepts on the request's path."""
    methods = set()
    for route in request.app.router.routes:
        path_regex = getattr(route, "path_regex", None)
        if path_regex is not None and path_regex.match(request.url.path):
            methods.update(getattr(route, "methods", None) or ())
    return ", ".join(sorted(methods))


async def handle_service_error(request: Request, exc: ItemServiceError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def handle_response_validation_error(request: Request, exc: ResponseValidationError):
    return await handle_service_error(request, SerializationError(str(exc)))


async def handle_routing_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == MethodNotAllowedError.status_code:
        return PlainTextResponse(
            MethodNotAllowedError.message,
            status_code=exc.status_code,
            headers={"Allow": allowed_methods(request)},
        )
    # Unmatched paths carry no body.
    message = "" if exc.status_code == 404 else str(exc.detail)
    return PlainTextResponse(message, status_code=exc.status_code, headers=exc.headers)


def create_app(
    store: Optional[ItemStore] = None,
    key_factory: Optional[Callable[[], str]] = None,
) -> FastAPI:
    app = FastAPI(title=APP_NAME, version=APP_VERSION, redirect_slashes=False)
    app.state.store = store if store is not None else ItemStore()
    app.state.key_factory = key_factory or NanosecondKeys()

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(ItemServiceError, handle_service_error)
    app.add_exception_handler(ResponseValidationError, handle_response_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_routing_error)
    app.include_router(items_router)

    @app.get("/health", response_model=HealthResponse)
    async def health(request: Request):
        return HealthResponse(status="ok", version=APP_VERSION, items=len(get_store(request)))

    return app


app = create_app()
