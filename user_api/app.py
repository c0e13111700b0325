import logging

from fastapi import FastAPI, Request
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from user_api.core.config import Settings, get_settings
from user_api.core.logging_config import setup_logging
from user_api.repositories.json_storage import JsonUserStore, StorageError
from user_api.routers import users as users_router
from user_api.routers.users import error_response
from user_api.services.user_service import UserService

logger = logging.getLogger(__name__)


class CorsHeadersMiddleware(BaseHTTPMiddleware):
    """Stamp JSON content type and permissive CORS headers on every response.

    OPTIONS requests are answered here with an empty 200, whatever the path.
    """

    def __init__(self, app, *, allow_origin: str, allow_methods: str, allow_headers: str) -> None:
        super().__init__(app)
        self._headers = {
            "Content-Type": "application/json",
            "Access-Control-Allow-Origin": allow_origin,
            "Access-Control-Allow-Methods": allow_methods,
            "Access-Control-Allow-Headers": allow_headers,
        }

    async def dispatch(self, request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=200, media_type="application/json")
        else:
            response = await call_next(request)
        for name, value in self._headers.items():
            response.headers[name] = value
        return response


async def _http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code in (404, 405):
        logger.debug("No route for %s %s", request.method, request.url.path)
        return error_response(404, "Route not found")
    return error_response(exc.status_code, str(exc.detail))


async def _storage_error(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return error_response(500, "Storage unavailable")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; uvicorn can also call this as a factory."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    # Only /user routes exist; everything else must fall through to 404.
    app = FastAPI(title="User Record Service", docs_url=None, redoc_url=None, openapi_url=None)
    app.add_middleware(
        CorsHeadersMiddleware,
        allow_origin=settings.cors_allow_origin,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(StorageError, _storage_error)

    app.state.settings = settings
    app.state.user_service = UserService(
        JsonUserStore(settings.users_file),
        strict_storage=settings.strict_storage,
    )
    app.include_router(users_router.router)
    return app


app = create_app()
