import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth import router as auth_router
from auth.security import TokenService
from core import db
from core.config import Settings
from core.errors import ApiError
from core.logs import configure_logging
from users import repository as user_repository
from users import router as users_router

logger = logging.getLogger(__name__)


def _validation_errors(exc: RequestValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        # Drop the leading "body"/"path"/"query" segment.
        location = [str(part) for part in error.get("loc", ())[1:]] or ["request"]
        errors.setdefault(".".join(location), str(error.get("msg") or "Invalid value"))
    return errors


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content={"message": "Validation failed", "errors": _validation_errors(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_error %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


def _register_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info("%s %s %s %.1f ms", request.method, request.url.path, status_code, elapsed_ms)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        # Initialize the DB pool once per process.
        await db.init_pool(settings.database_url)
        try:
            await user_repository.ensure_schema()
            yield
        finally:
            await db.close_pool()

    app = FastAPI(lifespan=lifespan)
    app.state.settings = settings
    app.state.token_service = TokenService(settings)

    origins = list(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials with a wildcard origin.
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if not settings.is_test:
        _register_request_logging(app)
    _register_exception_handlers(app)

    app.include_router(auth_router.router, prefix="/api", tags=["auth"])
    app.include_router(users_router.router, prefix="/api", tags=["users"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
