import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    error_dict.update(exc.hints)
    logger.warning(f"Client error: {error_dict}")

    headers = None
    if "retry_after" in exc.hints:
        headers = {"Retry-After": str(exc.hints["retry_after"])}
    return JSONResponse(
        status_code=exc.status_code, content={"error": error_dict}, headers=headers
    )


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code} - {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(
        f"{request.method} {request.url.path} - {response.status_code} - {duration_ms:.1f} ms"
    )
    return response


def _init_sentry(ApplicationConfig) -> None:
    import sentry_sdk

    sentry_sdk.init(
        dsn=ApplicationConfig.DSN_SENTRY,
        environment=ApplicationConfig.SENTRY_ENVIRONMENT,
        traces_sample_rate=0.0,
    )
    logger.info("Sentry error reporting enabled")


def create_app(ApplicationConfig) -> FastAPI:
    logging.basicConfig(
        level=getattr(logging, str(ApplicationConfig.LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if ApplicationConfig.ENABLE_SENTRY and ApplicationConfig.DSN_SENTRY:
        _init_sentry(ApplicationConfig)

    app = FastAPI(title="Auth Service API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if ApplicationConfig.ENABLE_LOGGING_MIDDLEWARE:
        app.middleware("http")(log_requests)

    from src.api.routes import admin, auth, health_check

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(admin.router, tags=["Admin"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
