"""FastAPI application setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.responses import JSONResponse

from src.user_admin.api.http.app_data import ApplicationDependencies
from src.user_admin.api.http.routers.directory import router as directory_router
from src.user_admin.api.http.routers.external_users import (
    router as external_users_router,
)
from src.user_admin.api.http.routers.health import router as health_router
from src.user_admin.api.http.routers.users import router as users_router
from src.user_admin.api.utils.app_startup import configure_logging
from src.user_admin.core.services import (
    ExternalSourceError,
    ExternalUserService,
    UserDirectoryService,
)
from src.user_admin.core.storage import InMemoryUserStorage
from src.user_admin.runtime.context import get_config

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title="User Admin",
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

# expose startup for tests
__all__ = ["app", "startup", "shutdown"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().app.cors.origins,
    allow_credentials=get_config().app.cors.allow_credentials,
    allow_methods=get_config().app.cors.allow_methods,
    allow_headers=get_config().app.cors.allow_headers,
)


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or "-"


# --- Request logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
    }

    start = time.perf_counter()
    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)
        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"detail": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )

        duration_ms = (time.perf_counter() - start) * 1000
        logger.bind(
            status_code=response.status_code,
            duration_ms=round(duration_ms, 1),
        ).info("request.end")
        response.headers.setdefault("X-Request-ID", request_id)
        return response


# --- Error mapping ---
@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in err["loc"] if part != "body"),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    from_body = any(err["loc"] and err["loc"][0] == "body" for err in exc.errors())
    logger.bind(errors=errors).info("request.validation_error")
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Invalid user data" if from_body else "Invalid request",
            "errors": errors,
            "request_id": _request_id(request),
        },
    )


@app.exception_handler(ExternalSourceError)
async def external_source_error_handler(request: Request, exc: ExternalSourceError):
    logger.bind(attempts=exc.attempts).error("external_source.unavailable: {}", exc)
    return JSONResponse(
        status_code=502,
        content={
            "detail": str(exc),
            "retryable": True,
            "request_id": _request_id(request),
        },
    )


# --- Router registration ---
app.include_router(health_router)
app.include_router(users_router)
app.include_router(external_users_router)
app.include_router(directory_router)


# --- Lifecycle hooks ---
async def startup() -> None:
    config = get_config()

    user_storage = InMemoryUserStorage()
    external_user_service = ExternalUserService()
    directory_service = UserDirectoryService(user_storage, external_user_service)

    app.state.app_dependencies = ApplicationDependencies(
        user_storage=user_storage,
        external_user_service=external_user_service,
        directory_service=directory_service,
    )
    logger.info(
        "Starting up application in {} environment (external source: {})",
        config.app.environment,
        config.external_source.url if config.external_source.enabled else "disabled",
    )


async def shutdown() -> None:
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    logger.bind(users=await app_dependencies.user_storage.count()).info(
        "Shutting down application; in-memory users are discarded"
    )
    app_dependencies.external_user_service.clear_cache()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,
    )
