from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.routes import router
from app.core.config import settings
from app.core.errors import AppError
from app.core.logging import configure_logging
from app.db.session import init_db
from app.schemas import ErrorResponse

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    configure_logging(settings.log_level)
    app = FastAPI(
        title="Niyam API",
        version="1.0.0",
        description="API/Backend service for the Niyam application.",
    )
    # Read-only after construction; uptime is measured from here.
    app.state.started_at = time.monotonic()
    app.include_router(router)
    register_error_handlers(app)

    @app.on_event("startup")
    async def _startup() -> None:
        logger.info("startup", extra={"environment": settings.app_env})
        await init_db()

    return app


def register_error_handlers(app: FastAPI) -> None:
    """Map service errors to JSON responses without leaking internals."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500 or not exc.public:
            logger.error(
                "request_failed",
                extra={
                    "path": request.url.path,
                    "error_code": exc.error_code,
                    "error": exc.message,
                    "details": exc.details,
                    "cause": repr(exc.__cause__),
                },
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=exc.client_message(), error_code=exc.error_code).model_dump(),
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled_server_error", extra={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal server error.", error_code="INTERNAL_ERROR").model_dump(),
        )


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
