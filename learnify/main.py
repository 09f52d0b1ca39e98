# learnify/main.py
import logging
import time
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from learnify.api.v1.endpoints import admin, auth, courses, enrollments, health
from learnify.core.config import Settings, settings
from learnify.core.errors import LearnifyError
from learnify.core.logging_config import setup_logging
from learnify.db.init_db import init_db
from learnify.db.session import engine as default_engine
from learnify.services.container import build_services

logger = logging.getLogger(__name__)


def _error_body(message: str, **extra) -> dict:
    return {"success": False, "message": message, **extra}


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LearnifyError)
    async def learnify_error_handler(request: Request, exc: LearnifyError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Validation failed", errors=jsonable_encoder(exc.errors())),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Internal server error"),
        )


def create_app(config: Settings = settings, *, engine: Optional[Engine] = None) -> FastAPI:
    setup_logging(config.LOG_LEVEL)
    db_engine = engine if engine is not None else default_engine

    app = FastAPI(title=config.PROJECT_NAME, version=config.API_VERSION)
    app.state.services = build_services(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        client = request.client.host if request.client else "-"
        logger.info(
            "%s %s - Status: %s - %.0fms - IP: %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            client,
        )
        return response

    register_exception_handlers(app)

    @app.on_event("startup")
    def on_startup():
        try:
            init_db(db_engine)
        except SQLAlchemyError:
            logger.exception("Database initialization failed. Check DATABASE_URL and Postgres credentials.")

    @app.get("/")
    def root():
        return {"message": "Learnify Server is running!"}

    prefix = config.API_V1_PREFIX
    app.include_router(health.router, prefix=prefix)
    app.include_router(auth.router, prefix=prefix)
    app.include_router(courses.router, prefix=prefix)
    app.include_router(admin.router, prefix=prefix)
    app.include_router(enrollments.router, prefix=prefix)

    return app


app = create_app()
