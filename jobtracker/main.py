from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from .api import auth as auth_api
from .api import job as job_api
from .database import create_db_engine, create_session_factory, init_db
from .utils.error_handlers import AppError, create_error_response, get_error_message
from .utils.logging_config import configure_logging

logger = logging.getLogger(__name__)

SERVICE_NAME = "Job Application Tracker"


def create_app(database_url: str | None = None, secret_key: str | None = None) -> FastAPI:
    """
    Build the API. The database engine is opened when the app starts serving
    and disposed when it shuts down; nothing connects at import time.
    """
    configure_logging()
    database_url = database_url or config.DATABASE_URL
    secret_key = secret_key or config.JWT_SECRET

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            engine = create_db_engine(database_url)
            init_db(engine)
        except Exception:
            # Without a schema there is nothing useful to serve.
            logger.exception("Database startup failed")
            raise
        logger.info("Database ready (%s)", engine.dialect.name)

        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        app.state.secret_key = secret_key
        try:
            yield
        finally:
            engine.dispose()
            logger.info("Database connections closed")

    app = FastAPI(title=SERVICE_NAME, lifespan=lifespan)

    app.include_router(auth_api.router)
    app.include_router(job_api.router)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        """Map application error kinds to their HTTP status."""
        if exc.status_code >= 500:
            logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
        return create_error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTPException (ours and the router's 404/405) with user-friendly messages."""
        return create_error_response(exc.status_code, exc.detail)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Wrong field types in a body are input errors like any other: 400."""
        return create_error_response(
            400,
            get_error_message("validation_error"),
            details={"errors": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(OperationalError)
    async def sqlalchemy_operational_error_handler(request: Request, exc: OperationalError):
        """Handle database operational errors."""
        logger.exception("Database OperationalError: %s", exc)
        return create_error_response(503, get_error_message("database_error"))

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        """Handle general database errors."""
        logger.exception("Database SQLAlchemyError: %s", exc)
        return create_error_response(500, get_error_message("database_error"))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected errors globally."""
        logger.exception("Unhandled exception: %s", exc)
        return create_error_response(500, get_error_message("server_error"))

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {
            "status": "Backend running",
            "service": SERVICE_NAME,
        }

    _default_origins = ["http://localhost:5173", "http://127.0.0.1:5173"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[*_default_origins, *config.FRONTEND_ORIGINS],
        allow_origin_regex=r"^https?://(localhost|127\.0\.0\.1)(:\d+)?$",
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


app = create_app()
