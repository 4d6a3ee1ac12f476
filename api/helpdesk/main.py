import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import Settings, settings as default_settings
from .db import create_db_engine, create_session_factory, get_db, run_migrations
from .errors import HelpdeskError
from .routes_tickets import router as tickets_router

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def _internal_error() -> JSONResponse:
    # Never leak driver or SQL detail to the client
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "code": "PersistenceError"},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the connection pool: connect and migrate on startup, dispose on shutdown."""
    cfg: Settings = app.state.settings
    engine = create_db_engine(cfg.db_url, pool_pre_ping=cfg.db_pool_pre_ping)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        run_migrations(engine)
    except Exception:
        logger.exception("Startup aborted: database unreachable or migration failed")
        engine.dispose()
        raise

    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info("Database connected (%s)", engine.url.render_as_string(hide_password=True))
    try:
        yield
    finally:
        engine.dispose()
        logger.info("Database pool released")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    app = FastAPI(title="VentureDesk API", lifespan=lifespan)
    app.state.settings = settings

    @app.exception_handler(HelpdeskError)
    async def helpdesk_error_handler(request: Request, exc: HelpdeskError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
            return _internal_error()
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message, "code": exc.code},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": "Malformed request body", "code": "ValidationError"},
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            "%s %s database error", request.method, request.url.path, exc_info=exc
        )
        return _internal_error()

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            "%s %s unhandled error", request.method, request.url.path, exc_info=exc
        )
        return _internal_error()

    # Health check endpoint
    @app.get("/health", tags=["monitoring"])
    def health_check(db: Session = Depends(get_db)):
        db.execute(text("SELECT 1"))
        return {"status": "healthy"}

    app.include_router(tickets_router)
    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        app,
        host=default_settings.host,
        port=default_settings.port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
