from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from core.config import Settings
from core.database import Database
from core.exceptions import AppError
from core.logging import configure_logging
from core.migrations import run_migrations
from routers import (
    flashcard_sets as flashcard_sets_router,
    flashcards as flashcards_router,
    generate as generate_router,
    study_progress as study_progress_router,
    upload as upload_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    db: Database = app.state.db
    db.open()
    try:
        added = run_migrations(db.engine)
        logger.info("database_ready", url=db.engine.url.render_as_string(hide_password=True), columns_added=added)
        yield
    finally:
        db.close()


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        msg = str(err.get("msg", "Invalid value")).removeprefix("Value error, ")
        messages.append(f"{field}: {msg}" if field else msg)
    return "; ".join(messages) or "Invalid request"


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _validation_message(exc)})


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("database_error", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("unexpected_error", path=request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    configure_logging(settings.ENVIRONMENT)

    app = FastAPI(title="Flashcard Tutor", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = Database(settings.DATABASE_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)

    app.include_router(flashcard_sets_router.router)
    app.include_router(flashcards_router.router)
    app.include_router(generate_router.router)
    app.include_router(study_progress_router.router)
    app.include_router(upload_router.router)

    settings.UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

    @app.get("/status")
    async def status():
        return {"status": "ok"}

    return app


if __name__ == "__main__":
    uvicorn.run("main:create_app", factory=True, reload=True, host="127.0.0.1", port=8000)
