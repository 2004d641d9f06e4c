from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from music_library.api.routes.tracks import router as tracks_router
from music_library.core.config import Settings, settings as default_settings
from music_library.core.errors import StorageError, TrackError
from music_library.core.logging import logger, setup_logging
from music_library.db.session import DatabaseManager


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> tuple[int, str]:
    """FastAPI 검증 오류 → (status, message). 첫 번째 오류만 사용"""
    errors = exc.errors()
    if not errors:
        return 400, "Invalid request"
    first = errors[0]
    loc = tuple(first.get("loc", ()))
    kind = first.get("type")

    if loc[:1] == ("path",):
        # 정수가 아닌 id 는 어떤 레코드와도 매칭될 수 없음
        return 404, f"Track with id: {first.get('input')} not found"
    if kind == "json_invalid":
        return 400, "Invalid JSON body"
    if kind == "missing":
        return 400, "Missing required fields"
    return 400, first.get("msg", "Invalid request")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TrackError)
    async def _track_error(request: Request, exc: TrackError):
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _request_validation(request: Request, exc: RequestValidationError):
        status_code, message = _validation_message(exc)
        logger.info(f"[api] rejected {request.method} {request.url.path}: {message}")
        return _error(status_code, message)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception):
        logger.exception(f"[api] unhandled error on {request.method} {request.url.path}")
        return _error(500, "Internal server error")


def create_app(settings: Optional[Settings] = None, db: Optional[DatabaseManager] = None) -> FastAPI:
    settings = settings or default_settings
    db = db or DatabaseManager()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting music library API env={settings.APP_ENV}")
        try:
            await db.ping()
            logger.info("Connection to database successfully established")
            if settings.DB_INIT_ON_STARTUP:
                await db.init_schema()
        except StorageError:
            logger.exception("Unable to connect to the database")
            if settings.DB_FAIL_FAST:
                raise
        yield
        await db.dispose()

    app = FastAPI(title="Music Library API", lifespan=lifespan)
    app.state.db = db
    register_exception_handlers(app)
    app.include_router(tracks_router, prefix="/api/tracks", tags=["tracks"])
    return app


def main():
    setup_logging(default_settings.LOG_LEVEL)
    logger.info(f"Server running at http://localhost:{default_settings.PORT}")
    uvicorn.run(
        create_app(),
        host=default_settings.HOST,
        port=default_settings.PORT,
        log_level=default_settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
