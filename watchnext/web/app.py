"""
Application FastAPI de WatchNext.

Initialise l'application web avec le Container DI, monte les routes et
convertit les erreurs du domaine en reponses HTTP.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from ..container import Container
from ..core.errors import (
    CatalogInconsistentError,
    CatalogUnavailableError,
    InvalidInputError,
    UnsupportedContentKindError,
)
from ..services.playback_report import UnknownVideoError
from .routes.feed import router as feed_router
from .routes.playback import router as playback_router


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container à utiliser (un nouveau Container par défaut)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialise le Container DI au démarrage."""
        active = container or Container()
        active.database.init()
        app.state.container = active
        yield

    app = FastAPI(title="WatchNext", lifespan=lifespan)

    @app.exception_handler(UnknownVideoError)
    async def unknown_video_handler(request: Request, exc: UnknownVideoError):
        return _error_response(404, exc)

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        return _error_response(422, exc)

    @app.exception_handler(UnsupportedContentKindError)
    async def unsupported_kind_handler(request: Request, exc: UnsupportedContentKindError):
        return _error_response(422, exc)

    @app.exception_handler(CatalogInconsistentError)
    async def inconsistent_handler(request: Request, exc: CatalogInconsistentError):
        return _error_response(409, exc)

    @app.exception_handler(CatalogUnavailableError)
    async def unavailable_handler(request: Request, exc: CatalogUnavailableError):
        logger.error(f"Catalogue indisponible pendant {request.url.path}: {exc}")
        return _error_response(503, exc)

    app.include_router(playback_router)
    app.include_router(feed_router)
    return app


app = create_app()
