"""FastAPI application factory.

Startup checks the string tables of the shared localization provider;
shutdown discards every session still registered with the manager.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from edumate import __version__
from edumate.api.routes import router as sessions_router
from edumate.config import get_settings
from edumate.session.manager import SessionManager, get_session_manager

logger = logging.getLogger(__name__)


def _resolve_manager(app: FastAPI) -> SessionManager:
    provider = app.dependency_overrides.get(get_session_manager, get_session_manager)
    return provider()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Validate translations before serving and release sessions afterwards.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.

    Raises:
        MissingTranslationKeyError: If a language table lacks a key.
    """
    manager = _resolve_manager(app)
    manager.localization.validate_tables()
    logger.info(
        f"EduMate API ready (responder={manager.settings.responder}, "
        f"language={manager.localization.language})"
    )
    yield
    discarded = manager.close()
    logger.info(f"EduMate API stopped; discarded {discarded} session(s)")


def create_app() -> FastAPI:
    """Build the HTTP application.

    Returns:
        FastAPI application with the session and language routes.
    """
    settings = get_settings()
    application = FastAPI(
        title="EduMate API",
        description=(
            "Study companion API. Submit a document, then ask questions about it "
            "in a turn-based conversation. Processing and answers complete "
            "asynchronously; poll the session to observe them."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    application.include_router(sessions_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Liveness check."""
        return {"status": "healthy", "service": "edumate"}

    return application


app = create_app()
