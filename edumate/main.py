"""Command-line entry point for the EduMate server.

RUN_MODE selects what is served on HOST:PORT:

- ``integrated`` (default): HTTP API plus the NiceGUI study page
- ``api``: HTTP API only

Environment variables are loaded from a .env file if present.
"""

import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Log to stdout at LOG_LEVEL (default INFO)."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _serve(app: object) -> None:
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Listening on http://{host}:{port} (API docs at /docs)")
    uvicorn.run(app, host=host, port=port, log_level=os.getenv("LOG_LEVEL", "info").lower())


def run_integrated() -> None:
    """Serve the API with the study page mounted at ``/``."""
    from nicegui import ui

    from edumate.api.app import create_app
    from edumate.ui.chat_page import chat_page  # noqa: F401 - registers the page

    app = create_app()
    ui.run_with(
        app,
        title="EduMate",
        favicon="📚",
        # app.storage.user keeps the per-browser language preference
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "edumate-secret"),
    )
    _serve(app)


def run_api() -> None:
    """Serve the HTTP API without the web interface."""
    from edumate.api.app import create_app

    _serve(create_app())


def main() -> None:
    configure_logging()
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting EduMate in {mode} mode")

    if mode == "api":
        run_api()
    elif mode == "integrated":
        run_integrated()
    else:
        logger.error(f"Unknown RUN_MODE '{mode}'; expected 'integrated' or 'api'")
        sys.exit(2)


if __name__ == "__main__":
    main()
