"""Pytest fixtures and shared test configuration.

Fixtures:
    - store / localization: In-memory preference store and strict provider
    - responder: Test double whose results the test releases explicitly
    - session: ChatSession wired to the controlled responder
    - settings / manager: Zero-latency simulated configuration
    - async_client: HTTPX client against the FastAPI app
"""

import asyncio
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

from edumate.api.app import create_app
from edumate.config import AppSettings
from edumate.i18n.preferences import MemoryPreferenceStore
from edumate.i18n.provider import LocalizationProvider
from edumate.models.session import AnswerContext, Document, ResponderResult
from edumate.session.chat_session import ChatSession
from edumate.session.manager import SessionManager, get_session_manager


class ControlledResponder:
    """Responder whose operations stay pending until the test settles them.

    Each call parks on a future; ``resolve``/``reject``/``explode`` settle
    the oldest pending call, waiting for it to start if necessary.
    """

    def __init__(self) -> None:
        self.analyzed: list[Document] = []
        self.questions: list[tuple[str, AnswerContext]] = []
        self.released: list[Document] = []
        self._pending: list[asyncio.Future[ResponderResult]] = []

    async def analyze(self, document: Document) -> ResponderResult:
        self.analyzed.append(document)
        return await self._park()

    async def answer(self, text: str, context: AnswerContext) -> ResponderResult:
        self.questions.append((text, context))
        return await self._park()

    def release(self, document: Document) -> None:
        self.released.append(document)

    async def _park(self) -> ResponderResult:
        future: asyncio.Future[ResponderResult] = asyncio.get_running_loop().create_future()
        self._pending.append(future)
        return await future

    async def wait_started(self) -> None:
        """Yield to the loop until at least one call is pending."""
        for _ in range(100):
            if self._pending:
                return
            await asyncio.sleep(0)
        raise AssertionError("No responder call is pending")

    async def _next(self) -> asyncio.Future[ResponderResult]:
        await self.wait_started()
        return self._pending.pop(0)

    async def resolve(self, text: str = "done") -> None:
        (await self._next()).set_result(ResponderResult(text=text))

    async def reject(self, error: str = "unavailable") -> None:
        (await self._next()).set_result(ResponderResult(error=error))

    async def explode(self, exc: Exception) -> None:
        (await self._next()).set_exception(exc)


@pytest.fixture
def store() -> MemoryPreferenceStore:
    return MemoryPreferenceStore()


@pytest.fixture
def localization(store: MemoryPreferenceStore) -> LocalizationProvider:
    """Strict provider: a missing translation fails the test."""
    return LocalizationProvider(store, default_language="en", strict=True)


@pytest.fixture
def responder() -> ControlledResponder:
    return ControlledResponder()


@pytest.fixture
def session(responder: ControlledResponder, localization: LocalizationProvider) -> ChatSession:
    return ChatSession(responder, localization, analysis_timeout=5.0, answer_timeout=5.0)


@pytest.fixture
def notes_pdf() -> Document:
    return Document(name="notes.pdf", handle=b"%PDF-1.4 fake")


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    """Simulated responder without latency, data kept in a temp dir."""
    return AppSettings(
        responder="simulated",
        analysis_delay=0.0,
        answer_delay=0.0,
        strict_i18n=True,
        default_language="en",
        data_dir=tmp_path,
    )


@pytest.fixture
def manager(settings: AppSettings) -> SessionManager:
    return SessionManager(settings=settings, store=MemoryPreferenceStore())


@pytest.fixture
async def async_client(manager: SessionManager) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient wired to the test session manager.
    """
    app = create_app()
    app.dependency_overrides[get_session_manager] = lambda: manager
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
