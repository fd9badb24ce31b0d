"""Registry of chat sessions sharing one responder and localization provider.

The language preference is the only state shared across sessions; it
lives in the provider and is persisted through its store.

Registered sessions are dropped after ``session_ttl`` seconds without a
lookup, and the least recently used go first once ``max_sessions`` is
reached. Expiry is checked whenever a session is created or looked up.
"""

import logging
import time
from collections import OrderedDict
from collections.abc import Callable

from edumate.config import AppSettings, get_settings
from edumate.i18n.preferences import FilePreferenceStore, PreferenceStore
from edumate.i18n.provider import LocalizationProvider
from edumate.pipeline.responder import Responder, SimulatedResponder
from edumate.session.chat_session import ChatSession

logger = logging.getLogger(__name__)


def build_responder(settings: AppSettings, localization: LocalizationProvider) -> Responder:
    """Create the responder selected by ``settings.responder``."""
    if settings.responder == "agent":
        # Imported lazily: the agent stack is heavy and optional
        from edumate.agent.study_agent import StudyAgentResponder

        return StudyAgentResponder(data_dir=settings.data_dir)

    return SimulatedResponder(
        localization,
        analysis_delay=settings.analysis_delay,
        answer_delay=settings.answer_delay,
    )


class SessionManager:
    """Creates, looks up and discards sessions.

    Args:
        settings: Application settings; loaded from environment if omitted.
        localization: Shared provider; built from settings if omitted.
        responder: Shared responder; built from settings if omitted.
        store: Preference store used when building the provider.
        clock: Monotonic time source for idle expiry.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        localization: LocalizationProvider | None = None,
        responder: Responder | None = None,
        store: PreferenceStore | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._settings = settings or get_settings()
        self.localization = localization or LocalizationProvider(
            store or FilePreferenceStore(self._settings.preferences_file),
            default_language=self._settings.default_language,
            strict=self._settings.strict_i18n,
        )
        self.responder = responder or build_responder(self._settings, self.localization)
        self._clock = clock
        # Ordered from least to most recently used
        self._sessions: OrderedDict[str, ChatSession] = OrderedDict()
        self._last_used: dict[str, float] = {}

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def __len__(self) -> int:
        return len(self._sessions)

    def create(
        self,
        localization: LocalizationProvider | None = None,
        register: bool = True,
    ) -> ChatSession:
        """Create a session sharing this manager's responder.

        Args:
            localization: Provider for this session only, e.g. one backed by
                per-browser storage; the shared provider is used otherwise.
            register: Keep the session in the registry for lookup by id.
                Pages that own their session for its whole life skip this.
        """
        session = ChatSession(
            self.responder,
            localization or self.localization,
            analysis_timeout=self._settings.analysis_timeout,
            answer_timeout=self._settings.answer_timeout,
        )
        if register:
            self.expire()
            while len(self._sessions) >= self._settings.max_sessions:
                oldest = next(iter(self._sessions))
                logger.info(f"Session limit reached; evicting {oldest}")
                self.discard(oldest)
            self._sessions[session.session_id] = session
            self._touch(session.session_id)
        logger.info(f"Created session {session.session_id}")
        return session

    def get(self, session_id: str) -> ChatSession | None:
        self.expire()
        session = self._sessions.get(session_id)
        if session is not None:
            self._touch(session_id)
        return session

    def discard(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        self._last_used.pop(session_id, None)
        if session is None:
            return False
        session.reset()
        logger.info(f"Discarded session {session_id}")
        return True

    def expire(self) -> int:
        """Discard sessions idle for longer than ``session_ttl``.

        Returns:
            Number of sessions discarded.
        """
        deadline = self._clock() - self._settings.session_ttl
        stale = [sid for sid, used in self._last_used.items() if used < deadline]
        for session_id in stale:
            logger.info(f"Session {session_id} expired after inactivity")
            self.discard(session_id)
        return len(stale)

    def close(self) -> int:
        """Discard every registered session.

        Returns:
            Number of sessions discarded.
        """
        session_ids = list(self._sessions)
        for session_id in session_ids:
            self.discard(session_id)
        return len(session_ids)

    def _touch(self, session_id: str) -> None:
        self._sessions.move_to_end(session_id)
        self._last_used[session_id] = self._clock()


# Module-level singleton instance
_session_manager: SessionManager | None = None


def get_session_manager() -> SessionManager:
    """Get or create the global session manager.

    Returns:
        The SessionManager instance.
    """
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager()
    return _session_manager
