"""Session state machine for one document-and-conversation interaction.

The session owns the mode, the active document and the message log,
and is the only caller of the response pipeline. Presentation adapters
forward intents (``select_document``, ``submit_text``, ``reset``,
``change_language``) and observe state through ``snapshot`` or
``subscribe``.

Intents whose guard fails are ignored without error. Pipeline work is
scheduled on the running event loop, so intents that start work must be
called from inside it.
"""

import logging
import uuid
from collections.abc import Callable

from edumate.i18n.provider import LocalizationProvider
from edumate.models.session import (
    AnswerContext,
    Completion,
    CompletionKind,
    Document,
    Message,
    Role,
    SessionMode,
    SessionSnapshot,
)
from edumate.pipeline.responder import Responder
from edumate.pipeline.response_pipeline import ResponsePipeline
from edumate.session.message_log import MessageLog, MessageView

logger = logging.getLogger(__name__)

SessionListener = Callable[["ChatSession"], None]


class ChatSession:
    """Manages state for a single user session.

    Args:
        responder: Produces analyses and answers.
        localization: Renders every assistant message template.
        analysis_timeout: Upper bound for document analysis in seconds.
        answer_timeout: Upper bound for answer generation in seconds.
        session_id: Optional fixed identifier; a UUID is generated otherwise.
    """

    def __init__(
        self,
        responder: Responder,
        localization: LocalizationProvider,
        analysis_timeout: float = 120.0,
        answer_timeout: float = 120.0,
        session_id: str | None = None,
    ) -> None:
        self.session_id: str = session_id or str(uuid.uuid4())
        self._responder = responder
        self._localization = localization
        self._mode = SessionMode.AWAITING_DOCUMENT
        self._document: Document | None = None
        self._log = MessageLog()
        self._listeners: list[SessionListener] = []
        self._pipeline = ResponsePipeline(
            responder,
            on_complete=self.handle_completion,
            analysis_timeout=analysis_timeout,
            answer_timeout=answer_timeout,
        )

    # === Observed state ===

    @property
    def mode(self) -> SessionMode:
        return self._mode

    @property
    def document(self) -> Document | None:
        return self._document

    @property
    def busy(self) -> bool:
        return self._pipeline.busy

    @property
    def generation(self) -> int:
        return self._pipeline.generation

    @property
    def language(self) -> str:
        return self._localization.language

    @property
    def localization(self) -> LocalizationProvider:
        return self._localization

    @property
    def messages(self) -> MessageView:
        return self._log.all()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            mode=self._mode,
            document_name=self._document.name if self._document else None,
            messages=list(self._log.all()),
            busy=self.busy,
            language=self.language,
            generation=self.generation,
        )

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register ``listener`` for every applied transition.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def wait_idle(self) -> None:
        """Wait for all outstanding pipeline work, including discarded work."""
        await self._pipeline.wait_idle()

    # === Intents ===

    def select_document(self, document: Document | None) -> bool:
        """Start processing ``document``; ignored unless awaiting a document."""
        if self._mode is not SessionMode.AWAITING_DOCUMENT or self.busy:
            logger.debug(f"Ignoring document selection in mode {self._mode.value}")
            return False
        if document is None or not document.is_valid():
            logger.debug("Ignoring invalid document reference")
            return False

        self._document = document
        self._mode = SessionMode.PROCESSING_DOCUMENT
        self._pipeline.analyze(document)
        logger.info(f"Session {self.session_id[:8]} processing document: {document.name}")
        self._notify()
        return True

    def submit_text(self, text: str) -> bool:
        """Append a user message and request an answer.

        Ignored when not conversing, when busy, or when ``text`` is blank.
        """
        if self._mode is not SessionMode.CONVERSING or self.busy:
            logger.debug(f"Ignoring submission (mode={self._mode.value}, busy={self.busy})")
            return False
        if not text or not text.strip():
            return False

        question = text.strip()
        self._log.add(Role.USER, question)
        context = AnswerContext(
            session_id=self.session_id,
            generation=self.generation,
            language=self.language,
            document=self._document,
            history=tuple(self._log.all()),
        )
        self._pipeline.answer(question, context)
        self._notify()
        return True

    def reset(self) -> bool:
        """Return to awaiting a document, discarding any outstanding result."""
        if self._mode is SessionMode.AWAITING_DOCUMENT:
            return False

        self._pipeline.cancel()
        document, self._document = self._document, None
        self._log.clear()
        self._mode = SessionMode.AWAITING_DOCUMENT
        if document is not None:
            self._release(document)
        logger.info(f"Session {self.session_id[:8]} reset (generation {self.generation})")
        self._notify()
        return True

    def change_language(self, tag: str) -> bool:
        """Switch and persist the interface language; existing messages keep their text."""
        if not self._localization.set_preference(tag):
            return False
        self._notify()
        return True

    # === Completions ===

    def handle_completion(self, completion: Completion) -> None:
        """Apply a pipeline completion if it belongs to the current generation."""
        if completion.generation != self.generation:
            logger.debug(
                f"Ignoring {completion.kind.value} completion from generation "
                f"{completion.generation} (current {self.generation})"
            )
            return

        if completion.kind is CompletionKind.ANALYSIS:
            self._complete_analysis(completion)
        else:
            self._complete_answer(completion)

    def _complete_analysis(self, completion: Completion) -> None:
        if self._mode is not SessionMode.PROCESSING_DOCUMENT or self._document is None:
            logger.warning(f"Unexpected analysis completion in mode {self._mode.value}")
            return

        file_name = self._document.name
        if completion.failed:
            logger.warning(f"Analysis of {file_name} failed: {completion.error}")
            self._append_assistant(self._localization.translate("analysis_failed", file=file_name))
        else:
            self._mode = SessionMode.CONVERSING
            self._append_assistant(
                self._localization.translate(
                    "initial_analysis", file=file_name, summary=completion.text or ""
                )
            )
        self._notify()

    def _complete_answer(self, completion: Completion) -> None:
        if self._mode is not SessionMode.CONVERSING:
            logger.warning(f"Unexpected answer completion in mode {self._mode.value}")
            return

        if completion.failed:
            logger.warning(f"Answer generation failed: {completion.error}")
            self._append_assistant(self._localization.translate("answer_failed"))
        else:
            self._append_assistant(completion.text or "")
        self._notify()

    def _release(self, document: Document) -> None:
        try:
            self._responder.release(document)
        except Exception:
            logger.exception(f"Failed to release {document.name}")

    def _append_assistant(self, content: str) -> Message:
        return self._log.add(Role.ASSISTANT, content)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Session listener failed")
