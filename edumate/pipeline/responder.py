"""Responder boundary: the pluggable intelligence behind the pipeline.

A responder either returns a ``ResponderResult`` or raises; the
pipeline turns both errors and timeouts into failure completions.
A successful analysis may return a short summary of the document.
"""

import asyncio
import logging
from typing import Protocol

from edumate.i18n.provider import LocalizationProvider
from edumate.models.session import AnswerContext, Document, ResponderResult

logger = logging.getLogger(__name__)


class Responder(Protocol):
    """Produces document analyses and answers."""

    async def analyze(self, document: Document) -> ResponderResult: ...

    async def answer(self, text: str, context: AnswerContext) -> ResponderResult: ...

    def release(self, document: Document) -> None:
        """Forget anything kept for ``document``; called when the session drops it."""
        ...


class SimulatedResponder:
    """Responder with fixed latency and canned, localized replies.

    Stands in for real document understanding during demos and
    development. Delays default to 2.0 s for analysis and 1.5 s for answers.
    """

    def __init__(
        self,
        localization: LocalizationProvider,
        analysis_delay: float = 2.0,
        answer_delay: float = 1.5,
    ) -> None:
        self._localization = localization
        self._analysis_delay = analysis_delay
        self._answer_delay = answer_delay

    async def analyze(self, document: Document) -> ResponderResult:
        await asyncio.sleep(self._analysis_delay)
        logger.info(f"Simulated analysis finished for {document.name}")
        return ResponderResult(text=document.name)

    async def answer(self, text: str, context: AnswerContext) -> ResponderResult:
        await asyncio.sleep(self._answer_delay)
        return ResponderResult(
            text=self._localization.resolve(context.language, "simulated_answer")
        )

    def release(self, document: Document) -> None:
        logger.debug(f"Nothing stored for {document.name}")
