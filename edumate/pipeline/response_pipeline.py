"""Serialized, cancellable execution of responder operations.

At most one operation is outstanding per session. Each operation is
stamped with the generation current when it was issued; ``cancel``
advances the generation so a late result can be recognized as stale.
The underlying work is not interrupted, only its result is disregarded.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from edumate.models.session import (
    AnswerContext,
    Completion,
    CompletionKind,
    Document,
    ResponderResult,
)
from edumate.pipeline.responder import Responder

logger = logging.getLogger(__name__)

CompletionHandler = Callable[[Completion], None]

TIMEOUT_ERROR = "timeout"


class PipelineBusyError(Exception):
    """Raised when an operation is started while another is outstanding."""

    pass


class ResponsePipeline:
    """Runs analyze/answer requests as asyncio tasks on the running loop.

    Args:
        responder: The intelligence producing analyses and answers.
        on_complete: Called with every completion, stale ones included,
            so the owner can compare generations itself.
        analysis_timeout: Seconds before an analysis completes with an error.
        answer_timeout: Seconds before an answer completes with an error.
    """

    def __init__(
        self,
        responder: Responder,
        on_complete: CompletionHandler,
        analysis_timeout: float = 120.0,
        answer_timeout: float = 120.0,
    ) -> None:
        self._responder = responder
        self._on_complete = on_complete
        self._analysis_timeout = analysis_timeout
        self._answer_timeout = answer_timeout
        self._busy = False
        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def generation(self) -> int:
        return self._generation

    def analyze(self, document: Document) -> int:
        """Start analyzing ``document``.

        Returns:
            The generation the eventual completion will carry.

        Raises:
            PipelineBusyError: If an operation is already outstanding.
        """
        return self._start(
            CompletionKind.ANALYSIS,
            lambda: self._responder.analyze(document),
            self._analysis_timeout,
        )

    def answer(self, text: str, context: AnswerContext) -> int:
        """Start answering ``text``; see ``analyze`` for return and errors."""
        return self._start(
            CompletionKind.ANSWER,
            lambda: self._responder.answer(text, context),
            self._answer_timeout,
        )

    def cancel(self) -> None:
        """Invalidate the outstanding operation, if any, and clear busy."""
        self._generation += 1
        if self._busy:
            logger.info(f"Cancelled outstanding operation; generation is now {self._generation}")
        self._busy = False

    async def wait_idle(self) -> None:
        """Wait until every started task, stale or current, has finished."""
        while self._tasks:
            await asyncio.wait(set(self._tasks))

    def _start(
        self,
        kind: CompletionKind,
        operation: Callable[[], Awaitable[ResponderResult]],
        timeout: float,
    ) -> int:
        if self._busy:
            raise PipelineBusyError(f"Cannot start {kind.value} while another operation runs")

        generation = self._generation
        self._busy = True
        task = asyncio.get_running_loop().create_task(
            self._execute(kind, generation, operation, timeout)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug(f"Started {kind.value} (generation {generation})")
        return generation

    async def _execute(
        self,
        kind: CompletionKind,
        generation: int,
        operation: Callable[[], Awaitable[ResponderResult]],
        timeout: float,
    ) -> None:
        try:
            result = await asyncio.wait_for(operation(), timeout=timeout)
        except TimeoutError:
            logger.warning(f"{kind.value.capitalize()} timed out after {timeout}s")
            result = ResponderResult(error=TIMEOUT_ERROR)
        except Exception as e:
            logger.exception(f"{kind.value.capitalize()} failed")
            result = ResponderResult(error=str(e) or type(e).__name__)

        if result.ok and result.text is None:
            result = ResponderResult(text="")

        if generation == self._generation:
            self._busy = False
        else:
            logger.info(
                f"Discarding stale {kind.value} result "
                f"(generation {generation}, current {self._generation})"
            )

        self._on_complete(
            Completion(kind=kind, generation=generation, text=result.text, error=result.error)
        )
