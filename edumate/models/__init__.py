"""Pydantic models for the session core and the HTTP adapter.

Models:
    - SessionMode / Role / CompletionKind: enumerations of the state machine
    - Message: Immutable entry in the message log
    - Document: User-supplied document reference
    - ResponderResult / AnswerContext: Responder boundary
    - Completion: Pipeline completion event
    - SessionSnapshot: Read model for presentation adapters
    - ChatRequest / LanguageRequest / LanguageResponse: API payloads
"""

from edumate.models.schemas import ChatRequest, LanguageRequest, LanguageResponse
from edumate.models.session import (
    AnswerContext,
    Completion,
    CompletionKind,
    Document,
    Message,
    ResponderResult,
    Role,
    SessionMode,
    SessionSnapshot,
)

__all__ = [
    "AnswerContext",
    "ChatRequest",
    "Completion",
    "CompletionKind",
    "Document",
    "LanguageRequest",
    "LanguageResponse",
    "Message",
    "ResponderResult",
    "Role",
    "SessionMode",
    "SessionSnapshot",
]
