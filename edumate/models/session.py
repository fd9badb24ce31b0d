"""Domain records shared by the session, pipeline and adapters."""

import io
import uuid
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SessionMode(str, Enum):
    """High-level mode of a chat session."""

    AWAITING_DOCUMENT = "awaiting_document"
    PROCESSING_DOCUMENT = "processing_document"
    CONVERSING = "conversing"


class Role(str, Enum):
    """Speaker of a message."""

    USER = "user"
    ASSISTANT = "assistant"


class CompletionKind(str, Enum):
    """Which pipeline operation a completion belongs to."""

    ANALYSIS = "analysis"
    ANSWER = "answer"


class Message(BaseModel):
    """A single immutable entry in the message log.

    Attributes:
        role: Who produced the message.
        content: Rendered message text.
        sequence: Position in the conversation, strictly increasing.
        created_at: When the message was appended.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    sequence: int = Field(ge=1)
    created_at: datetime = Field(default_factory=datetime.now)


class Document(BaseModel):
    """A user-supplied document.

    The handle is passed through unexamined by the session: raw bytes,
    a filesystem path, or a binary file object.

    Attributes:
        name: File name as chosen by the user.
        handle: Reference to the content.
        id: Identifier of this upload; two uploads never share one, even
            when they have the same name.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    handle: Any = None
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)

    def is_valid(self) -> bool:
        """Whether the reference is usable (named and backed by content)."""
        if not self.name or not self.name.strip():
            return False
        if self.handle is None:
            return False
        if isinstance(self.handle, bytes | bytearray) and not self.handle:
            return False
        return True

    def read_bytes(self) -> bytes:
        """Read the full document content from its handle."""
        if isinstance(self.handle, bytes | bytearray):
            return bytes(self.handle)
        if isinstance(self.handle, str | Path):
            return Path(self.handle).read_bytes()
        if isinstance(self.handle, io.IOBase) or hasattr(self.handle, "read"):
            if hasattr(self.handle, "seek"):
                self.handle.seek(0)
            return self.handle.read()
        raise TypeError(f"Unsupported document handle: {type(self.handle).__name__}")


class ResponderResult(BaseModel):
    """Outcome returned by a responder: either text or an error indicator."""

    text: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AnswerContext(BaseModel):
    """Context handed to a responder alongside the user's question."""

    model_config = ConfigDict(frozen=True)

    session_id: str
    generation: int
    language: str = "en"
    document: Document | None = None
    history: tuple[Message, ...] = ()


class Completion(BaseModel):
    """Event delivered by the pipeline when an operation finishes.

    Attributes:
        kind: The operation that finished.
        generation: Session generation at the time the operation was issued.
        text: Produced content on success.
        error: Error indicator on failure or timeout.
    """

    model_config = ConfigDict(frozen=True)

    kind: CompletionKind
    generation: int
    text: str | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class SessionSnapshot(BaseModel):
    """Read model of a session for presentation adapters."""

    session_id: str
    mode: SessionMode
    document_name: str | None = None
    messages: list[Message] = Field(default_factory=list)
    busy: bool = False
    language: str
    generation: int = 0
