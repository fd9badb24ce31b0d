from pydantic import BaseModel, Field, field_validator


class ChatRequest(BaseModel):
    """Request payload for submitting a message to a session.

    Blank messages are accepted here and ignored by the session,
    which treats them as a silent no-op.

    Attributes:
        message: User's question about the document.
    """

    message: str = ""

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str) -> str:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class LanguageRequest(BaseModel):
    """Request payload for changing the interface language."""

    language: str = Field(..., min_length=1)


class LanguageResponse(BaseModel):
    """Active language with its rendered static labels.

    Attributes:
        language: Active language tag.
        supported: All supported language tags.
        labels: Static interface labels resolved in the active language.
    """

    language: str
    supported: list[str]
    labels: dict[str, str] = Field(default_factory=dict)
