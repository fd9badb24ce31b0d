"""Settings for the LLM-backed study agent.

Only read when EDUMATE_RESPONDER=agent. LLM_BASE_URL points the agent
at any OpenAI-compatible endpoint.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

load_dotenv()


def _api_key_from_env() -> str:
    return os.getenv("LLM_API_KEY") or os.getenv("OPENAI_API_KEY") or ""


class StudyAgentConfig(BaseModel):
    """Model and history settings for the study agent.

    Attributes:
        api_key: Provider API key.
        base_url: Alternative endpoint, or None for OpenAI.
        model_name: Chat model identifier.
        temperature: Sampling temperature; kept low so answers stay close to the document.
        max_tokens: Upper bound on the length of one answer.
        history_messages: Earlier turns replayed to the model with each question.
    """

    model_config = ConfigDict(validate_default=True)

    api_key: str = Field(default_factory=_api_key_from_env)
    base_url: str | None = Field(default_factory=lambda: os.getenv("LLM_BASE_URL") or None)
    model_name: str = Field(default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"))
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1024, ge=1, le=128000)
    history_messages: int = Field(default=20, ge=0, le=200)

    @field_validator("api_key")
    @classmethod
    def require_api_key(cls, v: str) -> str:
        key = v.strip()
        if not key:
            raise ValueError("API key required. Set LLM_API_KEY or OPENAI_API_KEY in .env")
        return key
