"""Application settings with environment variable loading.

Pydantic-based configuration for the session core: which responder
answers questions, simulated latencies, pipeline timeouts, and
localization defaults.
"""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

_DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class AppSettings(BaseModel):
    """Configuration for the EduMate session core.

    Attributes:
        responder: Which responder produces analyses and answers.
        analysis_delay: Simulated document processing latency in seconds.
        answer_delay: Simulated answer latency in seconds.
        analysis_timeout: Upper bound for document analysis in seconds.
        answer_timeout: Upper bound for answer generation in seconds.
        default_language: Language used when no preference is recorded.
        strict_i18n: Raise on missing translation keys instead of rendering the key.
        data_dir: Directory for persisted preferences and agent storage.
        session_ttl: Idle seconds before a registered session is discarded.
        max_sessions: Most sessions kept in the registry at once.
        cors_origins: Origins allowed by the HTTP API CORS policy.
    """

    # Values read from the environment arrive as defaults and must pass the same checks
    model_config = ConfigDict(validate_default=True)

    responder: Literal["simulated", "agent"] = Field(
        default_factory=lambda: os.getenv("EDUMATE_RESPONDER", "simulated").lower(),
        description="Responder backend: 'simulated' or 'agent'",
    )
    analysis_delay: float = Field(
        default_factory=lambda: float(os.getenv("EDUMATE_ANALYSIS_DELAY", "2.0")),
        ge=0.0,
        description="Simulated document processing latency (seconds)",
    )
    answer_delay: float = Field(
        default_factory=lambda: float(os.getenv("EDUMATE_ANSWER_DELAY", "1.5")),
        ge=0.0,
        description="Simulated answer latency (seconds)",
    )
    analysis_timeout: float = Field(
        default_factory=lambda: float(os.getenv("EDUMATE_ANALYSIS_TIMEOUT", "120")),
        gt=0.0,
        description="Maximum time allowed for document analysis (seconds)",
    )
    answer_timeout: float = Field(
        default_factory=lambda: float(os.getenv("EDUMATE_ANSWER_TIMEOUT", "120")),
        gt=0.0,
        description="Maximum time allowed for answer generation (seconds)",
    )
    default_language: str = Field(
        default_factory=lambda: os.getenv("EDUMATE_DEFAULT_LANGUAGE", "en"),
        description="Language tag used when no preference is stored",
    )
    strict_i18n: bool = Field(
        default_factory=lambda: _env_bool("EDUMATE_STRICT_I18N"),
        description="Fail loudly on missing translation keys",
    )
    data_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("EDUMATE_DATA_DIR", str(_DEFAULT_DATA_DIR))),
        description="Directory for persisted state",
    )

    session_ttl: float = Field(
        default_factory=lambda: float(os.getenv("EDUMATE_SESSION_TTL", "3600")),
        gt=0.0,
        description="Idle time after which a registered session is discarded (seconds)",
    )
    max_sessions: int = Field(
        default_factory=lambda: int(os.getenv("EDUMATE_MAX_SESSIONS", "1000")),
        ge=1,
        description="Upper bound on registered sessions; the least recently used go first",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: _env_list("EDUMATE_CORS_ORIGINS", "*"),
        description="Origins allowed to call the HTTP API",
    )

    @field_validator("default_language")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        """Normalize the language tag to lowercase without surrounding whitespace."""
        tag = v.strip().lower()
        if not tag:
            raise ValueError("EDUMATE_DEFAULT_LANGUAGE must not be empty")
        return tag

    @property
    def preferences_file(self) -> Path:
        return self.data_dir / "preferences.json"


def get_settings() -> AppSettings:
    """Create application settings from environment.

    Returns:
        Configured AppSettings instance.
    """
    return AppSettings()
