"""Durable storage for the interface language preference.

Stores implement ``read_preference`` / ``write_preference``. They are
free to raise; the localization provider treats every failure as
non-critical and falls back to its default language.
"""

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

_LANGUAGE_KEY = "language"


class PreferenceStore(Protocol):
    """Key-value surface holding the language tag."""

    def read_preference(self) -> str | None: ...

    def write_preference(self, tag: str) -> None: ...


class MemoryPreferenceStore:
    """In-process store, mainly for tests and ephemeral sessions."""

    def __init__(self, tag: str | None = None) -> None:
        self.tag = tag

    def read_preference(self) -> str | None:
        return self.tag

    def write_preference(self, tag: str) -> None:
        self.tag = tag


class FilePreferenceStore:
    """JSON file store shared by every session of the process.

    Writes are last-write-wins; the whole file is replaced on each write.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read_preference(self) -> str | None:
        if not self._path.exists():
            return None
        data = json.loads(self._path.read_text(encoding="utf-8"))
        value = data.get(_LANGUAGE_KEY) if isinstance(data, dict) else None
        return value if isinstance(value, str) else None

    def write_preference(self, tag: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps({_LANGUAGE_KEY: tag}), encoding="utf-8")
        tmp_path.replace(self._path)
        logger.debug(f"Persisted language preference to {self._path}")
