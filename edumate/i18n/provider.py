"""Localization provider: template resolution and language preference.

Every user-visible string is rendered here. Lookups never fall back to
another language, so a missing translation stays visible: in strict mode
it raises, otherwise the raw key is rendered and a warning is logged.
"""

import logging
import re
from collections.abc import Mapping

from edumate.i18n.preferences import PreferenceStore
from edumate.i18n.strings import LANGUAGE_NAMES, STATIC_LABEL_KEYS, STRING_TABLES

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


class MissingTranslationKeyError(Exception):
    """Raised when a template key is absent from a language table."""

    pass


class UnsupportedLanguageError(ValueError):
    """Raised when resolving against a language with no string table."""

    pass


def render_template(template: str, variables: Mapping[str, object] | None = None) -> str:
    """Substitute ``{name}`` placeholders; unknown names render as empty string."""
    values = variables or {}

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            logger.debug(f"No value for placeholder '{name}', rendering empty")
            return ""
        return str(values[name])

    return _PLACEHOLDER.sub(_substitute, template)


class LocalizationProvider:
    """Resolves template keys for the active language and persists the choice.

    Args:
        store: Durable surface for the language preference.
        default_language: Tag used when nothing usable is persisted.
        tables: Language tag to string table mapping.
        strict: Raise MissingTranslationKeyError instead of rendering the key.
    """

    def __init__(
        self,
        store: PreferenceStore,
        default_language: str = "en",
        tables: Mapping[str, Mapping[str, str]] | None = None,
        strict: bool = False,
    ) -> None:
        self._tables = tables if tables is not None else STRING_TABLES
        if default_language not in self._tables:
            raise UnsupportedLanguageError(
                f"Default language '{default_language}' has no string table"
            )
        self._store = store
        self._default = default_language
        self._strict = strict
        self._active: str | None = None

    @property
    def supported_languages(self) -> tuple[str, ...]:
        return tuple(self._tables)

    @property
    def default_language(self) -> str:
        return self._default

    @property
    def language(self) -> str:
        """Active language tag, loaded from the store on first access."""
        if self._active is None:
            self._active = self.get_preference()
        return self._active

    def is_supported(self, tag: str) -> bool:
        return tag in self._tables

    def language_name(self, tag: str) -> str:
        return LANGUAGE_NAMES.get(tag, tag)

    def resolve(
        self,
        tag: str,
        key: str,
        variables: Mapping[str, object] | None = None,
    ) -> str:
        """Render ``key`` from the table for ``tag``.

        Raises:
            UnsupportedLanguageError: If ``tag`` has no table.
            MissingTranslationKeyError: If ``key`` is missing and strict mode is on.
        """
        table = self._tables.get(tag)
        if table is None:
            raise UnsupportedLanguageError(f"Unsupported language: {tag}")

        template = table.get(key)
        if template is None:
            if self._strict:
                raise MissingTranslationKeyError(f"Missing key '{key}' for language '{tag}'")
            logger.warning(f"Missing translation key '{key}' for language '{tag}'")
            return key

        return render_template(template, variables)

    def translate(self, key: str, **variables: object) -> str:
        """Resolve ``key`` in the active language."""
        return self.resolve(self.language, key, variables)

    def labels(self) -> dict[str, str]:
        """Static interface labels rendered in the active language."""
        return {key: self.translate(key) for key in STATIC_LABEL_KEYS}

    def get_preference(self) -> str:
        """Read the persisted tag, or the default if absent or unreadable."""
        try:
            tag = self._store.read_preference()
        except Exception as e:
            logger.warning(f"Could not read language preference: {e}")
            return self._default

        if tag is None:
            return self._default
        if tag not in self._tables:
            logger.warning(f"Ignoring unsupported stored language '{tag}'")
            return self._default
        return tag

    def set_preference(self, tag: str) -> bool:
        """Make ``tag`` active and persist it.

        Returns:
            False if the tag is unsupported (nothing changes), True otherwise.
            Persistence failures are logged and do not affect the result.
        """
        if tag not in self._tables:
            logger.debug(f"Rejected unsupported language '{tag}'")
            return False

        self._active = tag
        try:
            self._store.write_preference(tag)
        except Exception as e:
            logger.warning(f"Could not persist language preference '{tag}': {e}")
        return True

    def validate_tables(self, required_keys: set[str] | None = None) -> None:
        """Check that every table defines the same keys.

        Args:
            required_keys: Keys that must exist everywhere; defaults to the
                union of all keys across tables.

        Raises:
            MissingTranslationKeyError: Listing every missing (language, key) pair.
        """
        keys = set(required_keys or ())
        if required_keys is None:
            for table in self._tables.values():
                keys.update(table)

        missing = [
            f"{tag}:{key}"
            for tag, table in self._tables.items()
            for key in sorted(keys)
            if key not in table
        ]
        if missing:
            raise MissingTranslationKeyError(f"Missing translations: {', '.join(missing)}")
