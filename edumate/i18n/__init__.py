"""Localization for every user-visible string.

Responsibilities:
    - String tables per language tag with ``{name}`` placeholders
    - Template resolution with forgiving interpolation
    - Persisted interface language preference
"""

from edumate.i18n.preferences import FilePreferenceStore, MemoryPreferenceStore, PreferenceStore
from edumate.i18n.provider import (
    LocalizationProvider,
    MissingTranslationKeyError,
    UnsupportedLanguageError,
    render_template,
)
from edumate.i18n.strings import LANGUAGE_NAMES, STATIC_LABEL_KEYS, STRING_TABLES

__all__ = [
    "FilePreferenceStore",
    "LANGUAGE_NAMES",
    "LocalizationProvider",
    "MemoryPreferenceStore",
    "MissingTranslationKeyError",
    "PreferenceStore",
    "STATIC_LABEL_KEYS",
    "STRING_TABLES",
    "UnsupportedLanguageError",
    "render_template",
]
