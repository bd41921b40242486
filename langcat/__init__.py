"""
langcat - runtime text lookup from per-language JSON files.

    from langcat import Translator

    translator = Translator(lang_dir="./lang")
    translator.get("menu.file.open")        # active language
    translator.get("menu.file.open", "de")  # explicit language
"""

from langcat.core.config import Settings, get_settings
from langcat.core.diagnostics import Diagnostic, Level, log_message, read_file
from langcat.core.loader import LoadResult, list_language_files, load_catalog
from langcat.core.translator import (
    NO_LANGUAGE_TEXT,
    InvalidLanguageError,
    Translator,
    get_translator,
)

__all__ = [
    "NO_LANGUAGE_TEXT",
    "Diagnostic",
    "InvalidLanguageError",
    "Level",
    "LoadResult",
    "Settings",
    "Translator",
    "get_settings",
    "get_translator",
    "list_language_files",
    "load_catalog",
    "log_message",
    "read_file",
]
