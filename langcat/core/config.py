"""
Configuration for langcat.

Strongly-typed settings using Pydantic v2 BaseSettings. Every field can be
overridden through an ``I18N_``-prefixed environment variable or a ``.env``
file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# Built-in defaults; also used as the last-resort fallbacks by the translator.
DEFAULT_LANG = "en"
DEFAULT_LANG_DIR = "./lang"
DEFAULT_LANG_SUFFIX = ".json"


class Settings(BaseSettings):
    """Settings loaded from environment variables (.env supported)."""

    # I18N_LANG_DIR, I18N_DEFAULT_LANG, ...; unknown variables are ignored
    model_config = SettingsConfigDict(env_prefix="I18N_", env_file=".env", extra="ignore")

    # Directory holding the language files
    LANG_DIR: str = DEFAULT_LANG_DIR
    # Language used when a lookup names none; blank lets default resolution pick
    LANG: str = ""
    # Expected file suffix; language = filename without it
    LANG_SUFFIX: str = DEFAULT_LANG_SUFFIX
    # Preferred fallback when the requested language is not loaded
    DEFAULT_LANG: str = ""


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance (singleton-like)."""
    return Settings()
