"""
Resolution engine: active-language selection, key lookup and consistency audit.

A :class:`Translator` owns one catalog and its configuration. Hosts create one
per set of language files (or use :func:`get_translator` for a shared one) and
call :meth:`Translator.get` wherever user-facing text is needed.

Lookups never fail:
    - unknown key          -> the key itself is returned
    - unknown language     -> the key itself is returned
    - no language selected -> a fixed hint string is returned

Language selection falls back in this order when the requested language is
not loaded (see :meth:`Translator.resolve_default_lang`):
    1) ``I18N_DEFAULT_LANG`` from the environment, if loaded
    2) the built-in default ``en``, if loaded
    3) the first discovered language that actually loaded
    4) ``en`` even though it is not loaded
"""

from __future__ import annotations

import os
import threading
from functools import lru_cache

from langcat.core.config import DEFAULT_LANG, DEFAULT_LANG_DIR, Settings, get_settings
from langcat.core.diagnostics import Level, LogFunc, ReadFileFunc, log_message, read_file
from langcat.core.loader import Catalog, LoadResult, load_catalog

NO_LANGUAGE_TEXT = "i18n: No language defined. Set language first"


class InvalidLanguageError(ValueError):
    """Raised when an empty language name is passed to :meth:`Translator.set_lang`."""


class Translator:
    """
    Catalog handle with an active language.

    Typical usage:
        translator = Translator(lang_dir="./lang")
        translator.set_lang("de")
        translator.get("menu.file.open")          # active language
        translator.get("menu.file.open", "en")    # explicit language

    Writers (``load`` and the setters) are serialized by a lock and a reload
    publishes the new catalog in one assignment, so ``get`` can run without
    locking while another thread reloads. The active language itself is
    shared: per-request languages should be passed to ``get`` explicitly.
    """

    def __init__(
        self,
        lang_dir: str | os.PathLike[str] | None = None,
        lang: str | None = None,
        suffix: str | None = None,
        log: LogFunc | None = None,
        reader: ReadFileFunc | None = None,
        settings: Settings | None = None,
        autoload: bool = True,
    ) -> None:
        cfg = settings or Settings()
        self._settings = settings
        self._lock = threading.RLock()
        self._log: LogFunc = log or log_message
        self._reader: ReadFileFunc = reader or read_file
        self._suffix = cfg.LANG_SUFFIX if suffix is None else suffix
        self._lang_dir = DEFAULT_LANG_DIR + "/"
        self.set_lang_dir(cfg.LANG_DIR if lang_dir is None else lang_dir)

        self._catalog: Catalog = {}
        self._discovered: tuple[str, ...] = ()
        self._active = ""
        # Last language asked for explicitly; re-applied after a reload
        self._requested = (cfg.LANG if lang is None else lang).strip()
        self._last_load: LoadResult | None = None

        if autoload:
            self.load()

    # -- Configuration ---------------------------------------------------------

    def set_lang_dir(self, directory: str | os.PathLike[str]) -> None:
        """Set the directory to read language files from (takes effect on load)."""
        value = os.fspath(directory)
        with self._lock:
            if not value.strip():
                self._lang_dir = DEFAULT_LANG_DIR + "/"
                self._log(
                    "empty language directory provided. "
                    f"Falling back to default '{self._lang_dir}'",
                    Level.WARN,
                )
                return
            self._lang_dir = value.rstrip("/\\") + "/"

    def set_lang_suffix(self, suffix: str) -> None:
        with self._lock:
            self._suffix = suffix

    def set_log_func(self, func: LogFunc) -> None:
        with self._lock:
            self._log = func

    def set_read_file_func(self, func: ReadFileFunc) -> None:
        with self._lock:
            self._reader = func

    # -- Loading ---------------------------------------------------------------

    def load(self) -> LoadResult:
        """
        (Re)load every language file from the configured directory.

        The previous catalog is replaced, not merged. Afterwards the active
        language is the last explicitly requested one if it loaded, or the
        outcome of default resolution otherwise.
        """
        with self._lock:
            result = load_catalog(self._lang_dir, self._suffix, self._reader, self._log)
            self._catalog = result.catalog
            self._discovered = tuple(result.discovered)
            self._last_load = result

            if self._requested in self._catalog:
                self._active = self._requested
            else:
                if self._requested:
                    self._log(
                        f"language '{self._requested}' is not loaded. "
                        "Falling back to default language",
                        Level.WARN,
                    )
                self._active = self.resolve_default_lang()
            return result

    reload = load

    # -- Language selection ----------------------------------------------------

    def set_lang(self, lang: str) -> str:
        """
        Make ``lang`` the language used when ``get`` names none.

        Returns the language that is active afterwards, which differs from
        ``lang`` when it is not loaded and default resolution had to pick one.
        Raises InvalidLanguageError for a blank name and changes nothing then.
        """
        lang = lang.strip()
        if not lang:
            raise InvalidLanguageError("i18n: cannot set empty language")

        with self._lock:
            self._requested = lang
            if lang in self._catalog:
                self._active = lang
                return lang

            self._log(
                f"language '{lang}' is not loaded. Falling back to default language",
                Level.WARN,
            )
            self._active = self.resolve_default_lang()
            return self._active

    def resolve_default_lang(self) -> str:
        """Pick the fallback language for the current catalog (does not activate it)."""
        catalog = self._catalog

        settings = self._settings or Settings()
        env_lang = settings.DEFAULT_LANG.strip()
        if env_lang:
            if env_lang in catalog:
                return env_lang
            self._log(
                f"I18N_DEFAULT_LANG '{env_lang}' is not loaded. "
                f"Trying fallback '{DEFAULT_LANG}'",
                Level.WARN,
            )

        if DEFAULT_LANG in catalog:
            return DEFAULT_LANG

        for lang in self._discovered:
            if lang in catalog:
                self._log(
                    f"default language '{DEFAULT_LANG}' is not loaded. "
                    f"Using first loaded language '{lang}'",
                    Level.WARN,
                )
                return lang

        self._log(
            f"no language files loaded. Using fallback language '{DEFAULT_LANG}'",
            Level.WARN,
        )
        return DEFAULT_LANG

    # -- Lookup ----------------------------------------------------------------

    def get(self, key: str, lang: str | None = None) -> str:
        """
        Return the text for ``key`` in ``lang`` (or the active language).

        Missing keys and languages resolve to ``key`` so untranslated text
        stays visible instead of turning blank.
        """
        selected = lang or self._active
        if not selected:
            return NO_LANGUAGE_TEXT

        return self._catalog.get(selected, {}).get(key, key)

    __call__ = get

    # -- Audit -----------------------------------------------------------------

    def is_consistent(self) -> bool:
        """
        Compare every loaded language against the active one.

        Each size difference and each key present on only one side is logged
        as a warning; all languages are checked before returning.
        """
        catalog = self._catalog
        reference = self._active or DEFAULT_LANG

        self._log(f"Using language '{reference}' as reference...", Level.INFO)

        if reference not in catalog:
            self._log(
                f"Reference language file for language '{reference}' does not exists. "
                "Please name another language",
                Level.ERROR,
            )
            return False

        self._log(
            f"Languages found: {', '.join(self._discovered)}. Checking consistency...",
            Level.INFO,
        )

        ref_texts = catalog[reference]
        ok = True
        for lang in sorted(catalog):
            if lang == reference:
                continue
            texts = catalog[lang]

            if len(texts) != len(ref_texts):
                self._log(
                    f"Language file '{lang}' ({len(texts)} entries) differes from the "
                    f"reference language '{reference}' ({len(ref_texts)} entries)",
                    Level.WARN,
                )
                ok = False

            for key in sorted(ref_texts.keys() - texts.keys()):
                self._log(
                    f"Language key '{key}' was not found in language '{lang}'",
                    Level.WARN,
                )
                ok = False

            for key in sorted(texts.keys() - ref_texts.keys()):
                self._log(
                    f"Language key '{key}' in language '{lang}' does not exists in "
                    f"the reference language '{reference}'",
                    Level.WARN,
                )
                ok = False

        return ok

    check_consistency = is_consistent

    # -- Accessors -------------------------------------------------------------

    @property
    def active_language(self) -> str:
        return self._active

    @property
    def languages(self) -> list[str]:
        """Loaded languages, sorted."""
        return sorted(self._catalog)

    @property
    def discovered(self) -> tuple[str, ...]:
        """Languages found in the last load, including those that failed."""
        return self._discovered

    @property
    def lang_dir(self) -> str:
        return self._lang_dir

    @property
    def suffix(self) -> str:
        return self._suffix

    @property
    def last_load(self) -> LoadResult | None:
        return self._last_load

    def translations(self, lang: str) -> dict[str, str]:
        """Return a copy of one language's texts (empty if not loaded)."""
        return dict(self._catalog.get(lang, {}))


@lru_cache
def get_translator() -> Translator:
    """Return a process-wide Translator built from the cached settings."""
    return Translator(settings=get_settings())
