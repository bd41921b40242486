"""
Catalog loader: turns a directory of language files into an in-memory catalog.

Layout on disk:
    lang/
        en.json     -> language "en"
        de.json     -> language "de"
        en-us.json  -> language "en-us"

Each file is parsed with :class:`langcat.models.LanguageFile`. Failures never
raise out of :func:`load_catalog`; they are reported as diagnostics and the
affected language is skipped while the rest keep loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from langcat.core.diagnostics import (
    Diagnostic,
    DiagnosticRecorder,
    LogFunc,
    ReadFileFunc,
    log_message,
    read_file,
)
from langcat.models.language_file import LanguageFile

Catalog = dict[str, dict[str, str]]
# language -> key -> text


@dataclass
class LoadResult:
    """Outcome of one load pass."""

    catalog: Catalog = field(default_factory=dict)
    # Every language name seen, including those that failed to load
    discovered: list[str] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def _extension(name: str) -> str:
    """Return the text from the last dot on, or '' if the name has no dot."""
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def list_language_files(
    directory: str | os.PathLike[str], suffix: str, log: LogFunc = log_message
) -> list[str]:
    """
    Return names (not paths) of the files in ``directory`` ending in ``suffix``.

    Names are sorted so that the discovered-language order is stable.
    """
    recorder = log if isinstance(log, DiagnosticRecorder) else DiagnosticRecorder(log)

    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        recorder.error(str(e))
        return []

    names: list[str] = []
    for entry in entries:
        if entry.is_dir():
            continue

        if _extension(entry.name) != suffix:
            recorder.info(
                f"language file '{entry.name}' has not the expected suffix "
                f"'{suffix}'. Skipping it"
            )
            continue

        names.append(entry.name)

    return names


def load_catalog(
    directory: str | os.PathLike[str],
    suffix: str = ".json",
    reader: ReadFileFunc = read_file,
    log: LogFunc = log_message,
) -> LoadResult:
    """
    Scan ``directory`` and parse every language file found there.

    Returns a fresh :class:`LoadResult`; nothing is merged into an existing
    catalog.
    """
    recorder = DiagnosticRecorder(log)
    result = LoadResult(diagnostics=recorder.diagnostics)
    base = Path(directory)

    for filename in list_language_files(base, suffix, recorder):
        recorder.info(f"reading language file '{filename}'")

        lang = filename[: -len(suffix)] if suffix else filename
        if not lang:
            recorder.info(f"language file '{filename}' has no language name. Skipping it")
            continue
        result.discovered.append(lang)

        path = base / filename
        try:
            path.stat()
        except OSError:
            recorder.error(
                f"translation file '{path}' could not be accessed. File and rights ok?"
            )
            continue

        try:
            raw = reader(path)
        except Exception:  # noqa: BLE001
            recorder.error(
                f"translation file '{path}' could not be read. File and rights ok?"
            )
            continue

        try:
            parsed = LanguageFile.model_validate_json(raw)
        except ValidationError:
            recorder.error(
                f"translation for language '{lang}' has an invalid file format. "
                "JSON structure ok?"
            )
            continue

        result.catalog.setdefault(lang, {}).update(parsed.as_mapping())

    return result
