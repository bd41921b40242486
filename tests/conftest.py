# ruff: noqa: E402
import json
import sys
from pathlib import Path

# Ensure project root on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from langcat.core.diagnostics import Level


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep tests away from a developer's .env and I18N_* variables."""
    for var in ("I18N_DEFAULT_LANG", "I18N_LANG", "I18N_LANG_DIR", "I18N_LANG_SUFFIX"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def lang_dir(tmp_path: Path) -> Path:
    d = tmp_path / "lang"
    d.mkdir()
    return d


@pytest.fixture
def write_lang(lang_dir: Path):
    """Write ``<lang>.json`` with the given rows: write_lang("en", {"a": "A"})."""

    def _write(lang: str, rows: dict[str, str], suffix: str = ".json") -> Path:
        path = lang_dir / f"{lang}{suffix}"
        payload = {"lang": [{"id": k, "text": v} for k, v in rows.items()]}
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


class LogCollector:
    """Log function that remembers every (message, level) pair."""

    def __init__(self) -> None:
        self.records: list[tuple[str, Level]] = []

    def __call__(self, msg: str, level: Level) -> None:
        self.records.append((msg, level))

    def messages(self, level: Level | None = None) -> list[str]:
        return [m for m, lvl in self.records if level is None or lvl == level]


@pytest.fixture
def log() -> LogCollector:
    return LogCollector()
