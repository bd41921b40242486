"""
Diagnostics plumbing shared by the loader and the translator.

Every step of loading and auditing reports through a *log function*
``(message, level) -> None``. The default one forwards to the standard
``logging`` module; hosts can inject their own (tests usually collect the
messages in a list).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger("langcat")


class Level(str, Enum):
    """Severity of a diagnostic message."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"


LogFunc = Callable[[str, Level], None]
# Signature: (message, level) -> None

ReadFileFunc = Callable[[Path], bytes]
# Signature: (path) -> raw file content; raises OSError on failure

_LOGGING_LEVELS: dict[str, int] = {
    Level.ERROR.value: logging.ERROR,
    Level.WARN.value: logging.WARNING,
    Level.INFO.value: logging.INFO,
}


@dataclass(frozen=True)
class Diagnostic:
    """One message emitted while loading or auditing language files."""

    message: str
    level: Level


def log_message(msg: str, level: Level | str) -> None:
    """Default log function: level-prefixed message on the ``langcat`` logger."""
    name = getattr(level, "value", level)
    if name not in _LOGGING_LEVELS:
        name = Level.INFO.value
    logger.log(_LOGGING_LEVELS[name], "i18n %s: %s", name, msg)


def read_file(path: Path) -> bytes:
    """Default file reader."""
    return Path(path).read_bytes()


class DiagnosticRecorder:
    """
    Forwards messages to a log function and keeps a copy of each one.

    The loader returns the recorded list so callers can inspect what happened
    without installing a custom log function.
    """

    def __init__(self, log: LogFunc) -> None:
        self._log = log
        self.diagnostics: list[Diagnostic] = []

    def __call__(self, msg: str, level: Level) -> None:
        self.diagnostics.append(Diagnostic(msg, level))
        self._log(msg, level)

    def error(self, msg: str) -> None:
        self(msg, Level.ERROR)

    def warn(self, msg: str) -> None:
        self(msg, Level.WARN)

    def info(self, msg: str) -> None:
        self(msg, Level.INFO)
