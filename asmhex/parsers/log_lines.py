# asmhex/parsers/log_lines.py
import logging
from enum import Enum

ERROR_MARK = "❌"
SUCCESS_MARK = "✅"
WARNING_MARK = "⚠️"
INFO_MARK = "ℹ️"
START_MARK = "🔍"


class Severity(Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"

    @property
    def log_level(self) -> int:
        return _LEVELS[self]


_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


def classify_line(line: str) -> Severity:
    # Error wins over success so "❌ ... Success" still renders red.
    if ERROR_MARK in line or "Error" in line:
        return Severity.ERROR
    if SUCCESS_MARK in line or "Success" in line:
        return Severity.SUCCESS
    if WARNING_MARK in line:
        return Severity.WARNING
    return Severity.INFO


def classify_text(text: str) -> list[tuple[Severity, str]]:
    return [(classify_line(line), line) for line in text.splitlines()]


def error_line(msg: str) -> str:
    return f"{ERROR_MARK} {msg}"


def success_line(msg: str) -> str:
    return f"{SUCCESS_MARK} {msg}"


def warning_line(msg: str) -> str:
    return f"{WARNING_MARK} {msg}"


def info_line(msg: str) -> str:
    return f"{INFO_MARK} {msg}"
