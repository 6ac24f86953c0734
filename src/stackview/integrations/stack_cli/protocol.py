"""Decoding of the NDJSON event stream the stack CLI writes to stderr.

Each complete line is expected to be one JSON object shaped like:

    {"EventId": 1, "LogLevel": "Information", "Category": "Stack", "Message": "..."}

Lines that are not JSON objects are treated as plain diagnostic text. Bytes
arrive in arbitrary chunks, so LineBuffer carries partial lines over between
reads and only hands out lines terminated by "\\n" (optionally "\\r\\n").
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

STATUS_EVENT_ID = 1
SUCCESS_EVENT_ID = 2


class LogLevel(str, Enum):
    """Log levels used by the stack CLI."""

    TRACE = "Trace"
    DEBUG = "Debug"
    INFORMATION = "Information"
    WARNING = "Warning"
    ERROR = "Error"
    CRITICAL = "Critical"

    @property
    def logging_level(self) -> int:
        return _LOGGING_LEVELS[self]

    @staticmethod
    def parse(value: Any) -> "LogLevel":
        """Parse a LogLevel, defaulting to INFORMATION for unknown values."""
        for level in LogLevel:
            if level.value == value:
                return level
        return LogLevel.INFORMATION


_LOGGING_LEVELS = {
    LogLevel.TRACE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFORMATION: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
}


@dataclass(frozen=True)
class CliEvent:
    """One structured event from the auxiliary channel."""

    event_id: int
    log_level: LogLevel
    category: str
    message: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_status(self) -> bool:
        return self.event_id == STATUS_EVENT_ID

    @property
    def is_success(self) -> bool:
        return self.event_id == SUCCESS_EVENT_ID


def decode_line(line: str) -> CliEvent | str:
    """Decode one complete auxiliary line.

    Returns:
        CliEvent when the line is a JSON object, otherwise the line itself
    """
    try:
        data = json.loads(line)
    except json.JSONDecodeError:
        return line
    if not isinstance(data, dict):
        return line

    event_id = data.get("EventId", 0)
    if isinstance(event_id, bool) or not isinstance(event_id, int):
        event_id = 0
    return CliEvent(
        event_id=event_id,
        log_level=LogLevel.parse(data.get("LogLevel")),
        category=str(data.get("Category", "")),
        message=str(data.get("Message", "")),
        raw=data,
    )


class LineBuffer:
    """Reassemble newline-delimited lines from arbitrarily split byte chunks.

    Lines are split on raw bytes before decoding, so a multi-byte UTF-8
    character may straddle two chunks. One instance per process invocation.
    """

    def __init__(self) -> None:
        self._pending = b""

    @property
    def pending(self) -> bytes:
        """Bytes of the current unterminated line."""
        return self._pending

    def feed(self, chunk: bytes) -> list[str]:
        """Add a chunk and return every line it completed, without terminators."""
        data = self._pending + chunk
        *complete, self._pending = data.split(b"\n")

        lines: list[str] = []
        for raw in complete:
            if raw.endswith(b"\r"):
                raw = raw[:-1]
            if not raw.strip():
                continue
            lines.append(raw.decode("utf-8", errors="replace"))
        return lines

    def discard(self) -> bytes:
        """Drop the trailing partial line; a half-written event is not actionable."""
        dropped = self._pending
        self._pending = b""
        return dropped
