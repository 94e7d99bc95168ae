"""
Diagnostic event sinks.

Services that want to report noteworthy events (rejected input, served
pages, repaired records) receive a DiagnosticSink instead of reaching
for a module-level logger or file handle. Production code injects a
LoggingDiagnosticSink, which forwards events to the logging configuration
in settings (console plus rotating file). Tests inject a recording sink
and never touch the filesystem.

Usage:
    from core.diagnostics import DiagnosticSink, LoggingDiagnosticSink

    class Paginator:
        def __init__(self, diagnostics: DiagnosticSink | None = None):
            self.diagnostics = diagnostics or LoggingDiagnosticSink(__name__)

        def run(self):
            self.diagnostics.record("page_served", size=20)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from typing import Any


@runtime_checkable
class DiagnosticSink(Protocol):
    """
    Protocol for recording diagnostic events.

    An event is a short snake_case name plus keyword fields. Sinks must
    not raise: recording a diagnostic never changes the outcome of the
    operation that produced it.
    """

    def record(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        """
        Record a diagnostic event.

        Args:
            event: Event name (e.g. "message_cursor_rejected")
            level: Logging level for sinks that care about severity
            **fields: Structured context for the event
        """
        ...


class LoggingDiagnosticSink:
    """
    DiagnosticSink that writes events through the standard logging module.

    Fields are rendered as sorted key=value pairs after the event name so
    log lines stay greppable.

    Example:
        sink = LoggingDiagnosticSink("chat.pagination")
        sink.record("message_page_served", chat_id="...", count=20)
        # INFO ... message_page_served chat_id=... count=20
    """

    def __init__(self, name: str | logging.Logger = "diagnostics"):
        if isinstance(name, logging.Logger):
            self.logger = name
        else:
            self.logger = logging.getLogger(name)

    def record(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        if not self.logger.isEnabledFor(level):
            return
        rendered = " ".join(f"{key}={fields[key]}" for key in sorted(fields))
        message = f"{event} {rendered}" if rendered else event
        self.logger.log(level, message)


class NullDiagnosticSink:
    """DiagnosticSink that discards every event."""

    def record(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        return None
