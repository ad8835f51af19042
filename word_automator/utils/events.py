"""
Event sinks for observing Word sessions.

The session and the controller report what they do as named events with
keyword fields. A sink decides what happens with them; the default writes
them to the package log.
"""

import logging
from typing import Optional

from .logging_config import get_module_logger


class EventSink:
    """Receives events from a Word session or document controller."""

    def emit(self, event: str, level: int = logging.DEBUG, **fields) -> None:
        raise NotImplementedError


class NullEventSink(EventSink):
    """Discards every event."""

    def emit(self, event: str, level: int = logging.DEBUG, **fields) -> None:
        return None


class LoggingEventSink(EventSink):
    """Writes each event as one log record with ``key=value`` fields."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_module_logger("events")

    def emit(self, event: str, level: int = logging.DEBUG, **fields) -> None:
        if not self.logger.isEnabledFor(level):
            return
        if fields:
            details = " ".join(f"{key}={value!r}" for key, value in sorted(fields.items()))
            self.logger.log(level, "%s %s", event, details)
        else:
            self.logger.log(level, "%s", event)


def emit_safely(sink: EventSink, event: str, level: int = logging.DEBUG, **fields) -> None:
    """Send an event, logging instead of raising if the sink fails."""
    try:
        sink.emit(event, level=level, **fields)
    except Exception as e:
        get_module_logger(__name__).warning("⚠️ Event sink failed on '%s': %s", event, e)
