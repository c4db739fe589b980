"""Usage event reporting.

Discovery reports what it saw (target counts, malformed listings, refreshes)
to a reporter. The default reporter writes events to the log; hosts with a
telemetry pipeline pass their own.

PUBLIC API:
  - EventReporter: Reporter interface
  - LoggingReporter: Reporter that logs events
  - Event name constants: EVENT_LIST, EVENT_NO_JSON_ARRAY, EVENT_REFRESH
"""

import logging
from typing import Any, Protocol

EVENT_LIST = "view/list"
EVENT_NO_JSON_ARRAY = "view/error/no_json_array"
EVENT_REFRESH = "view/refresh"

event_logger = logging.getLogger("targettap.events")


class EventReporter(Protocol):
    """Receives usage and error events."""

    def send(self, name: str, properties: dict[str, Any] | None = None) -> None: ...


class LoggingReporter:
    """Writes events to the targettap.events logger.

    Error events (names containing "/error/") are logged as warnings.
    """

    def send(self, name: str, properties: dict[str, Any] | None = None) -> None:
        level = logging.WARNING if "/error/" in name else logging.INFO
        if properties:
            details = ", ".join(f"{key}={value}" for key, value in properties.items())
            event_logger.log(level, f"{name} ({details})")
        else:
            event_logger.log(level, name)


__all__ = ["EventReporter", "LoggingReporter", "EVENT_LIST", "EVENT_NO_JSON_ARRAY", "EVENT_REFRESH"]
