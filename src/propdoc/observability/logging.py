"""Log setup for the API and CLI.

`setup_logging(json_format=True)` emits one JSON object per line, tagged with
the request's correlation ID and any pipeline fields passed through
`extra=`; `json_format=False` gives plain text for terminals.
"""

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone

# Set per request by the API middleware; copied into every task it awaits
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

PIPELINE_FIELDS = ("template_id", "step", "duration_ms", "byte_length", "summary_source")

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def get_correlation_id() -> str:
    return correlation_id.get()


class JSONFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message plus context."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if cid := correlation_id.get():
            entry["correlation_id"] = cid
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)
        entry.update(
            (key, getattr(record, key))
            for key in PIPELINE_FIELDS
            if getattr(record, key, None) is not None
        )
        return json.dumps(entry, default=str)


def setup_logging(json_format: bool = True, level: str = "INFO") -> None:
    """Replace the root handlers with a single stream handler.

    Unknown level names fall back to INFO.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter() if json_format else logging.Formatter(TEXT_FORMAT))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
