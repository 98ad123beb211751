from __future__ import annotations

"""Logging setup shared by the CLI and library callers.

Everything logs below the 'privacy_sexy' logger:

    - configure_logging: install (or swap) the single stderr handler, plain or JSON.
    - get_logger: 'privacy_sexy.<name>' loggers.
    - trace_resolve: resolver tracing, only emitted with PRIVACY_SEXY_TRACE=1.

Library code never configures handlers itself; without configure_logging the
records simply propagate to whatever the host application set up.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional, TextIO

BASE_LOGGER = "privacy_sexy"
_HANDLER_NAME = "privacy_sexy.stderr"


class JsonLogFormatter(logging.Formatter):
    """One JSON object per record: ts, level, logger, msg, version and optional ctx / exc."""

    def __init__(self) -> None:
        super().__init__()
        from privacy_sexy import __version__

        self._version = __version__

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload = {
            "ts": ts.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "version": self._version,
        }
        ctx = getattr(record, "context", None)
        if isinstance(ctx, dict) and ctx:
            payload["ctx"] = ctx
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(
    *, json_logs: bool = False, level: Optional[int] = None, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Attach the project handler to the base logger and return it.

    Calling again replaces the previous handler, so switching between plain
    and JSON output takes effect immediately. The level defaults to INFO, or
    DEBUG while resolver tracing is enabled.
    """
    base = logging.getLogger(BASE_LOGGER)
    for handler in list(base.handlers):
        if handler.get_name() == _HANDLER_NAME:
            base.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JsonLogFormatter() if json_logs else logging.Formatter("%(levelname)s: %(message)s"))
    base.addHandler(handler)
    base.setLevel(level if level is not None else (logging.DEBUG if is_trace_enabled() else logging.INFO))
    base.propagate = False
    return base


def get_logger(name: str | None = None) -> logging.Logger:
    if not name or name == BASE_LOGGER:
        return logging.getLogger(BASE_LOGGER)
    if name.startswith(BASE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{BASE_LOGGER}.{name}")


def is_trace_enabled() -> bool:
    return os.getenv("PRIVACY_SEXY_TRACE") == "1"


def trace_resolve(logger: logging.Logger, message: str, **ctx) -> None:
    """Debug-log a resolver step with structured context (PRIVACY_SEXY_TRACE=1 only)."""
    if not is_trace_enabled():
        return
    if ctx:
        logger.debug("%s | %s", message, " ".join(f"{k}={v!r}" for k, v in ctx.items()), extra={"context": ctx})
    else:
        logger.debug("%s", message)
