from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Optional

# Per-request values stamped onto every log record.
correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
user_id_var: ContextVar[Optional[str]] = ContextVar("user_id", default=None)
role_var: ContextVar[Optional[str]] = ContextVar("role", default=None)

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s [%(correlation_id)s %(caller)s] %(message)s"

# Third-party loggers that are chatty below WARNING.
_QUIET_LOGGERS = ("passlib", "aiosqlite")


class RequestContextFilter(logging.Filter):
    """
    Adds ``correlation_id`` and ``caller`` to each record.

    ``caller`` reads ``user=<id>/<role>`` once a bearer token has been
    resolved for the request and ``anonymous`` before that.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        record.correlation_id = correlation_id_var.get() or "-"
        uid = user_id_var.get()
        record.caller = f"user={uid}/{role_var.get() or '?'}" if uid else "anonymous"
        return True


# PUBLIC_INTERFACE
def configure_logging(level: int | str = logging.INFO) -> None:
    """Send root logging to stdout with request context on every line."""
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    handler.addFilter(RequestContextFilter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
