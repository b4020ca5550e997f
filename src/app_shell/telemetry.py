"""
Logging setup.

Stdlib logging with a request id on every record. The id is carried in a
ContextVar set by the HTTP middleware; records emitted outside a request
show "-".
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from uuid import uuid4

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [request_id=%(request_id)s] %(message)s"

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


def generate_request_id() -> str:
    return uuid4().hex


class RequestIdFilter(logging.Filter):
    """Attach the current request id to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once. Safe to call again (handlers are replaced)."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level.upper())
