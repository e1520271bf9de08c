"""Request correlation context shared by the middleware and log records."""

from __future__ import annotations

import logging
import secrets
import string
from contextvars import ContextVar

CORRELATION_ID_ALPHABET = string.ascii_letters + string.digits

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id(length: int = 12) -> str:
    """Return a random URL-safe token of exactly ``length`` characters."""

    if length <= 0:
        raise ValueError("Correlation id length must be positive")
    return "".join(secrets.choice(CORRELATION_ID_ALPHABET) for _ in range(length))


def get_correlation_id() -> str:
    """Correlation id bound to the request being handled, or an empty string."""

    return correlation_id_var.get()


class CorrelationIdFilter(logging.Filter):
    """Attach the current correlation id to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get() or "-"
        return True
