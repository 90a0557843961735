"""Correlation-id context shared by log records."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Read current correlation id from context var."""

    return correlation_id_var.get()


@contextmanager
def correlation_scope(value: str | None = None) -> Iterator[str]:
    """Bind a correlation id (generated when absent) for the enclosed block."""

    corr_id = value or str(uuid4())
    token = correlation_id_var.set(corr_id)
    try:
        yield corr_id
    finally:
        correlation_id_var.reset(token)
