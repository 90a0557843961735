"""Named out-of-browser tasks dispatched through Celery."""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import Any

from celery import Celery

from receiptcheck.config import Settings
from receiptcheck.enums import TaskName
from receiptcheck.errors import TaskExecutionError
from receiptcheck.pdf.reader import read_pdf

logger = logging.getLogger(__name__)


def create_celery(name: str, settings: Settings) -> Celery:
    """Create a Celery app; tasks run eagerly unless a broker is configured."""

    if settings.task_broker_url:
        backend = settings.task_result_backend or settings.task_broker_url
        celery_app = Celery(name, broker=settings.task_broker_url, backend=backend)
        celery_app.conf.task_track_started = True
        celery_app.conf.result_expires = 3600
    else:
        celery_app = Celery(name, broker="memory://")
        celery_app.conf.task_always_eager = True
        celery_app.conf.task_eager_propagates = True
    celery_app.conf.task_serializer = "json"
    celery_app.conf.result_serializer = "json"
    celery_app.conf.accept_content = ["json"]
    return celery_app


def default_tasks() -> dict[str, Callable[..., Any]]:
    """Return the task table registered at test-run setup."""

    return {TaskName.READ_PDF.value: read_pdf}


class TaskRegistry:
    """Dispatch table from task name to a Celery task."""

    def __init__(self, settings: Settings, celery_app: Celery | None = None) -> None:
        self.settings = settings
        self.celery_app = celery_app or create_celery(settings.app_name, settings)
        self._tasks: dict[str, Any] = {}

    @property
    def names(self) -> list[str]:
        return sorted(self._tasks)

    def register(self, name: str, func: Callable[..., Any]) -> None:
        """Register ``func`` under ``name``; each name may be registered once."""

        key = str(name)
        if key in self._tasks:
            raise ValueError(f"task {key!r} is already registered")
        self._tasks[key] = self.celery_app.task(name=key, shared=False)(func)
        logger.debug("Registered task %s", key)

    def register_many(self, tasks: Mapping[str, Callable[..., Any]]) -> None:
        for name, func in tasks.items():
            self.register(name, func)

    def run(self, name: str, *args: Any) -> Any:
        """Invoke a task by name and block until it settles.

        Failures inside the task, result timeouts and dispatch errors are all
        raised as ``TaskExecutionError`` chained to the original exception.
        """

        key = str(name)
        task = self._tasks.get(key)
        if task is None:
            registered = ", ".join(self.names) or "none"
            raise ValueError(f"unknown task {key!r}; registered tasks: {registered}")

        logger.info("Running task %s", key, extra={"task_name": key})
        try:
            result = task.apply_async(args=args)
            return result.get(timeout=self.settings.task_timeout_ms / 1000)
        except Exception as exc:
            logger.error("Task %s failed: %s", key, exc, extra={"task_name": key})
            raise TaskExecutionError(key, f"{type(exc).__name__}: {exc}") from exc
