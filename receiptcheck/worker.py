"""Celery app entrypoint for running tasks in a separate worker process.

Start with ``celery -A receiptcheck.worker worker`` and set
``TASK_BROKER_URL`` for both the worker and the pytest run.
"""

from receiptcheck.config import get_settings
from receiptcheck.logging import configure_logging
from receiptcheck.tasks import TaskRegistry, default_tasks

settings = get_settings()
configure_logging(settings.log_level)

registry = TaskRegistry(settings)
registry.register_many(default_tasks())
celery_app = registry.celery_app
