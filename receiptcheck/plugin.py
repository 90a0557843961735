"""pytest plugin: builds settings and the task bridge once per test run."""

from __future__ import annotations

from collections.abc import Callable
import logging
from pathlib import Path
import shutil
from typing import Any

import pytest

from receiptcheck.config import Settings, get_settings
from receiptcheck.correlation import correlation_scope
from receiptcheck.logging import configure_logging
from receiptcheck.tasks import TaskRegistry, default_tasks

logger = logging.getLogger(__name__)

settings_key = pytest.StashKey[Settings]()
registry_key = pytest.StashKey[TaskRegistry]()


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "e2e: browser scenario driving a running application")

    settings = get_settings()
    configure_logging(settings.log_level)

    registry = TaskRegistry(settings)
    registry.register_many(default_tasks())

    config.stash[settings_key] = settings
    config.stash[registry_key] = registry

    # xdist workers share the controller's downloads folder
    if settings.trash_assets_before_runs and not hasattr(config, "workerinput"):
        trash_downloads(resolve_downloads_dir(config.rootpath, settings))


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_call(item: pytest.Item):
    with correlation_scope(item.nodeid):
        yield


def resolve_downloads_dir(rootpath: Path, settings: Settings) -> Path:
    path = Path(settings.downloads_folder)
    if not path.is_absolute():
        path = rootpath / path
    return path


def trash_downloads(downloads_dir: Path) -> int:
    """Delete everything inside ``downloads_dir``; the folder itself is kept."""

    if not downloads_dir.is_dir():
        return 0
    removed = 0
    for child in downloads_dir.iterdir():
        if child.is_dir() and not child.is_symlink():
            shutil.rmtree(child)
        else:
            child.unlink()
        removed += 1
    if removed:
        logger.info("Trashed %d entries from %s", removed, downloads_dir)
    return removed


@pytest.fixture(scope="session")
def receipt_settings(pytestconfig: pytest.Config) -> Settings:
    return pytestconfig.stash[settings_key]


@pytest.fixture(scope="session")
def task_registry(pytestconfig: pytest.Config) -> TaskRegistry:
    return pytestconfig.stash[registry_key]


@pytest.fixture(scope="session")
def downloads_dir(pytestconfig: pytest.Config, receipt_settings: Settings) -> Path:
    path = resolve_downloads_dir(pytestconfig.rootpath, receipt_settings)
    path.mkdir(parents=True, exist_ok=True)
    return path


@pytest.fixture
def task(task_registry: TaskRegistry) -> Callable[..., Any]:
    """Invoke a registered task by name, e.g. ``task("readPDF", path)``."""

    return task_registry.run
