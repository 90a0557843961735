"""Browser steps for the receipt download scenario."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
import logging
from pathlib import Path

from playwright.sync_api import Page

from receiptcheck.config import Settings
from receiptcheck.enums import ScenarioStep, TaskName
from receiptcheck.errors import ReceiptContentMismatch, ScenarioStepError

logger = logging.getLogger(__name__)

TaskRunner = Callable[..., str]


@contextmanager
def scenario_step(step: ScenarioStep) -> Iterator[None]:
    """Re-raise any failure in the block as a ``ScenarioStepError`` for ``step``."""

    logger.info("Step: %s", step.value, extra={"step": step.value})
    try:
        yield
    except (ScenarioStepError, ReceiptContentMismatch):
        raise
    except Exception as exc:
        logger.error("Step %s failed: %s", step.value, exc, extra={"step": step.value})
        raise ScenarioStepError(step, f"{type(exc).__name__}: {exc}") from exc


def visit(page: Page, settings: Settings) -> None:
    with scenario_step(ScenarioStep.VISIT):
        page.goto(settings.base_url, timeout=settings.page_load_timeout_ms)


def download_receipt(page: Page, settings: Settings, downloads_dir: Path) -> Path:
    """Click the download trigger and save the download at the receipt path."""

    trigger = page.locator(settings.download_selector)
    with scenario_step(ScenarioStep.CLICK_DOWNLOAD):
        try:
            trigger.wait_for(state="visible", timeout=settings.default_command_timeout_ms)
        except Exception as exc:
            raise ScenarioStepError(
                ScenarioStep.CLICK_DOWNLOAD,
                f"element {settings.download_selector} not found "
                f"within {settings.default_command_timeout_ms}ms",
            ) from exc

    target = downloads_dir / settings.receipt_filename
    with scenario_step(ScenarioStep.WAIT_DOWNLOAD):
        with page.expect_download(timeout=settings.download_timeout_ms) as download_info:
            trigger.click(timeout=settings.default_command_timeout_ms)
        download = download_info.value
        if download.suggested_filename != settings.receipt_filename:
            logger.warning(
                "Download suggested %s; saving as %s",
                download.suggested_filename,
                settings.receipt_filename,
            )
        download.save_as(target)
        if not target.is_file():
            raise FileNotFoundError(f"download did not land at {target}")
    return target


def assert_text_contains(text: str, expected: Sequence[str]) -> None:
    missing = [item for item in expected if item not in text]
    if missing:
        raise ReceiptContentMismatch(missing, text)


def run_receipt_scenario(
    page: Page,
    settings: Settings,
    task: TaskRunner,
    downloads_dir: Path,
    expected: Sequence[str],
) -> str:
    """Visit, download the receipt, extract its text and check ``expected``."""

    visit(page, settings)
    receipt_path = download_receipt(page, settings, downloads_dir)
    with scenario_step(ScenarioStep.READ_PDF):
        text = task(TaskName.READ_PDF, str(receipt_path))
    assert_text_contains(text, expected)
    return text
