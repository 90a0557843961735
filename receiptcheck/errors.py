"""Exceptions raised by the extractor, the task bridge and the scenario steps."""

from __future__ import annotations

from collections.abc import Sequence

from receiptcheck.enums import ScenarioStep


class PdfExtractionError(ValueError):
    """The payload could not be parsed as a PDF document."""


class TaskExecutionError(RuntimeError):
    """A named task failed, timed out or could not be dispatched."""

    def __init__(self, task_name: str, message: str) -> None:
        super().__init__(f"task {task_name!r} failed: {message}")
        self.task_name = task_name


class ScenarioStepError(RuntimeError):
    """A browser scenario step failed before its assertions ran."""

    def __init__(self, step: ScenarioStep, message: str) -> None:
        super().__init__(f"step {step.value!r} failed: {message}")
        self.step = step


class ReceiptContentMismatch(AssertionError):
    """Extracted receipt text lacks one or more expected substrings."""

    def __init__(self, missing: Sequence[str], text: str) -> None:
        names = ", ".join(repr(item) for item in missing)
        super().__init__(f"receipt text does not contain {names}; extracted text was {text!r}")
        self.missing = tuple(missing)
        self.text = text
