"""Domain enumerations."""

from enum import StrEnum


class TaskName(StrEnum):
    READ_PDF = "readPDF"


class ScenarioStep(StrEnum):
    VISIT = "visit"
    CLICK_DOWNLOAD = "click download trigger"
    WAIT_DOWNLOAD = "wait for download"
    READ_PDF = "read pdf"
