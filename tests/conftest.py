from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


@pytest.fixture
def make_pdf(tmp_path: Path) -> Callable[..., Path]:
    """Write a one-page PDF with one line of text per entry."""

    def _make(lines: Sequence[str], name: str = "recibo.pdf", title: str | None = None) -> Path:
        path = tmp_path / name
        c = canvas.Canvas(str(path), pagesize=A4)
        if title:
            c.setTitle(title)
        _, height = A4
        y = height - 60
        c.setFont("Helvetica", 12)
        for line in lines:
            c.drawString(42, y, line)
            y -= 18
        c.showPage()
        c.save()
        return path

    return _make
