"""Local stand-in for the shop front end, used by the browser scenarios."""

from __future__ import annotations

from collections.abc import Sequence
import io

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, Response
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

RECEIPT_LINES = ("Papito Shop", "Recibo de compra", "Camiseta 2x 12.000", "Total24.000")


def render_receipt(lines: Sequence[str]) -> bytes:
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    _, height = A4
    y = height - 60
    c.setFont("Helvetica", 12)
    for line in lines:
        c.drawString(42, y, line)
        y -= 18
    c.showPage()
    c.save()
    return buffer.getvalue()


def create_receipt_app(
    receipt_lines: Sequence[str] = RECEIPT_LINES, *, with_trigger: bool = True
) -> FastAPI:
    app = FastAPI(title="Receipt fixture app")

    @app.get("/", response_class=HTMLResponse)
    def index() -> str:
        trigger = (
            '<a data-cy="download" href="/recibo.pdf" download="recibo.pdf">Baixar recibo</a>'
            if with_trigger
            else ""
        )
        return f"<!doctype html><html><body><h1>Checkout</h1>{trigger}</body></html>"

    @app.get("/recibo.pdf")
    def receipt() -> Response:
        return Response(
            content=render_receipt(receipt_lines),
            media_type="application/pdf",
            headers={"Content-Disposition": 'attachment; filename="recibo.pdf"'},
        )

    return app
