from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import ExitStack, contextmanager
from pathlib import Path
import socket
import threading
import time

from fastapi import FastAPI
from playwright.sync_api import sync_playwright
import pytest
import uvicorn


@pytest.fixture(scope="session")
def browser_context_args(browser_context_args: dict) -> dict:
    return {**browser_context_args, "accept_downloads": True}


@pytest.fixture(scope="session", autouse=True)
def _require_browser(browser_name: str) -> None:
    with sync_playwright() as playwright:
        executable = Path(getattr(playwright, browser_name).executable_path)
    if not executable.exists():
        pytest.skip(f"{browser_name} is not installed; run `playwright install {browser_name}`")


@contextmanager
def _serve(app: FastAPI) -> Iterator[str]:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]

    server = uvicorn.Server(uvicorn.Config(app, host="127.0.0.1", port=port, log_level="warning"))
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()
    deadline = time.monotonic() + 10
    while not server.started:
        if not thread.is_alive() or time.monotonic() > deadline:
            raise RuntimeError("receipt fixture app did not start")
        time.sleep(0.05)
    try:
        yield f"http://127.0.0.1:{port}/"
    finally:
        server.should_exit = True
        thread.join(timeout=5)


@pytest.fixture
def serve_app() -> Iterator[Callable[[FastAPI], str]]:
    """Serve FastAPI apps on free local ports for the duration of a test."""

    with ExitStack() as stack:
        yield lambda app: stack.enter_context(_serve(app))
