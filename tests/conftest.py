from __future__ import annotations

import logging
from pathlib import Path

import pytest

from ksp_mod_admin.services import http
from ksp_mod_admin.util.logging import _OWNED


FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def home(tmp_path, monkeypatch) -> Path:
    """Keep settings, the mod selection and logs inside the test's tmp dir."""
    home_dir = tmp_path / "home"
    monkeypatch.setenv("KSP_MOD_ADMIN_HOME", str(home_dir))
    return home_dir


@pytest.fixture(autouse=True)
def drop_cli_log_handlers():
    """Handlers installed by cli.main point at this test's files and streams."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _OWNED, False):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture
def read_fixture():
    def read(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")

    return read


@pytest.fixture
def pages(monkeypatch) -> dict[str, str]:
    """URL -> HTML served instead of the network. Unknown URLs fail the test."""
    served: dict[str, str] = {}

    def fake_fetch_html(url: str, *, timeout_s: float = 15.0) -> str:
        if url not in served:
            raise AssertionError(f"unexpected fetch: {url}")
        return served[url]

    monkeypatch.setattr(http, "fetch_html", fake_fetch_html)
    return served
