"""Shared pytest fixtures for yamlformat tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test.

    The CLI calls ``configure_logging``, which swaps the root handlers for
    one bound to the runner's (soon closed) stderr.
    """
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("yamlformat")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep YAMLFORMAT_* variables from the outer environment out of tests."""
    for name in (
        "YAMLFORMAT_FORMAT",
        "YAMLFORMAT_INDENT",
        "YAMLFORMAT_VERBOSE",
        "YAMLFORMAT_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
