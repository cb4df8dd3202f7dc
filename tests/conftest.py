"""Shared fixtures for ccreport tests."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's CCREPORT_* variables out of the tests."""
    for name in ("CCREPORT_DIR", "CCREPORT_KEYS", "CCREPORT_MATCH"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def result_dir(tmp_path):
    """Empty directory for result files."""
    path = tmp_path / "best"
    path.mkdir()
    return path


@pytest.fixture()
def write_result(result_dir):
    """Write a result file into ``result_dir`` and return its path."""

    def _write(name: str, content: str):
        path = result_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
