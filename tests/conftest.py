"""
Shared pytest fixtures for the AtomC front-end tests.
"""

import pytest


@pytest.fixture
def source_file(tmp_path):
    """Write AtomC source to a temporary .c file and return its path."""
    def _write(source: str, name: str = "prog.c"):
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path
    return _write


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep front-end environment switches from leaking into tests."""
    monkeypatch.delenv("ATOMC_STRUCT_TYPES", raising=False)
    monkeypatch.delenv("ATOMC_ECHO_TOKENS", raising=False)
