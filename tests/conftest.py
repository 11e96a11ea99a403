"""Root test configuration: isolate every test from the caller's config and environment"""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Run from a clean tmp directory with no MDVIEW_* env vars so config.yaml and env never leak in."""
    for name in list(os.environ):
        if name.startswith("MDVIEW_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
