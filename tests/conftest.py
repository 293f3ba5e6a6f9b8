from __future__ import annotations

import os

import pytest

from tests._helpers import FakeSurface


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config, logs and minikube lookups away from the real home dir."""
    for key in list(os.environ):
        if key.startswith("MINIDASH_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("MINIDASH_HOME", str(tmp_path / "minidash-home"))
    monkeypatch.delenv("MINIKUBE_HOME", raising=False)
    return tmp_path
