# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from firewall_api.main import create_app  # noqa: E402
from firewall_api.settings import Settings  # noqa: E402
from tests.testlib.fake_activator import RecordingActivator  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    for name in (
        "AWALL_API_CONFIG_FILE",
        "AWALL_API_CORS_ALLOW_ORIGIN",
        "AWALL_API_CORS_ALLOW_METHODS",
        "AWALL_API_CORS_MAX_AGE",
        "AWALL_API_ACTIVATE_COMMAND",
        "AWALL_API_ACTIVATE_STRICT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "base.json"


@pytest.fixture()
def settings(config_path: Path) -> Settings:
    return Settings(config_file=str(config_path))


@pytest.fixture()
def activator() -> RecordingActivator:
    return RecordingActivator()


@pytest.fixture()
def app(settings: Settings, activator: RecordingActivator):
    return create_app(settings, activator=activator)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c
