from __future__ import annotations

import pytest

from src.staffdesk.staffdesk.main import create_app
from tests.fakes import build_fake_container


@pytest.fixture
def container():
    return build_fake_container()


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
