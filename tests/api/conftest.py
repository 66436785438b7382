import pytest
from fastapi.testclient import TestClient

from accounts.main import create_app
from accounts.presentation.dependencies import (
    get_hash_password,
    get_notifier,
    get_uow,
)
from tests.fakes import FakeNotifier, FakeUoW


@pytest.fixture()
def app_and_deps():
    app = create_app()
    uow = FakeUoW()
    notifier = FakeNotifier(succeed=True)

    app.dependency_overrides[get_uow] = lambda: uow
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_hash_password] = lambda: (lambda plain: "hashed-" + plain)

    try:
        yield app, uow, notifier
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def client(app_and_deps):
    app, _, _ = app_and_deps
    return TestClient(app, raise_server_exceptions=False)
