import pytest

from tests.fakes import FakeNotifier, FakeUoW

VALID_USER = {
    "username": "user1",
    "email": "user1@mail.com",
    "password": "P4ssword!",
}


@pytest.fixture()
def uow():
    return FakeUoW()


@pytest.fixture()
def notifier():
    return FakeNotifier(succeed=True)


@pytest.fixture()
def notifier_down():
    return FakeNotifier(succeed=False)


@pytest.fixture()
def hash_password_stub():
    return lambda p: "hashed-" + p


@pytest.fixture()
def valid_user():
    return dict(VALID_USER)


@pytest.fixture(autouse=True)
def patch_token(monkeypatch):
    """
    Make activation tokens deterministic in all tests.
    You can override in a specific test by re-monkeypatching.
    """
    from accounts.domain import services as domain_services

    counter = iter(range(1, 10_000))
    monkeypatch.setattr(
        domain_services,
        "generate_activation_token",
        lambda nbytes=16: f"token-{next(counter):04d}",
    )
    yield
