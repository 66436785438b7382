import time

import pytest

from accounts.domain.entities import AccountStatus
from accounts.presentation.dependencies import get_hash_password, get_notifier
from tests.fakes import FakeNotifierRaises

PATH = "/api/1.0/users"


def post_user(client, body, **headers):
    return client.post(PATH, json=body, headers=headers)


def test_register_route_happy_path(client, app_and_deps, valid_user):
    _, uow, notifier = app_and_deps

    response = post_user(client, valid_user)

    assert response.status_code == 200
    assert response.json() == {"message": "User created"}
    [stored] = uow.users.all()
    assert stored.username == "user1"
    assert stored.email == "user1@mail.com"
    assert stored.password_digest == "hashed-P4ssword!"
    assert stored.status is AccountStatus.INACTIVE
    assert stored.activation_token
    assert notifier.calls == [("user1@mail.com", stored.activation_token)]


def test_client_supplied_status_fields_are_ignored(client, app_and_deps, valid_user):
    _, uow, _ = app_and_deps
    body = dict(
        valid_user,
        inactive=False,
        status="active",
        activationToken="chosen",
        role="central line inserter",
    )

    response = post_user(client, body)

    assert response.status_code == 200
    [stored] = uow.users.all()
    assert stored.status is AccountStatus.INACTIVE
    assert stored.activation_token != "chosen"


@pytest.mark.parametrize(
    "field, message",
    [
        ("username", "Username cannot be null"),
        ("email", "E-mail cannot be null"),
        ("password", "Password cannot be null"),
    ],
)
def test_null_field_reports_only_that_field(client, valid_user, field, message):
    body = dict(valid_user, **{field: None})

    response = post_user(client, body)

    assert response.status_code == 400
    assert response.json()["validationErrors"] == {field: message}


def test_missing_field_treated_as_null(client, valid_user):
    body = dict(valid_user)
    del body["password"]

    response = post_user(client, body)

    assert response.status_code == 400
    assert response.json()["validationErrors"] == {"password": "Password cannot be null"}


def test_username_and_email_null_keys_in_order(client, app_and_deps, valid_user):
    _, uow, notifier = app_and_deps
    body = dict(valid_user, username=None, email=None)

    response = post_user(client, body)

    assert response.status_code == 400
    assert list(response.json()["validationErrors"]) == ["username", "email"]
    assert uow.users.all() == []
    assert notifier.calls == []


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("username", "usr", "Username must be at least 4 and at most 32 characters"),
        ("username", "a" * 33, "Username must be at least 4 and at most 32 characters"),
        ("email", "mail.com", "E-mail is not valid"),
        ("email", "user@mail", "E-mail is not valid"),
        ("password", "P4ss!", "Password must be at least 8 and at most 50 characters"),
        (
            "password",
            "lowercase1!",
            "Password must include at least 1 lowercase, 1 uppercase, 1 number, and 1 symbol",
        ),
    ],
)
def test_rule_messages(client, valid_user, field, value, message):
    response = post_user(client, dict(valid_user, **{field: value}))

    assert response.status_code == 400
    assert response.json()["validationErrors"][field] == message


def test_email_in_use(client, app_and_deps, valid_user):
    _, uow, _ = app_and_deps
    post_user(client, valid_user)

    response = post_user(client, {"username": None, "email": "user1@mail.com"})

    assert response.status_code == 400
    errors = response.json()["validationErrors"]
    assert errors["email"] == "E-mail in use"
    assert len(uow.users.all()) == 1


def test_validation_envelope_shape(client, valid_user):
    before = int(time.time() * 1000)
    response = post_user(client, dict(valid_user, username=None))
    after = int(time.time() * 1000)

    body = response.json()
    assert set(body) == {"path", "timestamp", "message", "validationErrors"}
    assert body["path"] == PATH
    assert body["message"] == "Validation failure"
    assert before - 5000 <= body["timestamp"] <= after + 5000


def test_email_failure_returns_502_and_leaves_no_row(client, app_and_deps, valid_user):
    _, uow, notifier = app_and_deps
    notifier.succeed = False

    response = post_user(client, valid_user)

    assert response.status_code == 502
    body = response.json()
    assert body["message"] == "Email failure"
    assert body["path"] == PATH
    assert "validationErrors" not in body
    assert uow.users.all() == []


def test_wrong_type_is_a_validation_failure(client, valid_user):
    response = post_user(client, dict(valid_user, username=1234))

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failure"
    assert body["validationErrors"] == {"username": "Username has an invalid value"}


def test_wrong_type_does_not_hide_other_field_errors(client, app_and_deps):
    _, uow, notifier = app_and_deps

    response = post_user(client, {"username": 1234, "email": None, "password": None})

    assert response.status_code == 400
    assert list(response.json()["validationErrors"].items()) == [
        ("username", "Username has an invalid value"),
        ("email", "E-mail cannot be null"),
        ("password", "Password cannot be null"),
    ]
    assert uow.users.all() == []
    assert notifier.calls == []


def test_body_that_is_not_an_object(client):
    response = post_user(client, ["user1", "user1@mail.com", "P4ssword!"])

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failure"
    assert body["validationErrors"] == {"body": "Request body is not valid"}


@pytest.mark.parametrize(
    "field, value, message",
    [
        ("password", "P4ssword!\x00", "Password has an invalid value"),
        ("username", "user\x00name", "Username has an invalid value"),
    ],
)
def test_nul_character_is_a_validation_failure(
    client, app_and_deps, valid_user, field, value, message
):
    app, uow, notifier = app_and_deps
    # real bcrypt hasher: it refuses NUL bytes, so the value must be stopped earlier
    app.dependency_overrides.pop(get_hash_password)

    response = post_user(client, dict(valid_user, **{field: value}))

    assert response.status_code == 400
    assert response.json()["validationErrors"] == {field: message}
    assert uow.users.all() == []
    assert notifier.calls == []


def test_raising_notifier_returns_502_and_leaves_no_row(client, app_and_deps, valid_user):
    app, uow, _ = app_and_deps
    notifier = FakeNotifierRaises()
    app.dependency_overrides[get_notifier] = lambda: notifier

    response = post_user(client, valid_user)

    assert response.status_code == 502
    assert response.json()["message"] == "Email failure"
    assert len(notifier.calls) == 1
    assert uow.users.all() == []


def test_unknown_path_uses_envelope(client):
    response = client.get("/api/1.0/nowhere", headers={"Accept-Language": "tr"})

    assert response.status_code == 404
    body = response.json()
    assert set(body) == {"path", "timestamp", "message"}
    assert body["path"] == "/api/1.0/nowhere"
    assert body["message"] == "Kaynak bulunamadı"


def test_wrong_method_uses_envelope(client):
    response = client.get(PATH)

    assert response.status_code == 405
    assert response.json()["message"] == "Method not allowed"
    assert response.json()["path"] == PATH
    assert "POST" in response.headers["allow"]


def test_unexpected_error_uses_envelope(client, app_and_deps, valid_user):
    app, _, _ = app_and_deps

    def broken_hasher():
        def hash_password(plain):
            raise KeyError("hasher misconfigured")

        return hash_password

    app.dependency_overrides[get_hash_password] = broken_hasher

    response = post_user(client, valid_user)

    assert response.status_code == 500
    assert response.json()["message"] == "Internal failure"
    assert response.json()["path"] == PATH


def test_locale_changes_text_only(client, valid_user):
    body = dict(valid_user, username=None, password="short")

    en = post_user(client, body)
    tr = post_user(client, body, **{"Accept-Language": "tr"})

    assert en.status_code == tr.status_code == 400
    assert set(en.json()) == set(tr.json())
    assert list(en.json()["validationErrors"]) == list(tr.json()["validationErrors"])
    assert tr.json()["message"] == "Doğrulama hatası"
    assert tr.json()["validationErrors"]["username"] == "Kullanıcı adı boş olamaz"


def test_success_message_localized(client, valid_user):
    response = post_user(client, valid_user, **{"Accept-Language": "tr-TR"})

    assert response.status_code == 200
    assert response.json() == {"message": "Kullanıcı oluşturuldu"}


def test_unknown_locale_uses_default(client, valid_user):
    response = post_user(
        client, dict(valid_user, email=None), **{"Accept-Language": "xx"}
    )

    assert response.json()["validationErrors"] == {"email": "E-mail cannot be null"}
