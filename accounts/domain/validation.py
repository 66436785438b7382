"""
Registration field validation.

Each rule is a pure function returning the `MessageKey` of the first failed
check for its field, or None. `validate_registration` runs every rule,
performs the email existence lookup (once, and only for syntactically valid
addresses) and returns the localized error map.

The existence lookup is advisory: the repository's unique constraint is what
actually guarantees one account per email.
"""

from __future__ import annotations

import unicodedata
from typing import Any, Awaitable, Callable

from email_validator import EmailNotValidError, validate_email

from accounts.domain.messages import MessageKey, translate

USERNAME_MIN_LENGTH = 4
USERNAME_MAX_LENGTH = 32
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 50

EmailInUse = Callable[[str], Awaitable[bool]]


def _has_control(value: str) -> bool:
    # control characters and lone surrogates cannot be stored or hashed
    return any(unicodedata.category(ch) in ("Cc", "Cs") for ch in value)


def check_username(value: Any) -> MessageKey | None:
    if value is None:
        return MessageKey.USERNAME_NULL
    if not isinstance(value, str) or _has_control(value):
        return MessageKey.USERNAME_INVALID
    if not USERNAME_MIN_LENGTH <= len(value) <= USERNAME_MAX_LENGTH:
        return MessageKey.USERNAME_SIZE
    return None


def check_email_syntax(value: Any) -> MessageKey | None:
    if value is None:
        return MessageKey.EMAIL_NULL
    if not isinstance(value, str) or _has_control(value):
        return MessageKey.EMAIL_INVALID
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return MessageKey.EMAIL_INVALID
    return None


def _has_symbol(value: str) -> bool:
    return any(
        not ch.isalnum()
        and not ch.isspace()
        and not unicodedata.category(ch).startswith("C")
        for ch in value
    )


def check_password(value: Any) -> MessageKey | None:
    if value is None:
        return MessageKey.PASSWORD_NULL
    if not isinstance(value, str) or _has_control(value):
        return MessageKey.PASSWORD_INVALID
    if not PASSWORD_MIN_LENGTH <= len(value) <= PASSWORD_MAX_LENGTH:
        return MessageKey.PASSWORD_SIZE
    if not (
        any(ch.islower() for ch in value)
        and any(ch.isupper() for ch in value)
        and any(ch.isdigit() for ch in value)
        and _has_symbol(value)
    ):
        return MessageKey.PASSWORD_PATTERN
    return None


async def validate_registration(
    *,
    username: Any,
    email: Any,
    password: Any,
    locale: str | None = None,
    email_in_use: EmailInUse | None = None,
) -> dict[str, str]:
    """
    Validate all fields and return {field: localized message} for failures.

    An empty dict means the submission is acceptable. Fields are reported in
    the order username, email, password.
    """
    keys: dict[str, MessageKey] = {}

    username_key = check_username(username)
    if username_key is not None:
        keys["username"] = username_key

    email_key = check_email_syntax(email)
    if email_key is None and email_in_use is not None and await email_in_use(email):
        email_key = MessageKey.EMAIL_IN_USE
    if email_key is not None:
        keys["email"] = email_key

    password_key = check_password(password)
    if password_key is not None:
        keys["password"] = password_key

    return {field: translate(key, locale) for field, key in keys.items()}
