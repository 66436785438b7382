"""
Message catalog for every user-visible text.

Keys are locale independent; each supported locale must translate every key.
`verify_catalog()` is run when the application is built so a missing
translation fails startup instead of silently falling back.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping

DEFAULT_LOCALE = "en"


class MessageKey(str, Enum):
    # field errors
    USERNAME_NULL = "username_null"
    USERNAME_SIZE = "username_size"
    EMAIL_NULL = "email_null"
    EMAIL_INVALID = "email_invalid"
    EMAIL_IN_USE = "email_in_use"
    PASSWORD_NULL = "password_null"
    PASSWORD_SIZE = "password_size"
    PASSWORD_PATTERN = "password_pattern"
    USERNAME_INVALID = "username_invalid"
    PASSWORD_INVALID = "password_invalid"
    BODY_INVALID = "body_invalid"

    # outcomes
    USER_CREATE_SUCCESS = "user_create_success"
    VALIDATION_FAILURE = "validation_failure"
    EMAIL_FAILURE = "email_failure"
    ACCOUNT_ACTIVATION_FAILURE = "account_activation_failure"
    ACCOUNT_ACTIVATION_SUCCESS = "account_activation_success"
    NOT_FOUND = "not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    INTERNAL_FAILURE = "internal_failure"


CATALOG: dict[str, dict[MessageKey, str]] = {
    "en": {
        MessageKey.USERNAME_NULL: "Username cannot be null",
        MessageKey.USERNAME_SIZE: "Username must be at least 4 and at most 32 characters",
        MessageKey.EMAIL_NULL: "E-mail cannot be null",
        MessageKey.EMAIL_INVALID: "E-mail is not valid",
        MessageKey.EMAIL_IN_USE: "E-mail in use",
        MessageKey.PASSWORD_NULL: "Password cannot be null",
        MessageKey.PASSWORD_SIZE: "Password must be at least 8 and at most 50 characters",
        MessageKey.PASSWORD_PATTERN: (
            "Password must include at least 1 lowercase, 1 uppercase, "
            "1 number, and 1 symbol"
        ),
        MessageKey.USERNAME_INVALID: "Username has an invalid value",
        MessageKey.PASSWORD_INVALID: "Password has an invalid value",
        MessageKey.BODY_INVALID: "Request body is not valid",
        MessageKey.USER_CREATE_SUCCESS: "User created",
        MessageKey.VALIDATION_FAILURE: "Validation failure",
        MessageKey.EMAIL_FAILURE: "Email failure",
        MessageKey.ACCOUNT_ACTIVATION_FAILURE: "Activation token is not valid",
        MessageKey.ACCOUNT_ACTIVATION_SUCCESS: "Account activated",
        MessageKey.NOT_FOUND: "Resource not found",
        MessageKey.METHOD_NOT_ALLOWED: "Method not allowed",
        MessageKey.INTERNAL_FAILURE: "Internal failure",
    },
    "tr": {
        MessageKey.USERNAME_NULL: "Kullanıcı adı boş olamaz",
        MessageKey.USERNAME_SIZE: "Kullanıcı adı en az 4, en fazla 32 karakter olmalıdır",
        MessageKey.EMAIL_NULL: "E-posta boş olamaz",
        MessageKey.EMAIL_INVALID: "E-posta geçerli değil",
        MessageKey.EMAIL_IN_USE: "Bu e-posta kullanılıyor",
        MessageKey.PASSWORD_NULL: "Şifre boş olamaz",
        MessageKey.PASSWORD_SIZE: "Şifre en az 8, en fazla 50 karakter olmalıdır",
        MessageKey.PASSWORD_PATTERN: (
            "Şifre en az 1 küçük harf, 1 büyük harf, 1 rakam ve 1 sembol içermelidir"
        ),
        MessageKey.USERNAME_INVALID: "Kullanıcı adı geçersiz bir değer içeriyor",
        MessageKey.PASSWORD_INVALID: "Şifre geçersiz bir değer içeriyor",
        MessageKey.BODY_INVALID: "İstek gövdesi geçerli değil",
        MessageKey.USER_CREATE_SUCCESS: "Kullanıcı oluşturuldu",
        MessageKey.VALIDATION_FAILURE: "Doğrulama hatası",
        MessageKey.EMAIL_FAILURE: "E-posta gönderilemedi",
        MessageKey.ACCOUNT_ACTIVATION_FAILURE: "Aktivasyon anahtarı geçerli değil",
        MessageKey.ACCOUNT_ACTIVATION_SUCCESS: "Hesap aktifleştirildi",
        MessageKey.NOT_FOUND: "Kaynak bulunamadı",
        MessageKey.METHOD_NOT_ALLOWED: "İzin verilmeyen yöntem",
        MessageKey.INTERNAL_FAILURE: "Sunucu hatası",
    },
}


class CatalogIncomplete(RuntimeError):
    """A supported locale lacks a translation for one or more keys."""


def supported_locales() -> tuple[str, ...]:
    return tuple(CATALOG)


def verify_catalog(catalog: Mapping[str, Mapping[MessageKey, str]] = CATALOG) -> None:
    if DEFAULT_LOCALE not in catalog:
        raise CatalogIncomplete(f"default locale {DEFAULT_LOCALE!r} is missing")

    missing: dict[str, list[str]] = {}
    for locale, table in catalog.items():
        gaps = [key.value for key in MessageKey if not table.get(key)]
        if gaps:
            missing[locale] = gaps
    if missing:
        raise CatalogIncomplete(f"untranslated message keys: {missing}")


def normalize_locale(locale: str | None) -> str:
    """Map a requested locale to a supported one, else the default."""
    if locale:
        candidate = locale.strip().lower().replace("_", "-").split("-", 1)[0]
        if candidate in CATALOG:
            return candidate
    return DEFAULT_LOCALE


def translate(key: MessageKey, locale: str | None = None) -> str:
    return CATALOG[normalize_locale(locale)][key]


def resolve_locale(accept_language: str | None) -> str:
    """
    Pick a locale from an Accept-Language header value.

    Entries are taken in order of their q-weight (header order breaks ties);
    the first one whose primary subtag is supported wins.
    """
    if not accept_language:
        return DEFAULT_LOCALE

    ranked: list[tuple[float, int, str]] = []
    for position, part in enumerate(accept_language.split(",")):
        tag, _, params = part.strip().partition(";")
        if not tag or tag == "*":
            continue
        weight = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                weight = float(params[2:])
            except ValueError:
                weight = 0.0
        if weight > 0:
            ranked.append((-weight, position, tag))

    for _, _, tag in sorted(ranked):
        primary = tag.strip().lower().replace("_", "-").split("-", 1)[0]
        if primary in CATALOG:
            return primary
    return DEFAULT_LOCALE
