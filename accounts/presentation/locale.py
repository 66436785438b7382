from typing import Annotated

from fastapi import Header, Request

from accounts.domain.messages import resolve_locale


def locale_of(request: Request) -> str:
    return resolve_locale(request.headers.get("accept-language"))


def get_locale(
    accept_language: Annotated[str | None, Header()] = None,
) -> str:
    return resolve_locale(accept_language)
