from typing import Annotated, Callable

from fastapi import APIRouter, Depends

from accounts.application.activate_user import activate_user
from accounts.application.register_user import register_user
from accounts.domain.messages import MessageKey, translate
from accounts.domain.ports.notifier import NotifierPort
from accounts.domain.ports.unit_of_work import UnitOfWorkPort
from accounts.presentation.dependencies import (
    get_hash_password,
    get_notifier,
    get_token_generator,
    get_uow,
)
from accounts.presentation.locale import get_locale
from accounts.schemas.requests import UserCreateIn
from accounts.schemas.responses import ErrorOut, MessageOut

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "",
    response_model=MessageOut,
    responses={
        400: {"model": ErrorOut, "description": "Validation failure"},
        502: {"model": ErrorOut, "description": "Activation mail could not be sent"},
    },
)
async def post_create_user(
    body: UserCreateIn,
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    notifier: Annotated[NotifierPort, Depends(get_notifier)],
    hash_password: Annotated[Callable[[str], str], Depends(get_hash_password)],
    generate_token: Annotated[Callable[[], str], Depends(get_token_generator)],
    locale: Annotated[str, Depends(get_locale)],
):
    await register_user(
        uow=uow,
        notifier=notifier,
        username=body.username,
        email=body.email,
        password=body.password,
        hash_password=hash_password,
        generate_token=generate_token,
        locale=locale,
    )
    return MessageOut(message=translate(MessageKey.USER_CREATE_SUCCESS, locale))


@router.post(
    "/token/{token}",
    response_model=MessageOut,
    responses={400: {"model": ErrorOut, "description": "Unknown or used token"}},
)
async def post_activate_user(
    token: str,
    uow: Annotated[UnitOfWorkPort, Depends(get_uow)],
    locale: Annotated[str, Depends(get_locale)],
):
    await activate_user(uow=uow, token=token)
    return MessageOut(message=translate(MessageKey.ACCOUNT_ACTIVATION_SUCCESS, locale))
