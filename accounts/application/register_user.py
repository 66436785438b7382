"""
Registration saga.

validate -> hash -> token -> create (committed) -> notify -> on failure delete.

No transaction spans the mail call, so a failed or raising notification is
undone by deleting the account that was just written. That delete is
best effort: if it fails too, the error is logged and the caller still gets
EmailFailure.
"""

import logging
from typing import Any, Callable

from accounts.domain import services as domain_services
from accounts.domain.entities import Account
from accounts.domain.errors import ConflictError, EmailFailure, ValidationFailure
from accounts.domain.messages import MessageKey, translate
from accounts.domain.ports.notifier import NotifierPort
from accounts.domain.ports.unit_of_work import UnitOfWorkPort
from accounts.domain.validation import validate_registration

logger = logging.getLogger(__name__)


async def register_user(
    uow: UnitOfWorkPort,
    notifier: NotifierPort,
    username: Any,
    email: Any,
    password: Any,
    hash_password: Callable[[str], str],
    generate_token: Callable[[], str] | None = None,
    locale: str | None = None,
) -> Account:
    async def email_in_use(value: str) -> bool:
        async with uow as transaction:
            return await transaction.users.exists_by_email(value)

    errors = await validate_registration(
        username=username,
        email=email,
        password=password,
        locale=locale,
        email_in_use=email_in_use,
    )
    if errors:
        raise ValidationFailure(errors)

    password_digest = hash_password(password)
    token = (generate_token or domain_services.generate_activation_token)()
    account = Account.pending(
        username=username,
        email=email,
        password_digest=password_digest,
        activation_token=token,
    )

    async with uow as transaction:
        try:
            created = await transaction.users.create(account)
        except ConflictError:
            raise ValidationFailure(
                {"email": translate(MessageKey.EMAIL_IN_USE, locale)}
            ) from None
        await transaction.commit()

    if not await _notify(notifier, created):
        await _compensate(uow, created)
        raise EmailFailure()

    logger.info("user registered", extra={"user_id": created.id})
    return created


async def _notify(notifier: NotifierPort, account: Account) -> bool:
    try:
        return await notifier.send_activation(account.email, account.activation_token)
    except Exception:  # noqa: BLE001
        logger.exception(
            "activation notifier raised; treating as failed send",
            extra={"user_id": account.id},
        )
        return False


async def _compensate(uow: UnitOfWorkPort, account: Account) -> None:
    logger.info("undoing registration", extra={"user_id": account.id})
    try:
        async with uow as transaction:
            await transaction.users.delete(account.id)
            await transaction.commit()
    except Exception:  # noqa: BLE001
        logger.exception(
            "compensating delete failed; inactive account left behind",
            extra={"user_id": account.id},
        )
