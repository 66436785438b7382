import logging

from accounts.domain.entities import Account
from accounts.domain.errors import InvalidTokenError
from accounts.domain.ports.unit_of_work import UnitOfWorkPort

logger = logging.getLogger(__name__)


async def activate_user(uow: UnitOfWorkPort, token: str) -> Account:
    async with uow as transaction:
        account = await transaction.users.find_by_token(token)
        if account is None:
            logger.info("activation token rejected")
            raise InvalidTokenError()
        account.activate()
        await transaction.users.activate(account)
        await transaction.commit()

    logger.info("account activated", extra={"user_id": account.id})
    return account
