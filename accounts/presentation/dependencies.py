from typing import Callable

from fastapi import Request

from accounts.domain import services as domain_services
from accounts.domain.ports.notifier import NotifierPort
from accounts.domain.ports.unit_of_work import UnitOfWorkPort
from accounts.infrastructure.db.pool import get_pool
from accounts.infrastructure.db.uow import PgUnitOfWork
from accounts.infrastructure.security.password import hash_password
from accounts.settings import get_settings


def get_uow() -> UnitOfWorkPort:
    return PgUnitOfWork(get_pool())


def get_hash_password() -> Callable[[str], str]:
    return hash_password


def get_token_generator() -> Callable[[], str]:
    nbytes = get_settings().activation_token_bytes
    return lambda: domain_services.generate_activation_token(nbytes)


def get_notifier(request: Request) -> NotifierPort:
    # This is set in accounts.main lifespan()
    return request.app.state.notifier
