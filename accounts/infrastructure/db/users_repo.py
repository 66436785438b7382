from __future__ import annotations

from typing import Optional

import psycopg
from psycopg import errors as pg_errors

from accounts.domain.entities import Account, AccountStatus
from accounts.domain.errors import ConflictError, InvalidTokenError
from accounts.domain.ports.user_repository import UserRepositoryPort

_COLUMNS = "id, username, email, password_digest, status, activation_token"


def _to_account(row: tuple) -> Account:
    uid, username, email, digest, status, token = row
    return Account(
        id=str(uid),
        username=str(username),
        email=str(email),
        password_digest=str(digest),
        status=AccountStatus(status),
        activation_token=token,
    )


class PgUserRepository(UserRepositoryPort):
    """
    Postgres implementation of UserRepositoryPort.

    NOTE:
    - This repo is constructed with an *active async connection* supplied by the UoW.
    - It does not commit; the UnitOfWork controls the transaction boundary.
    - Email uniqueness is the `users_email_lower_key` unique index on lower(email).
    """

    def __init__(self, conn: psycopg.AsyncConnection) -> None:
        self._conn = conn

    async def exists_by_email(self, email: str) -> bool:
        sql = "SELECT EXISTS (SELECT 1 FROM users WHERE lower(email) = lower(%s))"
        async with self._conn.cursor() as cur:
            await cur.execute(sql, (email,))
            row = await cur.fetchone()
        return bool(row and row[0])

    async def create(self, account: Account) -> Account:
        sql = f"""
        INSERT INTO users (username, email, password_digest, status, activation_token)
        VALUES (%s, %s, %s, %s, %s)
        ON CONFLICT DO NOTHING
        RETURNING {_COLUMNS}
        """
        params = (
            account.username,
            account.email,
            account.password_digest,
            account.status.value,
            account.activation_token,
        )
        try:
            async with self._conn.cursor() as cur:
                await cur.execute(sql, params)
                row = await cur.fetchone()
        except pg_errors.UniqueViolation as e:
            raise ConflictError(account.email) from e

        if not row:
            raise ConflictError(account.email)
        return _to_account(row)

    async def find_by_token(self, token: str) -> Optional[Account]:
        sql = f"""
        SELECT {_COLUMNS}
        FROM users
        WHERE activation_token = %s AND status = 'inactive'
        FOR UPDATE
        """
        async with self._conn.cursor() as cur:
            await cur.execute(sql, (token,))
            row = await cur.fetchone()
        return _to_account(row) if row else None

    async def activate(self, account: Account) -> None:
        sql = """
        UPDATE users
        SET status = 'active', activation_token = NULL, activated_at = now()
        WHERE id = %s AND status = 'inactive'
        """
        async with self._conn.cursor() as cur:
            await cur.execute(sql, (account.id,))
            if cur.rowcount != 1:
                raise InvalidTokenError()

    async def delete(self, account_id: str) -> None:
        async with self._conn.cursor() as cur:
            await cur.execute("DELETE FROM users WHERE id = %s", (account_id,))
