from __future__ import annotations

from typing import Optional, Protocol

from accounts.domain.entities import Account


class UserRepositoryPort(Protocol):
    async def exists_by_email(self, email: str) -> bool:
        """True if any account, active or not, uses this email (case-insensitive)."""

    async def create(self, account: Account) -> Account:
        """
        Insert a new account and return it with its assigned id.
        Raise ConflictError if the email is taken at write time; this check
        must be atomic with the insert (unique constraint), not a pre-read.
        """

    async def find_by_token(self, token: str) -> Optional[Account]:
        """
        Fetch the inactive account holding this activation token and lock
        it for update (transaction-scoped). Return None if not found.
        """

    async def activate(self, account: Account) -> None:
        """
        Persist the activation: status active, token cleared.
        Raise InvalidTokenError if the account is no longer pending.
        """

    async def delete(self, account_id: str) -> None:
        """Remove an account. Only used to undo a registration."""
