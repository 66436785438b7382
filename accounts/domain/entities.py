from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from accounts.domain.errors import InvalidStatusTransition


class AccountStatus(str, Enum):
    INACTIVE = "inactive"
    ACTIVE = "active"


@dataclass
class Account:
    username: str
    email: str
    password_digest: str
    id: str | None = None
    status: AccountStatus = AccountStatus.INACTIVE
    activation_token: str | None = None

    def __post_init__(self):
        self.status = AccountStatus(self.status)
        # token present iff the account still waits for activation
        if self.status is AccountStatus.INACTIVE and not self.activation_token:
            raise ValueError("inactive account requires an activation token")
        if self.status is AccountStatus.ACTIVE and self.activation_token is not None:
            raise ValueError("active account cannot hold an activation token")

    @classmethod
    def pending(
        cls, *, username: str, email: str, password_digest: str, activation_token: str
    ) -> "Account":
        return cls(
            username=username,
            email=email,
            password_digest=password_digest,
            status=AccountStatus.INACTIVE,
            activation_token=activation_token,
        )

    @property
    def is_active(self) -> bool:
        return self.status is AccountStatus.ACTIVE

    def activate(self) -> None:
        if self.status is not AccountStatus.INACTIVE:
            raise InvalidStatusTransition()
        self.status = AccountStatus.ACTIVE
        self.activation_token = None
