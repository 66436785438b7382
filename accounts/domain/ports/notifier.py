from __future__ import annotations

from typing import Protocol


class NotifierPort(Protocol):
    async def send_activation(self, email: str, token: str) -> bool:
        """
        Send the activation message for `token` to `email`.
        Return True on success, False on failure. Never retries.
        """
