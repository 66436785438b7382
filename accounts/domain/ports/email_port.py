from __future__ import annotations

from typing import Protocol


class EmailPort(Protocol):
    async def send(
        self,
        *,
        to: str,
        subject: str,
        body: str,
        sender: str | None = None,
    ) -> None:
        """Send an email. Raise RuntimeError if delivery was refused or failed."""
