from __future__ import annotations

import html
import logging

from accounts.domain.ports.email_port import EmailPort
from accounts.domain.ports.notifier import NotifierPort

logger = logging.getLogger(__name__)

ACTIVATION_SUBJECT = "Account activation"


def render_activation_body(email: str, token: str) -> str:
    return (
        f"<div>Hello {html.escape(email)},</div>\n"
        "<div>Token is: </div>\n"
        f"<div>{html.escape(token)}</div>\n"
    )


class EmailActivationNotifier(NotifierPort):
    """
    Sends the activation mail through an EmailPort and reports the outcome
    as a bool. Exactly one delivery attempt is made.
    """

    def __init__(self, email_port: EmailPort, *, sender: str | None = None) -> None:
        self._email = email_port
        self._sender = sender

    async def send_activation(self, email: str, token: str) -> bool:
        try:
            await self._email.send(
                to=email,
                subject=ACTIVATION_SUBJECT,
                body=render_activation_body(email, token),
                sender=self._sender,
            )
        except RuntimeError as e:
            logger.warning("activation mail failed", extra={"error": str(e)})
            return False
        return True
