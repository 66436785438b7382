from accounts.domain.messages import MessageKey


class DomainError(Exception):
    """Base class for all domain-level errors."""

    message_key: MessageKey | None = None


class ValidationFailure(DomainError):
    """One or more submitted fields were rejected.

    `errors` maps field name to an already localized message, in the order
    the fields were checked.
    """

    message_key = MessageKey.VALIDATION_FAILURE

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(errors)
        self.errors = dict(errors)


class ConflictError(DomainError):
    """The store refused a write because the email is already taken."""

    def __init__(self, email: str) -> None:
        super().__init__(email)
        self.email = email


class EmailFailure(DomainError):
    """The activation mail could not be delivered; the account was rolled back."""

    message_key = MessageKey.EMAIL_FAILURE


class InvalidTokenError(DomainError):
    """No pending account matches the presented activation token."""

    message_key = MessageKey.ACCOUNT_ACTIVATION_FAILURE


class InvalidStatusTransition(DomainError):
    """Tried to change an account's status in a way that's not allowed."""

    pass
