from __future__ import annotations

from passlib.context import CryptContext

from accounts.settings import get_settings

# One global context; bcrypt is the only scheme we use.
_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(plain: str, *, rounds: int | None = None) -> str:
    """
    Salted bcrypt digest of `plain`. A fresh salt is drawn on every call, so
    hashing the same password twice yields two different digests.
    If rounds is None, use settings.bcrypt_rounds.
    """
    if rounds is None:
        rounds = int(get_settings().bcrypt_rounds)
    return _pwd.hash(plain, rounds=rounds)
