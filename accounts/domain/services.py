# accounts/domain/services.py
from __future__ import annotations

import secrets

DEFAULT_TOKEN_BYTES = 16


def generate_activation_token(nbytes: int = DEFAULT_TOKEN_BYTES) -> str:
    """Hex token from the OS CSPRNG; 16 bytes gives 32 characters."""
    if nbytes < DEFAULT_TOKEN_BYTES:
        raise ValueError(f"activation tokens need at least {DEFAULT_TOKEN_BYTES} bytes")
    return secrets.token_hex(nbytes)
