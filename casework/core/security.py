"""Password hashing helpers for Casework accounts."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(password: str) -> str:
    """Return a salted scrypt hash in werkzeug's ``method$salt$digest`` form."""

    # Werkzeug 3 defaults to scrypt; pin explicitly so stored hashes stay stable.
    return generate_password_hash(password, method="scrypt", salt_length=16)


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return check_password_hash(password_hash, password)
    except ValueError:
        # Unknown hash method.
        return False


__all__ = ["hash_password", "verify_password"]
