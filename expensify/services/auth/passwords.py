"""Password hashing (PBKDF2-HMAC-SHA256)."""

import hashlib
import hmac
import secrets


ITERATIONS = 200_000


def new_salt() -> str:
    return secrets.token_hex(16)


def hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        bytes.fromhex(salt),
        ITERATIONS,
    )
    return digest.hex()


def verify_password(password: str, salt: str, expected_hash: str) -> bool:
    """Constant-time comparison against a stored hash."""
    try:
        candidate = hash_password(password, salt)
    except ValueError:
        # Corrupt salt in storage
        return False
    return hmac.compare_digest(candidate, expected_hash)
