"""
Email/password logic shared by the concrete providers.

Subclasses only decide where user records live.
"""

from abc import abstractmethod
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from expensify.activity import ActivityLogger
from expensify.models.user import User
from expensify.services.auth.interface import (
    EMAIL_ALREADY_IN_USE,
    USER_NOT_FOUND,
    WRONG_PASSWORD,
    AuthError,
    AuthProviderInterface,
)
from expensify.services.auth.passwords import hash_password, new_salt, verify_password


def normalize_email(email: str) -> str:
    return email.strip().lower()


def record_to_user(record: dict) -> User:
    return User(
        uid=record["uid"],
        name=record["name"],
        email=record.get("email") or None,
        phone=record.get("phone") or None,
    )


class CredentialAuthProvider(AuthProviderInterface):
    """Email/password accounts with PBKDF2 hashes."""

    def __init__(self, activity: Optional[ActivityLogger] = None):
        self._activity = activity or ActivityLogger()

    @abstractmethod
    def _find_user(self, email: str) -> Optional[dict]:
        """Get the stored record for a normalized email, or None."""
        pass

    @abstractmethod
    def _insert_user(self, record: dict) -> None:
        """Persist a new user record."""
        pass

    async def sign_up(self, name: str, email: str, password: str) -> User:
        email = normalize_email(email)
        if self._find_user(email) is not None:
            raise AuthError(EMAIL_ALREADY_IN_USE)

        salt = new_salt()
        record = {
            "uid": uuid4().hex,
            "name": name.strip() or email.split("@")[0],
            "email": email,
            "phone": "",
            "salt": salt,
            "password_hash": hash_password(password, salt),
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        # A record that cannot become a User is never stored
        user = record_to_user(record)
        self._insert_user(record)
        return user

    async def sign_in(self, email: str, password: str) -> User:
        record = self._find_user(normalize_email(email))
        if record is None:
            raise AuthError(USER_NOT_FOUND)
        if not verify_password(password, record["salt"], record["password_hash"]):
            raise AuthError(WRONG_PASSWORD)
        return record_to_user(record)

    async def send_password_reset(self, email: str) -> bool:
        """
        Acknowledge a reset request for a known account.

        Delivering the reset link is left to the mail setup of the deployment.
        """
        email = normalize_email(email)
        if self._find_user(email) is None:
            raise AuthError(USER_NOT_FOUND)
        self._activity.log_password_reset_requested(email)
        return True
