"""
Local Authentication Provider

Accounts live in `<data_dir>/users.json`, keyed by normalized email.
Meant for the local-only variant and for development: one-time passcodes
are written to the activity log instead of being texted, and social
sign-in is simulated.
"""

import hashlib
import hmac
import json
import os
import re
import secrets
from pathlib import Path
from typing import Callable, Optional

from expensify.activity import ActivityLogger
from expensify.models.user import User
from expensify.services.auth.base import CredentialAuthProvider
from expensify.services.auth.interface import INVALID_OTP, UNAVAILABLE, AuthError


def random_otp(length: int) -> str:
    return "".join(secrets.choice("0123456789") for _ in range(length))


class LocalAuthProvider(CredentialAuthProvider):
    """File-backed accounts plus simulated phone and social sign-in."""

    def __init__(
        self,
        data_dir: Path,
        activity: Optional[ActivityLogger] = None,
        otp_length: int = 6,
        otp_factory: Optional[Callable[[int], str]] = None,
    ):
        super().__init__(activity)
        self._path = Path(data_dir) / "users.json"
        self._otp_length = otp_length
        self._otp_factory = otp_factory or random_otp
        self._pending_otps: dict[str, str] = {}

    def _load_users(self) -> dict[str, dict]:
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fh:
                return json.load(fh)
        except (OSError, json.JSONDecodeError) as e:
            raise AuthError(UNAVAILABLE, f"cannot read {self._path.name}: {e}")

    def _find_user(self, email: str) -> Optional[dict]:
        return self._load_users().get(email)

    def _insert_user(self, record: dict) -> None:
        users = self._load_users()
        users[record["email"]] = record
        tmp_path = self._path.with_suffix(".json.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as fh:
                json.dump(users, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path)
        except OSError as e:
            raise AuthError(UNAVAILABLE, f"cannot write {self._path.name}: {e}")

    async def sign_in_with_provider(self, provider: str) -> User:
        slug = provider.strip().lower()
        return User(
            uid=f"{slug}-user",
            name=f"{provider} User",
            email=f"user@{slug}.com",
        )

    async def send_otp(self, phone: str) -> bool:
        digits = re.sub(r"\D", "", phone)
        code = self._otp_factory(self._otp_length)
        self._pending_otps[digits] = code
        self._activity.log_otp_issued(digits, code=code)
        return True

    async def verify_otp(self, phone: str, code: str) -> User:
        digits = re.sub(r"\D", "", phone)
        expected = self._pending_otps.get(digits)
        if expected is None or not hmac.compare_digest(expected, code.strip()):
            raise AuthError(INVALID_OTP)
        del self._pending_otps[digits]

        # Same phone, same collection across sessions
        uid = "phone-" + hashlib.sha256(digits.encode("utf-8")).hexdigest()[:16]
        return User(uid=uid, name=digits, phone=digits)
