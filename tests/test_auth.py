"""Tests for auth providers, the message catalog and the auth flow."""

import asyncio
import pytest
from unittest.mock import MagicMock

from pydantic import ValidationError

from expensify.config import AuthMessageCatalog, catalog_for_backend, messages
from expensify.config.messages import GENERIC_AUTH_MESSAGE, SPECIFIC_AUTH_MESSAGES
from expensify.models import AuthForm, AuthMode
from expensify.orchestrator import RESET_LINK_SENT, AuthFlow
from expensify.services.auth import (
    EMAIL_ALREADY_IN_USE,
    INVALID_OTP,
    OPERATION_NOT_ALLOWED,
    USER_NOT_FOUND,
    WRONG_PASSWORD,
    AuthError,
    GoogleSheetsAuthProvider,
    LocalAuthProvider,
)
from expensify.services.auth.passwords import hash_password, new_salt, verify_password
from expensify.services.storage.google_sheets import USER_COLUMNS
from expensify.validation import AuthFormValidator


def fixed_otp(length: int) -> str:
    return "123456"[:length]


class TestPasswords:
    """Tests for password hashing."""

    def test_verify_roundtrip(self):
        salt = new_salt()
        stored = hash_password("hunter22", salt)
        assert verify_password("hunter22", salt, stored)
        assert not verify_password("hunter23", salt, stored)

    def test_salts_differ(self):
        assert new_salt() != new_salt()

    def test_corrupt_salt_fails_closed(self):
        assert not verify_password("hunter22", "not-hex", "00")


class TestLocalAuthProvider:
    """Tests for the file-backed provider."""

    @pytest.fixture(autouse=True)
    def _provider(self, tmp_path):
        self.provider = LocalAuthProvider(tmp_path, otp_factory=fixed_otp)

    def test_sign_up_then_sign_in(self):
        user = asyncio.run(self.provider.sign_up("Asha", "Asha@Example.com", "secret1"))
        assert user.email == "asha@example.com"
        assert user.name == "Asha"

        again = asyncio.run(self.provider.sign_in("asha@example.com ", "secret1"))
        assert again.uid == user.uid

    def test_name_defaults_to_email_local_part(self):
        user = asyncio.run(self.provider.sign_up("  ", "ravi@example.com", "secret1"))
        assert user.name == "ravi"

    def test_sign_up_stores_nothing_when_user_is_invalid(self, tmp_path):
        with pytest.raises(ValidationError):
            asyncio.run(self.provider.sign_up("N" * 201, "asha@example.com", "secret1"))
        assert not (tmp_path / "users.json").exists()

    def test_duplicate_email(self):
        asyncio.run(self.provider.sign_up("Asha", "asha@example.com", "secret1"))
        with pytest.raises(AuthError) as exc_info:
            asyncio.run(self.provider.sign_up("Other", "ASHA@example.com", "secret2"))
        assert exc_info.value.code == EMAIL_ALREADY_IN_USE

    def test_unknown_user(self):
        with pytest.raises(AuthError) as exc_info:
            asyncio.run(self.provider.sign_in("ghost@example.com", "secret1"))
        assert exc_info.value.code == USER_NOT_FOUND

    def test_wrong_password(self):
        asyncio.run(self.provider.sign_up("Asha", "asha@example.com", "secret1"))
        with pytest.raises(AuthError) as exc_info:
            asyncio.run(self.provider.sign_in("asha@example.com", "secret2"))
        assert exc_info.value.code == WRONG_PASSWORD

    def test_password_reset(self):
        asyncio.run(self.provider.sign_up("Asha", "asha@example.com", "secret1"))
        assert asyncio.run(self.provider.send_password_reset("asha@example.com"))
        with pytest.raises(AuthError):
            asyncio.run(self.provider.send_password_reset("ghost@example.com"))

    def test_otp_flow(self):
        asyncio.run(self.provider.send_otp("+91 98765 43210"))
        user = asyncio.run(self.provider.verify_otp("919876543210", "123456"))
        assert user.phone == "919876543210"

        # Same phone maps to the same collection next time
        asyncio.run(self.provider.send_otp("919876543210"))
        again = asyncio.run(self.provider.verify_otp("919876543210", "123456"))
        assert again.uid == user.uid

    def test_otp_is_single_use(self):
        asyncio.run(self.provider.send_otp("9876543210"))
        asyncio.run(self.provider.verify_otp("9876543210", "123456"))
        with pytest.raises(AuthError) as exc_info:
            asyncio.run(self.provider.verify_otp("9876543210", "123456"))
        assert exc_info.value.code == INVALID_OTP

    def test_wrong_otp(self):
        asyncio.run(self.provider.send_otp("9876543210"))
        with pytest.raises(AuthError) as exc_info:
            asyncio.run(self.provider.verify_otp("9876543210", "000000"))
        assert exc_info.value.code == INVALID_OTP

    def test_social_sign_in(self):
        user = asyncio.run(self.provider.sign_in_with_provider("Google"))
        assert user.uid == "google-user"
        assert user.email == "user@google.com"


class TestGoogleSheetsAuthProvider:
    """Tests for the worksheet-backed provider with a mocked client."""

    def setup_method(self):
        self.client = MagicMock()
        self.sheet = self.client.get_users_sheet.return_value
        self.sheet.get_all_values.return_value = [USER_COLUMNS]
        self.provider = GoogleSheetsAuthProvider(self.client)

    def test_sign_up_appends_row(self):
        user = asyncio.run(self.provider.sign_up("Asha", "asha@example.com", "secret1"))
        row = self.sheet.append_row.call_args.args[0]
        assert row[USER_COLUMNS.index("uid")] == user.uid
        assert row[USER_COLUMNS.index("email")] == "asha@example.com"
        assert row[USER_COLUMNS.index("password_hash")] != "secret1"

    def test_sign_in_reads_rows(self):
        salt = new_salt()
        self.sheet.get_all_values.return_value = [
            USER_COLUMNS,
            ["u1", "Asha", "asha@example.com", "", salt, hash_password("secret1", salt), "2024-01-01"],
        ]
        user = asyncio.run(self.provider.sign_in("asha@example.com", "secret1"))
        assert user.uid == "u1"

    def test_phone_not_supported(self):
        with pytest.raises(AuthError) as exc_info:
            asyncio.run(self.provider.send_otp("9876543210"))
        assert exc_info.value.code == OPERATION_NOT_ALLOWED


class TestMessageCatalog:
    """Tests for the per-backend error message mapping."""

    def test_specific_style(self, auth_settings):
        catalog = catalog_for_backend("local", auth_settings)
        assert catalog.describe(WRONG_PASSWORD) == "Incorrect password"

    def test_generic_style(self, auth_settings):
        catalog = catalog_for_backend("sheets", auth_settings)
        assert catalog.describe(WRONG_PASSWORD) == GENERIC_AUTH_MESSAGE
        assert catalog.describe(USER_NOT_FOUND) == GENERIC_AUTH_MESSAGE

    def test_unknown_code_uses_fallback(self):
        catalog = AuthMessageCatalog(style="specific", messages=SPECIFIC_AUTH_MESSAGES)
        assert catalog.describe("something-new") == GENERIC_AUTH_MESSAGE


class TestAuthFlow:
    """Tests for the orchestrated auth forms."""

    @pytest.fixture(autouse=True)
    def _flow(self, tmp_path, auth_settings):
        self.provider = LocalAuthProvider(tmp_path, otp_factory=fixed_otp)
        self.flow = AuthFlow(
            provider=self.provider,
            catalog=catalog_for_backend("local", auth_settings),
            validator=AuthFormValidator(auth_settings),
        )

    def test_field_errors_skip_provider(self):
        provider = MagicMock()
        flow = AuthFlow(provider=provider, catalog=AuthMessageCatalog())
        result = asyncio.run(flow.submit(AuthMode.LOGIN, AuthForm(email="bad", password="1")))
        assert not result.success
        assert set(result.field_errors) == {"email", "password"}
        provider.sign_in.assert_not_called()

    def test_signup_and_login(self):
        signup = asyncio.run(self.flow.submit(
            AuthMode.SIGNUP, AuthForm(name="Asha", email="asha@example.com", password="secret1")
        ))
        assert signup.success

        login = asyncio.run(self.flow.submit(
            AuthMode.LOGIN, AuthForm(email="asha@example.com", password="secret1")
        ))
        assert login.success
        assert login.user.uid == signup.user.uid

    def test_provider_error_becomes_message(self):
        result = asyncio.run(self.flow.submit(
            AuthMode.LOGIN, AuthForm(email="ghost@example.com", password="secret1")
        ))
        assert not result.success
        assert result.message == SPECIFIC_AUTH_MESSAGES[USER_NOT_FOUND]

    def test_forgot_password(self):
        asyncio.run(self.provider.sign_up("Asha", "asha@example.com", "secret1"))
        result = asyncio.run(self.flow.submit(AuthMode.FORGOT, AuthForm(email="asha@example.com")))
        assert result.success
        assert result.message == RESET_LINK_SENT

    def test_phone_flow(self):
        requested = asyncio.run(self.flow.request_otp("9876543210"))
        assert requested.success

        result = asyncio.run(self.flow.submit(AuthMode.OTP, AuthForm(phone="9876543210", otp="123456")))
        assert result.success
        assert result.user.phone == "9876543210"

    def test_short_phone_rejected(self):
        result = asyncio.run(self.flow.request_otp("123"))
        assert result.field_errors == {"phone": "Enter valid phone number"}

    def test_long_signup_name_is_a_field_error(self, tmp_path):
        """Test an oversized name is rejected before any account is written."""
        result = asyncio.run(self.flow.submit(
            AuthMode.SIGNUP, AuthForm(name="N" * 201, email="asha@example.com", password="secret1")
        ))
        assert result.field_errors == {"name": messages.NAME_TOO_LONG}
        assert not (tmp_path / "users.json").exists()

    def test_long_phone_is_a_field_error(self):
        requested = asyncio.run(self.flow.request_otp("1" * 25))
        assert requested.field_errors == {"phone": messages.INVALID_PHONE}

        result = asyncio.run(self.flow.submit(AuthMode.OTP, AuthForm(phone="1" * 25, otp="123456")))
        assert not result.success
        assert result.field_errors == {"phone": messages.INVALID_PHONE}

    def test_social_sign_in(self):
        result = asyncio.run(self.flow.sign_in_with_provider("LinkedIn"))
        assert result.success
        assert result.user.name == "LinkedIn User"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
