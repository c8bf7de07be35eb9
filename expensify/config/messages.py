"""
User-facing message catalogs.

Provider error codes are mapped to messages through a catalog picked by
configuration (see AuthSettings), so one core can serve any backend.
"""

from pydantic import BaseModel, ConfigDict, Field

from expensify.config.settings import AuthSettings, ErrorMessageStyle


# Expense form
TITLE_REQUIRED = "Title is required"
TITLE_TOO_LONG = "Title must be 200 characters or fewer"
NOTE_TOO_LONG = "Note must be 1000 characters or fewer"
INVALID_AMOUNT = "Enter a valid amount"
INVALID_DATE = "Enter a valid date"

# Auth form
NAME_REQUIRED = "Name is required"
NAME_TOO_LONG = "Name must be 200 characters or fewer"
EMAIL_REQUIRED = "Email is required"
INVALID_EMAIL = "Invalid email"
INVALID_PHONE = "Enter valid phone number"

# Collaborator failures
OPERATION_FAILED = "Something went wrong. Your changes are kept on this page."


def password_too_short(min_length: int) -> str:
    return f"Min {min_length} characters"


def otp_wrong_length(length: int) -> str:
    return f"Enter {length}-digit OTP"


SPECIFIC_AUTH_MESSAGES: dict[str, str] = {
    "email-already-in-use": "An account with this email already exists",
    "user-not-found": "No account found for this email",
    "wrong-password": "Incorrect password",
    "invalid-otp": "Invalid or expired code",
    "operation-not-allowed": "This sign-in method is not available",
    "unavailable": "Sign-in is unavailable right now. Please try again later",
}

GENERIC_AUTH_MESSAGE = "Authentication failed. Please check your details and try again."


class AuthMessageCatalog(BaseModel):
    """Maps provider error codes to what the user sees."""

    model_config = ConfigDict(frozen=True)

    style: ErrorMessageStyle = "generic"
    messages: dict[str, str] = Field(default_factory=dict)
    fallback: str = GENERIC_AUTH_MESSAGE

    def describe(self, code: str) -> str:
        """Get the message for an error code."""
        if self.style == "generic":
            return self.fallback
        return self.messages.get(code, self.fallback)


def catalog_for_backend(backend: str, auth_settings: AuthSettings) -> AuthMessageCatalog:
    """Build the message catalog configured for a backend."""
    return AuthMessageCatalog(
        style=auth_settings.error_style_for(backend),
        messages=dict(SPECIFIC_AUTH_MESSAGES),
    )
