"""
Abstract Authentication Interface

DESIGN DECISION: The core never handles credentials itself. An auth
provider turns form input into a User (whose uid scopes the expense
collection) or raises AuthError with a stable code. Turning that code into
words is the orchestrator's job, driven by configuration.
"""

from abc import ABC, abstractmethod

from expensify.models.user import User


# Stable error codes shared by every provider
EMAIL_ALREADY_IN_USE = "email-already-in-use"
USER_NOT_FOUND = "user-not-found"
WRONG_PASSWORD = "wrong-password"
INVALID_OTP = "invalid-otp"
OPERATION_NOT_ALLOWED = "operation-not-allowed"
UNAVAILABLE = "unavailable"


class AuthError(Exception):
    """An auth provider refused the request."""

    def __init__(self, code: str, detail: str = ""):
        self.code = code
        self.detail = detail
        super().__init__(f"{code}: {detail}" if detail else code)


class AuthProviderInterface(ABC):
    """
    Abstract interface for authentication backends.

    Every method either returns normally or raises AuthError.
    """

    @abstractmethod
    async def sign_up(self, name: str, email: str, password: str) -> User:
        """Create an account and return the signed-in user."""
        pass

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> User:
        """Check credentials and return the user."""
        pass

    @abstractmethod
    async def sign_in_with_provider(self, provider: str) -> User:
        """Sign in through a social provider (e.g. "Google", "LinkedIn")."""
        pass

    @abstractmethod
    async def send_password_reset(self, email: str) -> bool:
        """Start a password reset for an existing account."""
        pass

    @abstractmethod
    async def send_otp(self, phone: str) -> bool:
        """Send a one-time passcode to a phone number."""
        pass

    @abstractmethod
    async def verify_otp(self, phone: str, code: str) -> User:
        """Check a one-time passcode and return the user."""
        pass
