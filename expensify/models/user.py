"""User and authentication-form models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """
    An authenticated user.

    `uid` is opaque to the rest of the system: it only scopes the
    expense collection.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    uid: str = Field(..., min_length=1, description="Opaque identity key")
    name: str = Field(..., min_length=1, max_length=200)
    email: Optional[str] = Field(default=None, max_length=320)
    phone: Optional[str] = Field(default=None, max_length=20)


class AuthMode(str, Enum):
    """Which auth form is being submitted."""
    LOGIN = "login"
    SIGNUP = "signup"
    FORGOT = "forgot"
    OTP = "otp"


class AuthForm(BaseModel):
    """
    Raw auth form input. Validated by AuthFormValidator.

    Not whitespace-stripped: a password may legitimately contain spaces.
    """

    name: str = ""
    email: str = ""
    phone: str = ""
    password: str = ""
    otp: str = ""


class AuthResult(BaseModel):
    """Outcome of an auth flow step, ready for the UI."""

    success: bool
    user: Optional[User] = None
    field_errors: dict[str, str] = Field(default_factory=dict)
    message: Optional[str] = Field(
        default=None,
        description="Form-level message (provider error or confirmation)"
    )
