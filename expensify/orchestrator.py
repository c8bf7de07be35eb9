"""
Main Orchestrator for Expensify

This module ties together all the components and defines the
end-to-end flows for:
1. Authentication (form -> validate -> provider -> user or message)
2. A user's tracking session (user -> tracker over the configured storage)

DESIGN DECISION: The orchestrator enforces the boundaries:
- Providers only ever see validated form input
- Provider error codes become user-facing text through the configured
  message catalog, never through branching on the backend type
- The tracker only sees an opaque user key, never credentials
"""

from typing import Optional

from expensify.activity import ActivityLogger, configure_logging
from expensify.config import AuthMessageCatalog, Settings, catalog_for_backend, get_settings
from expensify.lifecycle import DisplayLifecycle
from expensify.models.user import AuthForm, AuthMode, AuthResult, User
from expensify.services.auth import (
    AuthError,
    AuthProviderInterface,
    GoogleSheetsAuthProvider,
    LocalAuthProvider,
)
from expensify.services.storage import (
    ExpenseStorageInterface,
    GoogleSheetsClient,
    GoogleSheetsExpenseStorage,
    LocalJsonExpenseStorage,
)
from expensify.tracker import ExpenseTracker
from expensify.validation import AuthFormValidator, ExpenseValidator


RESET_LINK_SENT = "Reset link sent! Check your inbox."


class AuthFlow:
    """
    Orchestrates the auth forms.

    Modes:
    - login: email + password
    - signup: name + email + password
    - forgot: email (reset link)
    - otp: phone + code, after request_otp()

    Every step returns an AuthResult: field errors for the form, or a
    form-level message, or the signed-in user.
    """

    def __init__(
        self,
        provider: AuthProviderInterface,
        catalog: AuthMessageCatalog,
        validator: Optional[AuthFormValidator] = None,
        activity: Optional[ActivityLogger] = None,
    ):
        self._provider = provider
        self._catalog = catalog
        self._validator = validator or AuthFormValidator()
        self._activity = activity or ActivityLogger()

    def _failure(self, method: str, error: AuthError) -> AuthResult:
        self._activity.log_auth_failed(method, error.code)
        return AuthResult(success=False, message=self._catalog.describe(error.code))

    def _signed_in(self, method: str, user: User) -> AuthResult:
        self._activity.log_auth_succeeded(method, user.uid)
        return AuthResult(success=True, user=user)

    async def submit(self, mode: AuthMode, form: AuthForm) -> AuthResult:
        """Validate and submit one of the auth forms."""
        errors = self._validator.validate(mode, form)
        if errors:
            self._activity.log_validation_failed(f"auth_{mode.value}", sorted(errors))
            return AuthResult(success=False, field_errors=errors)

        try:
            if mode == AuthMode.LOGIN:
                user = await self._provider.sign_in(form.email, form.password)
            elif mode == AuthMode.SIGNUP:
                user = await self._provider.sign_up(form.name, form.email, form.password)
            elif mode == AuthMode.OTP:
                user = await self._provider.verify_otp(form.phone, form.otp)
            else:
                await self._provider.send_password_reset(form.email)
                return AuthResult(success=True, message=RESET_LINK_SENT)
        except AuthError as e:
            return self._failure(mode.value, e)

        return self._signed_in(mode.value, user)

    async def request_otp(self, phone: str) -> AuthResult:
        """Send a one-time passcode; the caller then switches to otp mode."""
        errors = self._validator.validate_phone(phone)
        if errors:
            self._activity.log_validation_failed("auth_phone", sorted(errors))
            return AuthResult(success=False, field_errors=errors)

        try:
            await self._provider.send_otp(phone)
        except AuthError as e:
            return self._failure("phone", e)
        return AuthResult(success=True, message=f"Enter the code sent to {phone}")

    async def sign_in_with_provider(self, provider_name: str) -> AuthResult:
        try:
            user = await self._provider.sign_in_with_provider(provider_name)
        except AuthError as e:
            return self._failure(provider_name.lower(), e)
        return self._signed_in(provider_name.lower(), user)


def create_app_components(
    settings: Optional[Settings] = None,
) -> tuple[AuthFlow, ExpenseStorageInterface]:
    """
    Factory function to create the application components for the
    configured backend.

    Returns:
        (auth_flow, expense_storage)
    """
    settings = settings or get_settings()
    app_settings = settings.app
    auth_settings = settings.auth

    configure_logging(app_settings.effective_log_level)
    activity = ActivityLogger()

    if app_settings.storage_backend == "sheets":
        sheets_client = GoogleSheetsClient(settings.google_sheets)
        storage = GoogleSheetsExpenseStorage(sheets_client)
        provider = GoogleSheetsAuthProvider(sheets_client, activity)
    else:
        storage = LocalJsonExpenseStorage(app_settings.data_path)
        provider = LocalAuthProvider(
            app_settings.data_path,
            activity,
            otp_length=auth_settings.otp_length,
        )

    auth_flow = AuthFlow(
        provider=provider,
        catalog=catalog_for_backend(app_settings.storage_backend, auth_settings),
        validator=AuthFormValidator(auth_settings),
        activity=activity,
    )
    return auth_flow, storage


def create_tracker(
    user: User,
    storage: ExpenseStorageInterface,
    settings: Optional[Settings] = None,
) -> ExpenseTracker:
    """Build the tracker for a signed-in user (call load() before use)."""
    app_settings = (settings or get_settings()).app
    return ExpenseTracker(
        user_key=user.uid,
        storage=storage,
        validator=ExpenseValidator(),
        lifecycle=DisplayLifecycle(
            highlight_seconds=app_settings.new_highlight_seconds,
            transition_seconds=app_settings.deletion_transition_seconds,
        ),
    )
