"""
Activity Logger

Structured local logging for everything the tracker and auth flow do.

The activity logger:
- Only writes to the local structured log (nothing is persisted)
- Binds the session's user key so related events can be grepped together
"""

import logging
import sys
from typing import Optional

import structlog


def configure_logging(level: str = "INFO") -> None:
    """Configure stdlib logging and structlog for JSON output."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None):
    """Get a structlog logger, optionally named."""
    return structlog.get_logger(name)


class ActivityLogger:
    """Emits one structured event per user-visible action."""

    def __init__(self, user_key: Optional[str] = None, logger=None):
        self._base = logger or get_logger("expensify.activity")
        self._logger = self._base.bind(user_key=user_key)

    def bind(self, user_key: str) -> "ActivityLogger":
        """Get a logger scoped to another user."""
        return ActivityLogger(user_key=user_key, logger=self._base)

    def _emit(self, level: str, event: str, **fields) -> None:
        getattr(self._logger, level)(event, **fields)

    def log_collection_loaded(self, count: int) -> None:
        self._emit("info", "collection_loaded", count=count)

    def log_expense_added(self, expense_id: int, category: str, amount: str) -> None:
        self._emit(
            "info",
            "expense_added",
            expense_id=expense_id,
            category=category,
            amount=amount,
        )

    def log_deletion_requested(self, expense_id: int) -> None:
        self._emit("info", "deletion_requested", expense_id=expense_id)

    def log_expense_deleted(self, expense_id: int) -> None:
        self._emit("info", "expense_deleted", expense_id=expense_id)

    def log_validation_failed(self, form: str, fields: list[str]) -> None:
        self._emit("warning", "validation_failed", form=form, fields=fields)

    def log_storage_failed(self, operation: str, error_message: str) -> None:
        self._emit(
            "error",
            "storage_failed",
            operation=operation,
            error=error_message,
        )

    def log_auth_succeeded(self, method: str, uid: str) -> None:
        self._emit("info", "auth_succeeded", method=method, uid=uid)

    def log_auth_failed(self, method: str, code: str) -> None:
        self._emit("warning", "auth_failed", method=method, code=code)

    def log_otp_issued(self, phone: str, code: Optional[str] = None) -> None:
        """Log an OTP request. The code itself is only included by dev backends."""
        if code is None:
            self._emit("info", "otp_issued", phone=phone)
        else:
            self._emit("info", "otp_issued", phone=phone, code=code)

    def log_password_reset_requested(self, email: str) -> None:
        self._emit("info", "password_reset_requested", email=email)
