"""Tests for configuration and component wiring."""

import pytest

from expensify.config import AppSettings, AuthSettings, Settings, validate_all_settings, get_settings
from expensify.models import User
from expensify.orchestrator import AuthFlow, create_app_components, create_tracker
from expensify.services.storage import LocalJsonExpenseStorage


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("STORAGE_BACKEND", "DATA_DIR", "GOOGLE_SHEETS_CREDENTIALS_PATH",
                 "GOOGLE_SHEETS_SPREADSHEET_ID", "AUTH_OTP_LENGTH", "NEW_HIGHLIGHT_MS", "DEBUG_MODE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for the settings classes."""

    def test_app_defaults(self):
        settings = AppSettings()
        assert settings.storage_backend == "local"
        assert settings.currency_symbol == "₹"
        assert settings.new_highlight_seconds == 1.6
        assert settings.deletion_transition_seconds == 0.38

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("AUTH_OTP_LENGTH", "4")
        monkeypatch.setenv("NEW_HIGHLIGHT_MS", "500")
        assert AuthSettings().otp_length == 4
        assert AppSettings().new_highlight_seconds == 0.5

    def test_debug_mode_forces_debug_logging(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        assert AppSettings().effective_log_level == "WARNING"
        monkeypatch.setenv("DEBUG_MODE", "true")
        assert AppSettings().effective_log_level == "DEBUG"

    def test_error_style_per_backend(self):
        settings = AuthSettings()
        assert settings.error_style_for("local") == "specific"
        assert settings.error_style_for("sheets") == "generic"
        assert settings.error_style_for("unknown") == "generic"

    def test_local_backend_needs_no_sheets(self):
        results = validate_all_settings()
        assert results["app"] and results["auth"] and results["google_sheets"]

    def test_sheets_backend_needs_credentials(self, monkeypatch):
        monkeypatch.setenv("STORAGE_BACKEND", "sheets")
        results = validate_all_settings()
        assert results["google_sheets"] is False
        assert "google_sheets_error" in results


class TestWiring:
    """Tests for the component factories."""

    def test_local_components(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        auth_flow, storage = create_app_components(Settings())
        assert isinstance(auth_flow, AuthFlow)
        assert isinstance(storage, LocalJsonExpenseStorage)
        assert storage.path_for("u1").parent == tmp_path / "expenses"

    def test_debug_mode_configures_debug_logging(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATA_DIR", str(tmp_path))
        monkeypatch.setenv("DEBUG_MODE", "true")
        levels = []
        monkeypatch.setattr("expensify.orchestrator.configure_logging", levels.append)
        create_app_components(Settings())
        assert levels == ["DEBUG"]

    def test_tracker_scoped_to_user(self, tmp_path):
        storage = LocalJsonExpenseStorage(tmp_path)
        tracker = create_tracker(User(uid="u1", name="Asha"), storage, Settings())
        assert tracker.user_key == "u1"
        assert len(tracker) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
