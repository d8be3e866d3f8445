"""Tests for configuration and service factories"""
import pytest
from pydantic import ValidationError

from dashboard.core.config import EnvironmentMode, Settings, get_settings


class TestSettings:
    def test_development_defaults(self, monkeypatch):
        monkeypatch.setenv("ENV_MODE", "development")

        settings = Settings()

        assert settings.is_development is True
        assert settings.use_real_services is False
        assert settings.estimated_ready_minutes == 25
        assert settings.validate_production_config() == []

    def test_env_mode_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("ENV_MODE", "PRODUCTION")
        assert Settings().env_mode == EnvironmentMode.PRODUCTION

    def test_invalid_env_mode(self, monkeypatch):
        monkeypatch.setenv("ENV_MODE", "qa")
        with pytest.raises(ValidationError):
            Settings()

    def test_production_reports_missing_keys(self, monkeypatch):
        monkeypatch.setenv("ENV_MODE", "staging")
        for key in ("SENDGRID_API_KEY", "SUPABASE_URL", "SUPABASE_ANON_KEY", "SUPABASE_SERVICE_ROLE_KEY"):
            monkeypatch.delenv(key, raising=False)

        missing = Settings().validate_production_config()

        assert missing == [
            "SENDGRID_API_KEY",
            "SUPABASE_URL",
            "SUPABASE_ANON_KEY",
            "SUPABASE_SERVICE_ROLE_KEY",
        ]

    def test_failure_rate_bounds(self, monkeypatch):
        monkeypatch.setenv("MOCK_FAILURE_RATE", "1.5")
        with pytest.raises(ValidationError):
            Settings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestServiceFactories:
    def test_development_uses_mocks(self, monkeypatch):
        from dashboard.services.identity import MockIdentityProvider, get_identity_provider, reset_identity_provider
        from dashboard.services.notifications import (
            MockNotificationService,
            get_notification_service,
            reset_notification_service,
        )

        monkeypatch.setenv("ENV_MODE", "development")
        reset_identity_provider()
        reset_notification_service()
        try:
            assert isinstance(get_notification_service(), MockNotificationService)
            assert isinstance(get_identity_provider(), MockIdentityProvider)
        finally:
            reset_identity_provider()
            reset_notification_service()

    def test_production_uses_sendgrid(self, monkeypatch):
        from dashboard.services.notifications import (
            RealNotificationService,
            get_notification_service,
            reset_notification_service,
        )

        monkeypatch.setenv("ENV_MODE", "production")
        reset_notification_service()
        try:
            service = get_notification_service()
            assert isinstance(service, RealNotificationService)
            assert service.provider_name == "sendgrid"
        finally:
            reset_notification_service()
