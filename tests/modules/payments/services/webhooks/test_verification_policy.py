# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/services/webhooks/test_verification_policy.py

Tests de la política de bypass inseguro de verificación.

Matriz:
- flag + entorno dev + PYTHON_ENV != test → development (WARNING)
- flag fuera de desarrollo → production (ERROR "SECURITY VIOLATION")
- PYTHON_ENV=test → production siempre

Autor: OpenAero
Fecha: 2026-10-19
"""
import logging

import pytest

from app.modules.payments.enums import RuntimeEnvironment
from app.modules.payments.services.webhooks import (
    allow_insecure_callbacks,
    is_development_environment,
    resolve_verification_environment,
)
from app.shared.config.settings_payments import PaymentsSettings


def _settings(environment="development", python_env="development", allow=True):
    return PaymentsSettings(
        _env_file=None,
        environment=environment,
        python_env=python_env,
        payments_allow_insecure_webhooks=allow,
    )


class TestResolveVerificationEnvironment:

    @pytest.mark.parametrize("environment", ["development", "dev", "local", "DEV", " Local "])
    def test_bypass_active_in_development(self, environment, caplog):
        with caplog.at_level(logging.WARNING):
            env = resolve_verification_environment(_settings(environment=environment))
        assert env is RuntimeEnvironment.DEVELOPMENT
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_flag_off_in_development(self):
        env = resolve_verification_environment(_settings(allow=False))
        assert env is RuntimeEnvironment.PRODUCTION

    @pytest.mark.parametrize("environment", ["production", "staging", "test", ""])
    def test_flag_outside_development_is_security_violation(self, environment, caplog):
        with caplog.at_level(logging.ERROR):
            env = resolve_verification_environment(_settings(environment=environment))
        assert env is RuntimeEnvironment.PRODUCTION
        assert any("SECURITY VIOLATION" in r.getMessage() for r in caplog.records)

    def test_python_env_test_never_bypasses(self):
        settings = _settings(environment="development", python_env="test", allow=True)
        assert allow_insecure_callbacks(settings) is False
        assert resolve_verification_environment(settings) is RuntimeEnvironment.PRODUCTION

    def test_defaults_fail_closed(self):
        settings = PaymentsSettings(_env_file=None)
        assert settings.environment == "production"
        assert settings.payments_allow_insecure_webhooks is False
        assert resolve_verification_environment(settings) is RuntimeEnvironment.PRODUCTION

    def test_reads_global_settings_when_not_given(self, monkeypatch):
        from app.shared.config.settings_payments import reset_payments_settings

        monkeypatch.setenv("ENVIRONMENT", "local")
        monkeypatch.setenv("PYTHON_ENV", "development")
        monkeypatch.setenv("PAYMENTS_ALLOW_INSECURE_WEBHOOKS", "true")
        reset_payments_settings()
        try:
            assert resolve_verification_environment() is RuntimeEnvironment.DEVELOPMENT
        finally:
            reset_payments_settings()


class TestIsDevelopmentEnvironment:

    def test_test_is_not_development(self):
        assert is_development_environment(_settings(environment="test")) is False

    def test_dev_aliases(self):
        assert is_development_environment(_settings(environment="dev")) is True

# Fin del archivo backend/tests/modules/payments/services/webhooks/test_verification_policy.py
