# -*- coding: utf-8 -*-
"""
backend/tests/shared/config/test_settings_payments.py

Tests de configuración de pagos.

Autor: OpenAero
Fecha: 2026-10-19
"""

from decimal import Decimal

from app.shared.config.settings_payments import (
    PaymentsSettings,
    get_payments_settings,
    reset_payments_settings,
)


def test_payments_settings_defaults():
    """Verifica que PaymentsSettings tiene defaults seguros."""
    settings = PaymentsSettings(_env_file=None, environment=None, python_env=None)

    assert settings.environment == "production"
    assert settings.payments_allow_insecure_webhooks is False
    assert settings.alipay_public_key is None
    assert settings.alipay_gateway_url == "https://openapi.alipay.com/gateway.do"
    assert settings.wechat_api_key is None
    assert settings.wechat_sign_type == "MD5"
    assert settings.payments_amount_tolerance == Decimal("0.01")
    assert settings.trust_proxy_headers is False
    assert settings.wechat_order_query_url == "https://api.mch.weixin.qq.com/pay/orderquery"
    assert settings.payments_sync_batch_limit == 50
    assert settings.payments_sync_max_age_hours == 24


def test_env_names_are_normalized():
    settings = PaymentsSettings(_env_file=None, environment=' "Development" ', python_env="TEST")
    assert settings.environment == "development"
    assert settings.python_env == "test"


def test_sign_type_is_uppercased():
    settings = PaymentsSettings(_env_file=None, wechat_sign_type="hmac-sha256")
    assert settings.wechat_sign_type == "HMAC-SHA256"


def test_reads_environment_variables(monkeypatch):
    monkeypatch.setenv("ALIPAY_PUBLIC_KEY", "MIIBIjAN")
    monkeypatch.setenv("PAYMENTS_AMOUNT_TOLERANCE", "0.5")
    monkeypatch.setenv("PAYMENTS_ALLOW_INSECURE_WEBHOOKS", "true")

    settings = PaymentsSettings(_env_file=None)
    assert settings.alipay_public_key == "MIIBIjAN"
    assert settings.payments_amount_tolerance == Decimal("0.5")
    assert settings.payments_allow_insecure_webhooks is True


def test_get_payments_settings_singleton():
    """Verifica que get_payments_settings devuelve un singleton."""
    reset_payments_settings()
    settings1 = get_payments_settings()
    settings2 = get_payments_settings()
    assert settings1 is settings2
    reset_payments_settings()
    assert get_payments_settings() is not settings1
    reset_payments_settings()

# Fin del archivo backend/tests/shared/config/test_settings_payments.py
