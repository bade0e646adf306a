# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/facades/webhooks/conftest.py

Constructores de callbacks firmados Alipay / WeChat.
"""
import pytest

from app.modules.payments.services.signing import sign_params


@pytest.fixture
def alipay_callback(payments_settings):
    """Factory de callbacks Alipay firmados con la llave de prueba."""

    def _make(sign=True, **overrides):
        params = {
            "app_id": payments_settings.alipay_app_id,
            "charset": "utf-8",
            "gmt_payment": "2026-10-19 08:30:05",
            "notify_id": "2026101900222083005012345678",
            "out_trade_no": "ORDER-1001",
            "sign_type": "RSA2",
            "subject": "Curso de vuelo",
            "total_amount": "100.00",
            "trade_no": "2026101922001400001234567890",
            "trade_status": "TRADE_SUCCESS",
            "buyer_id": "2088102177846880",
        }
        params.update({k: v for k, v in overrides.items()})
        if sign:
            params["sign"] = sign_params(params, payments_settings.alipay_private_key, "RSA2")
        return params

    return _make


@pytest.fixture
def wechat_callback(payments_settings):
    """Factory de callbacks WeChat Pay v2 firmados con el API key de prueba."""

    def _make(sign=True, algorithm="MD5", **overrides):
        params = {
            "appid": payments_settings.wechat_app_id,
            "mch_id": payments_settings.wechat_mch_id,
            "nonce_str": "5d2b6c2a8db53831f7eda20af46e531c",
            "openid": "oUpF8uMEb4qRXf22hE3X68TekukE",
            "out_trade_no": "ORDER-1001",
            "result_code": "SUCCESS",
            "return_code": "SUCCESS",
            "total_fee": "10000",
            "transaction_id": "4200000000202610190000000001",
        }
        if algorithm != "MD5":
            params["sign_type"] = algorithm
        params.update(overrides)
        if sign:
            params["sign"] = sign_params(params, payments_settings.wechat_api_key, algorithm)
        return params

    return _make

# Fin del archivo backend/tests/modules/payments/facades/webhooks/conftest.py
