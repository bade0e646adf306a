# -*- coding: utf-8 -*-
"""
backend/tests/modules/payments/conftest.py

Respuestas firmadas de consulta de estado (alipay.trade.query / orderquery)
y cliente httpx con MockTransport.
"""
import json

import httpx
import pytest

from app.modules.payments.services.signing import sign_params, sign_rsa
from app.modules.payments.services.webhooks import render_wechat_xml

ALIPAY_QUERY_KEY = "alipay_trade_query_response"


@pytest.fixture
def alipay_query_body(payments_settings):
    """Factory del body JSON de alipay.trade.query firmado con la llave de prueba."""

    def _make(sign=True, signed_content=None, **overrides):
        trade = {
            "code": "10000",
            "msg": "Success",
            "buyer_logon_id": "159****5620",
            "out_trade_no": "ORDER-1001",
            "total_amount": "100.00",
            "trade_no": "2026101922001400001234567890",
            "trade_status": "TRADE_SUCCESS",
        }
        trade.update(overrides)
        trade = {k: v for k, v in trade.items() if v is not None}
        content = json.dumps(trade, ensure_ascii=False, separators=(",", ":"))
        body = '{"' + ALIPAY_QUERY_KEY + '":' + content
        if sign:
            signature = sign_rsa(signed_content or content, payments_settings.alipay_private_key)
            body += ',"sign":"' + signature + '"'
        return body + "}"

    return _make


@pytest.fixture
def wechat_query_body(payments_settings):
    """Factory del XML de orderquery firmado con el API key de prueba."""

    def _make(api_key=None, **overrides):
        fields = {
            "return_code": "SUCCESS",
            "return_msg": "OK",
            "appid": payments_settings.wechat_app_id,
            "mch_id": payments_settings.wechat_mch_id,
            "nonce_str": "Qd9bRk2pZ7xY1mN4",
            "result_code": "SUCCESS",
            "out_trade_no": "ORDER-1001",
            "trade_state": "SUCCESS",
            "transaction_id": "4200000000202610190000000001",
            "total_fee": "10000",
        }
        fields.update(overrides)
        fields = {k: v for k, v in fields.items() if v is not None}
        fields["sign"] = sign_params(fields, api_key or payments_settings.wechat_api_key, "MD5")
        return render_wechat_xml(fields)

    return _make


@pytest.fixture
def gateway_requests():
    """Requests recibidos por el MockTransport."""
    return []


@pytest.fixture
async def mock_gateway_client(gateway_requests):
    """
    Factory de httpx.AsyncClient con MockTransport.

    El handler recibe el httpx.Request y devuelve un httpx.Response.
    """
    clients = []

    def _make(handler):
        def _record(request):
            gateway_requests.append(request)
            return handler(request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(_record))
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()

# Fin del archivo backend/tests/modules/payments/conftest.py
