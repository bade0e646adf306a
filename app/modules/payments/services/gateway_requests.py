# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/gateway_requests.py

Construcción de solicitudes firmadas de consulta de estado hacia los gateways.

- Alipay: alipay.trade.query (parámetros de formulario firmados con RSA2)
- WeChat Pay v2: orderquery (XML firmado con el API key)

El envío HTTP queda fuera de este módulo; aquí solo se arma y firma
el payload.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import json
import secrets
from datetime import datetime
from typing import Dict, Optional

from app.modules.payments.enums import SignatureAlgorithm
from app.modules.payments.services.signing import SigningKeyError, sign_params
from app.modules.payments.services.webhooks.wechat_xml import render_wechat_xml
from app.shared.config.settings_payments import PaymentsSettings

ALIPAY_TRADE_QUERY_METHOD = "alipay.trade.query"
ALIPAY_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_alipay_query_params(
    out_trade_no: str,
    settings: PaymentsSettings,
    *,
    timestamp: Optional[datetime] = None,
) -> Dict[str, str]:
    """
    Arma los parámetros firmados para alipay.trade.query.

    Raises:
        SigningKeyError: falta alipay_app_id o alipay_private_key
    """
    if not settings.alipay_app_id:
        raise SigningKeyError("ALIPAY_APP_ID no configurado")
    if not settings.alipay_private_key:
        raise SigningKeyError("ALIPAY_PRIVATE_KEY no configurada")

    ts = timestamp or datetime.now()
    params: Dict[str, str] = {
        "app_id": settings.alipay_app_id,
        "method": ALIPAY_TRADE_QUERY_METHOD,
        "format": "JSON",
        "charset": "utf-8",
        "sign_type": "RSA2",
        "timestamp": ts.strftime(ALIPAY_TIMESTAMP_FORMAT),
        "version": "1.0",
        "biz_content": json.dumps(
            {"out_trade_no": out_trade_no},
            separators=(",", ":"),
            ensure_ascii=False,
        ),
    }
    params["sign"] = sign_params(params, settings.alipay_private_key, SignatureAlgorithm.RSA_SHA256)
    return params


def build_wechat_order_query(
    out_trade_no: str,
    settings: PaymentsSettings,
    *,
    nonce_str: Optional[str] = None,
) -> str:
    """Arma el XML firmado para la consulta de orden de WeChat Pay v2."""
    if not settings.wechat_app_id or not settings.wechat_mch_id:
        raise SigningKeyError("WECHAT_APP_ID / WECHAT_MCH_ID no configurados")
    if not settings.wechat_api_key:
        raise SigningKeyError("WECHAT_API_KEY no configurada")

    params: Dict[str, str] = {
        "appid": settings.wechat_app_id,
        "mch_id": settings.wechat_mch_id,
        "out_trade_no": out_trade_no,
        "nonce_str": nonce_str or secrets.token_hex(16),
        "sign_type": settings.wechat_sign_type,
    }
    params["sign"] = sign_params(params, settings.wechat_api_key, settings.wechat_sign_type)
    return render_wechat_xml(params)


__all__ = [
    "build_alipay_query_params",
    "build_wechat_order_query",
    "ALIPAY_TRADE_QUERY_METHOD",
]

# Fin del archivo backend/app/modules/payments/services/gateway_requests.py
