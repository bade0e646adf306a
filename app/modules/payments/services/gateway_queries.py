# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/gateway_queries.py

Consulta de estado de transacciones contra los gateways.

- Alipay: alipay.trade.query (GET al gateway, respuesta JSON firmada RSA2)
- WeChat Pay v2: orderquery (POST XML, respuesta XML firmada con el API key)

Toda respuesta se verifica antes de usarse; cualquier fallo de red,
formato, código de negocio o firma devuelve None y se loguea.

El cliente HTTP es un singleton con keep-alive; registrar
close_gateway_http_client en el lifespan de FastAPI.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from app.modules.payments.enums import AmountUnit, PaymentProvider
from app.modules.payments.services.gateway_requests import (
    build_alipay_query_params,
    build_wechat_order_query,
)
from app.modules.payments.services.signing import (
    SigningKeyError,
    UnsupportedAlgorithmError,
    check_rsa_signature,
    check_shared_secret_signature,
    resolve_signature_algorithm,
)
from app.modules.payments.services.webhooks.verification_policy import resolve_verification_environment
from app.modules.payments.services.webhooks.wechat_xml import WechatXmlError, parse_wechat_xml
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

logger = logging.getLogger(__name__)

ALIPAY_QUERY_RESPONSE_KEY = "alipay_trade_query_response"
ALIPAY_CODE_SUCCESS = "10000"
WECHAT_CODE_SUCCESS = "SUCCESS"
WECHAT_UNKNOWN_TRADE_STATE = "UNKNOWN"

# Estados de cierre reportados por los gateways
CLOSED_TRADE_STATUSES = frozenset({"TRADE_CLOSED", "CLOSED"})
CLOSED_TRADE_REASON = "payment closed"

GATEWAY_HTTP_LIMITS = httpx.Limits(
    max_keepalive_connections=10,
    max_connections=20,
    keepalive_expiry=30.0,
)


@dataclass(frozen=True)
class GatewayTradeStatus:
    """Estado de una transacción según el gateway."""

    provider: PaymentProvider
    out_trade_no: str
    status: str
    transaction_id: Optional[str] = None
    amount: Optional[str] = None
    failure_reason: Optional[str] = None

    @property
    def amount_unit(self) -> AmountUnit:
        if self.provider is PaymentProvider.WECHAT:
            return AmountUnit.MINOR
        return AmountUnit.MAJOR


# =============================================================================
# CLIENTE HTTP SINGLETON
# =============================================================================

_gateway_client: Optional[httpx.AsyncClient] = None


def _gateway_timeout(settings: PaymentsSettings) -> httpx.Timeout:
    return httpx.Timeout(
        connect=5.0,
        read=settings.payments_gateway_timeout_seconds,
        write=settings.payments_gateway_timeout_seconds,
        pool=5.0,
    )


def get_gateway_http_client(settings: Optional[PaymentsSettings] = None) -> httpx.AsyncClient:
    """Cliente HTTP reutilizable para consultas a los gateways."""
    global _gateway_client
    if _gateway_client is None:
        if settings is None:
            settings = get_payments_settings()
        _gateway_client = httpx.AsyncClient(
            timeout=_gateway_timeout(settings),
            limits=GATEWAY_HTTP_LIMITS,
        )
        logger.debug("Creado cliente HTTP de gateways")
    return _gateway_client


async def close_gateway_http_client() -> None:
    """Cierra el cliente HTTP de gateways (shutdown)."""
    global _gateway_client
    client, _gateway_client = _gateway_client, None
    if client is None:
        return
    try:
        await client.aclose()
        logger.debug("Cliente HTTP de gateways cerrado")
    except Exception as e:
        logger.warning(f"Error cerrando cliente HTTP de gateways: {e}")


# =============================================================================
# ALIPAY
# =============================================================================

def extract_alipay_signed_content(body: str, response_key: str) -> Optional[str]:
    """
    Texto JSON crudo del objeto de respuesta, tal como lo firmó Alipay.

    Returns:
        Substring exacto del valor de response_key, o None si no existe
    """
    marker = f'"{response_key}"'
    start = body.find(marker)
    if start < 0:
        return None
    colon = body.find(":", start + len(marker))
    if colon < 0:
        return None

    value_start = colon + 1
    while value_start < len(body) and body[value_start].isspace():
        value_start += 1

    try:
        _, value_end = json.JSONDecoder().raw_decode(body, value_start)
    except ValueError:
        return None
    return body[value_start:value_end]


async def query_alipay_status(
    out_trade_no: str,
    settings: Optional[PaymentsSettings] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[GatewayTradeStatus]:
    """
    Consulta alipay.trade.query para la orden.

    Returns:
        GatewayTradeStatus o None si la consulta no es utilizable
    """
    if settings is None:
        settings = get_payments_settings()

    try:
        params = build_alipay_query_params(out_trade_no, settings)
    except SigningKeyError as e:
        logger.warning(f"Consulta Alipay omitida para {out_trade_no}: {e}")
        return None

    client = client or get_gateway_http_client(settings)
    try:
        response = await client.get(settings.alipay_gateway_url, params=params)
    except httpx.HTTPError as e:
        logger.error(f"Consulta Alipay falló para {out_trade_no}: {type(e).__name__} - {e}")
        return None

    if response.status_code != 200:
        logger.error(f"Consulta Alipay para {out_trade_no}: HTTP {response.status_code}")
        return None

    body = response.text
    try:
        payload: Dict[str, Any] = json.loads(body)
    except ValueError:
        logger.error(f"Consulta Alipay para {out_trade_no}: respuesta no es JSON")
        return None

    trade = payload.get(ALIPAY_QUERY_RESPONSE_KEY) if isinstance(payload, dict) else None
    if not isinstance(trade, dict):
        logger.error(f"Consulta Alipay para {out_trade_no}: falta {ALIPAY_QUERY_RESPONSE_KEY}")
        return None

    if trade.get("code") != ALIPAY_CODE_SUCCESS:
        logger.error(
            f"Consulta Alipay para {out_trade_no} con error: "
            f"code={trade.get('code')} msg={trade.get('msg')} sub_code={trade.get('sub_code')}"
        )
        return None

    signed_content = extract_alipay_signed_content(body, ALIPAY_QUERY_RESPONSE_KEY)
    signature = payload.get("sign")
    verification = check_rsa_signature(
        signed_content or "",
        signature if isinstance(signature, str) else None,
        settings.alipay_public_key,
        resolve_verification_environment(settings),
    )
    if not signed_content or not verification.valid:
        logger.error(
            f"Consulta Alipay para {out_trade_no}: firma de respuesta inválida "
            f"(reason={verification.reason})"
        )
        return None

    reported_ref = trade.get("out_trade_no")
    if reported_ref and reported_ref != out_trade_no:
        logger.error(f"Consulta Alipay para {out_trade_no}: respuesta de otra orden ({reported_ref})")
        return None

    status = trade.get("trade_status") or ""
    return GatewayTradeStatus(
        provider=PaymentProvider.ALIPAY,
        out_trade_no=out_trade_no,
        status=status,
        transaction_id=trade.get("trade_no") or None,
        amount=trade.get("total_amount"),
        failure_reason=CLOSED_TRADE_REASON if status in CLOSED_TRADE_STATUSES else None,
    )


# =============================================================================
# WECHAT PAY
# =============================================================================

async def query_wechat_status(
    out_trade_no: str,
    settings: Optional[PaymentsSettings] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[GatewayTradeStatus]:
    """
    Consulta orderquery de WeChat Pay v2 para la orden.

    Returns:
        GatewayTradeStatus o None si la consulta no es utilizable
    """
    if settings is None:
        settings = get_payments_settings()

    try:
        body = build_wechat_order_query(out_trade_no, settings)
    except SigningKeyError as e:
        logger.warning(f"Consulta WeChat omitida para {out_trade_no}: {e}")
        return None

    client = client or get_gateway_http_client(settings)
    try:
        response = await client.post(
            settings.wechat_order_query_url,
            content=body.encode("utf-8"),
            headers={"Content-Type": "application/xml"},
        )
    except httpx.HTTPError as e:
        logger.error(f"Consulta WeChat falló para {out_trade_no}: {type(e).__name__} - {e}")
        return None

    if response.status_code != 200:
        logger.error(f"Consulta WeChat para {out_trade_no}: HTTP {response.status_code}")
        return None

    try:
        fields = parse_wechat_xml(response.content)
    except WechatXmlError as e:
        logger.error(f"Consulta WeChat para {out_trade_no}: XML inválido - {e}")
        return None

    if fields.get("return_code") != WECHAT_CODE_SUCCESS:
        logger.error(
            f"Consulta WeChat para {out_trade_no} con error de comunicación: "
            f"{fields.get('return_msg')}"
        )
        return None

    try:
        algorithm = resolve_signature_algorithm(fields.get("sign_type") or settings.wechat_sign_type)
    except UnsupportedAlgorithmError as e:
        logger.error(f"Consulta WeChat para {out_trade_no}: {e}")
        return None

    verification = check_shared_secret_signature(
        fields,
        fields.get("sign"),
        settings.wechat_api_key,
        resolve_verification_environment(settings),
        algorithm=algorithm,
    )
    if not verification.valid:
        logger.error(
            f"Consulta WeChat para {out_trade_no}: firma de respuesta inválida "
            f"(reason={verification.reason})"
        )
        return None

    if fields.get("result_code") != WECHAT_CODE_SUCCESS:
        logger.error(
            f"Consulta WeChat para {out_trade_no} con error: "
            f"err_code={fields.get('err_code')} err_code_des={fields.get('err_code_des')}"
        )
        return None

    reported_ref = fields.get("out_trade_no")
    if reported_ref and reported_ref != out_trade_no:
        logger.error(f"Consulta WeChat para {out_trade_no}: respuesta de otra orden ({reported_ref})")
        return None

    status = fields.get("trade_state") or WECHAT_UNKNOWN_TRADE_STATE
    return GatewayTradeStatus(
        provider=PaymentProvider.WECHAT,
        out_trade_no=out_trade_no,
        status=status,
        transaction_id=fields.get("transaction_id") or None,
        amount=fields.get("total_fee"),
        failure_reason=(
            CLOSED_TRADE_REASON if status in CLOSED_TRADE_STATUSES
            else fields.get("trade_state_desc") or None
        ),
    )


async def query_gateway_status(
    provider: PaymentProvider | str,
    out_trade_no: str,
    settings: Optional[PaymentsSettings] = None,
    *,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[GatewayTradeStatus]:
    """
    Despacha la consulta según el proveedor.

    Raises:
        ValueError: proveedor desconocido
    """
    provider = PaymentProvider(provider)
    if provider is PaymentProvider.ALIPAY:
        return await query_alipay_status(out_trade_no, settings, client=client)
    return await query_wechat_status(out_trade_no, settings, client=client)


__all__ = [
    "GatewayTradeStatus",
    "query_alipay_status",
    "query_wechat_status",
    "query_gateway_status",
    "extract_alipay_signed_content",
    "get_gateway_http_client",
    "close_gateway_http_client",
]

# Fin del archivo backend/app/modules/payments/services/gateway_queries.py
