# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/webhooks_wechat.py

Callback de WeChat Pay v2.

Endpoint:
- POST /payments/webhooks/wechat

Body XML. La respuesta siempre es un XML de acuse (return_code
SUCCESS/FAIL); WeChat reintenta mientras no reciba SUCCESS.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, Request, Response, status

from app.modules.payments.enums import PaymentProvider
from app.modules.payments.facades.webhooks import process_payment_callback
from app.modules.payments.metrics import (
    observe_callback_outcome,
    observe_callback_received,
    observe_callback_rejected,
)
from app.modules.payments.metrics.helpers import record_callback_metrics
from app.modules.payments.repositories import InMemoryOrderRepository, get_order_repository
from app.modules.payments.services.webhooks import (
    WechatXmlError,
    build_wechat_ack,
    get_client_ip,
    parse_wechat_xml,
)
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

from .webhooks_common import status_code_for

logger = logging.getLogger(__name__)

XML_MEDIA_TYPE = "application/xml"

router = APIRouter(
    prefix="/webhooks",
    tags=["payments:webhooks"],
)


def _ack(success: bool, message: str, status_code: int) -> Response:
    return Response(
        content=build_wechat_ack(success, message),
        status_code=status_code,
        media_type=XML_MEDIA_TYPE,
    )


@router.post("/wechat")
async def wechat_webhook(
    request: Request,
    settings: PaymentsSettings = Depends(get_payments_settings),
    order_repository: InMemoryOrderRepository = Depends(get_order_repository),
) -> Response:
    """Notificación de pago de WeChat Pay v2 (MD5 / HMAC-SHA256)."""
    provider = PaymentProvider.WECHAT.value
    observe_callback_received(provider)
    client_ip = get_client_ip(request, settings.trust_proxy_headers)

    raw_body = await request.body()
    try:
        params = parse_wechat_xml(raw_body)
    except WechatXmlError as e:
        logger.warning(f"Callback wechat desde {client_ip} con XML inválido: {e}")
        observe_callback_rejected(provider, "malformed_payload")
        return _ack(False, "Invalid XML", status.HTTP_400_BAD_REQUEST)

    start_time = time.perf_counter()
    try:
        outcome = await process_payment_callback(
            PaymentProvider.WECHAT,
            params,
            order_repository=order_repository,
            settings=settings,
        )
    except Exception as e:
        logger.error(f"Error procesando callback wechat desde {client_ip}: {e}", exc_info=True)
        observe_callback_outcome(provider, "error")
        return _ack(False, "Internal error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    record_callback_metrics(outcome, time.perf_counter() - start_time)

    if not outcome.accepted:
        logger.warning(
            f"Callback wechat rechazado desde {client_ip}: "
            f"{outcome.reason} ({outcome.message})"
        )
        return _ack(False, outcome.message, status_code_for(outcome))

    return _ack(True, "OK", status.HTTP_200_OK)


# Fin del archivo backend/app/modules/payments/routes/webhooks_wechat.py
