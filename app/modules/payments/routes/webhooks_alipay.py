# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/webhooks_alipay.py

Callback (notify_url) de Alipay.

Endpoint:
- POST /payments/webhooks/alipay

Body application/x-www-form-urlencoded. Alipay espera el texto plano
"success" para dejar de reintentar; cualquier otra respuesta provoca
reintentos.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
import time
from urllib.parse import parse_qsl

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse

from app.modules.payments.enums import PaymentProvider
from app.modules.payments.facades.webhooks import process_payment_callback
from app.modules.payments.metrics import (
    observe_callback_outcome,
    observe_callback_received,
    observe_callback_rejected,
)
from app.modules.payments.metrics.helpers import record_callback_metrics
from app.modules.payments.repositories import InMemoryOrderRepository, get_order_repository
from app.modules.payments.services.webhooks import get_client_ip
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

from .webhooks_common import status_code_for

logger = logging.getLogger(__name__)

ALIPAY_ACK_SUCCESS = "success"
ALIPAY_ACK_FAILURE = "failure"

router = APIRouter(
    prefix="/webhooks",
    tags=["payments:webhooks"],
)


@router.post("/alipay", response_class=PlainTextResponse)
async def alipay_webhook(
    request: Request,
    settings: PaymentsSettings = Depends(get_payments_settings),
    order_repository: InMemoryOrderRepository = Depends(get_order_repository),
) -> PlainTextResponse:
    """Notificación asíncrona de Alipay (RSA2)."""
    provider = PaymentProvider.ALIPAY.value
    observe_callback_received(provider)
    client_ip = get_client_ip(request, settings.trust_proxy_headers)

    raw_body = await request.body()
    try:
        params = dict(parse_qsl(raw_body.decode("utf-8"), keep_blank_values=True))
    except UnicodeDecodeError:
        logger.warning(f"Callback alipay desde {client_ip}: body no es UTF-8")
        observe_callback_rejected(provider, "malformed_payload")
        return PlainTextResponse(ALIPAY_ACK_FAILURE, status_code=status.HTTP_400_BAD_REQUEST)

    start_time = time.perf_counter()
    try:
        outcome = await process_payment_callback(
            PaymentProvider.ALIPAY,
            params,
            order_repository=order_repository,
            settings=settings,
        )
    except Exception as e:
        logger.error(f"Error procesando callback alipay desde {client_ip}: {e}", exc_info=True)
        observe_callback_outcome(provider, "error")
        return PlainTextResponse(ALIPAY_ACK_FAILURE, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    record_callback_metrics(outcome, time.perf_counter() - start_time)

    if not outcome.accepted:
        logger.warning(
            f"Callback alipay rechazado desde {client_ip}: "
            f"{outcome.reason} ({outcome.message})"
        )
        return PlainTextResponse(ALIPAY_ACK_FAILURE, status_code=status_code_for(outcome))

    return PlainTextResponse(ALIPAY_ACK_SUCCESS, status_code=status.HTTP_200_OK)


# Fin del archivo backend/app/modules/payments/routes/webhooks_alipay.py
