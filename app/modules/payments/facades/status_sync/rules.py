# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/status_sync/rules.py

Normalización del estado reportado por los gateways a PaymentStatus.

Autor: OpenAero
Fecha: 2026-10-19
"""

from typing import Optional

from app.modules.payments.enums import PaymentStatus

# Alipay trade_status / WeChat trade_state
GATEWAY_SUCCEEDED_STATUSES = frozenset({"TRADE_SUCCESS", "TRADE_FINISHED", "SUCCESS"})
GATEWAY_CANCELLED_STATUSES = frozenset({"TRADE_CLOSED", "CLOSED", "REVOKED"})
GATEWAY_PENDING_STATUSES = frozenset({"WAIT_BUYER_PAY", "TRADE_PENDING", "NOTPAY", "USERPAYING"})
GATEWAY_FAILED_STATUSES = frozenset({"PAYERROR"})


def map_gateway_status(status: Optional[str]) -> Optional[PaymentStatus]:
    """
    Traduce el estado del gateway a nuestro enum.

    Returns:
        PaymentStatus, o None si el estado no se reconoce (sin transición)
    """
    if not status:
        return None

    normalized = status.strip().upper()

    if normalized in GATEWAY_SUCCEEDED_STATUSES:
        return PaymentStatus.SUCCEEDED
    if normalized in GATEWAY_CANCELLED_STATUSES:
        return PaymentStatus.CANCELLED
    if normalized in GATEWAY_PENDING_STATUSES:
        return PaymentStatus.PENDING
    if normalized in GATEWAY_FAILED_STATUSES:
        return PaymentStatus.FAILED

    return None


__all__ = [
    "map_gateway_status",
    "GATEWAY_SUCCEEDED_STATUSES",
    "GATEWAY_CANCELLED_STATUSES",
    "GATEWAY_PENDING_STATUSES",
    "GATEWAY_FAILED_STATUSES",
]

# Fin del archivo backend/app/modules/payments/facades/status_sync/rules.py
