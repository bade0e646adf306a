# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/callback_schemas.py

Resultado del procesamiento de un callback de pago (Alipay / WeChat).

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field

from app.modules.payments.enums import PaymentProvider


class CallbackOutcomeType(StrEnum):
    """Desenlace de negocio del callback."""

    PAID = "paid"
    FAILED = "failed"
    DUPLICATE = "duplicate"
    IGNORED = "ignored"
    REJECTED = "rejected"


class CallbackRejection(StrEnum):
    """Motivo de rechazo; el gateway reintentará el callback."""

    MISSING_SIGNATURE = "missing_signature"
    MISSING_ORDER_REFERENCE = "missing_order_reference"
    INVALID_SIGNATURE = "invalid_signature"
    ORDER_NOT_FOUND = "order_not_found"
    AMOUNT_MISMATCH = "amount_mismatch"
    GATEWAY_ERROR = "gateway_error"


class CallbackOutcome(BaseModel):
    """Respuesta del handler de callbacks hacia las rutas HTTP."""

    provider: PaymentProvider
    accepted: bool = Field(description="¿Se debe acusar recibo exitoso al gateway?")
    outcome: CallbackOutcomeType
    reason: Optional[CallbackRejection] = Field(default=None)
    order_reference: Optional[str] = Field(default=None, description="out_trade_no")
    transaction_id: Optional[str] = Field(default=None, description="trade_no / transaction_id")
    message: str = Field(default="OK")

    @classmethod
    def rejected(
        cls,
        provider: PaymentProvider,
        reason: CallbackRejection,
        message: str,
        order_reference: Optional[str] = None,
    ) -> "CallbackOutcome":
        return cls(
            provider=provider,
            accepted=False,
            outcome=CallbackOutcomeType.REJECTED,
            reason=reason,
            order_reference=order_reference,
            message=message,
        )


__all__ = ["CallbackOutcomeType", "CallbackRejection", "CallbackOutcome"]

# Fin del archivo backend/app/modules/payments/schemas/callback_schemas.py
