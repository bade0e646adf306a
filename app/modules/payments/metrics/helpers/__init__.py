# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/helpers/__init__.py

Helper para mapear el resultado de un callback a métricas.

Separa métricas de verificación (verified) vs outcome (resultado de negocio).

Autor: OpenAero
Fecha: 2026-10-19
"""
from __future__ import annotations

from enum import Enum

from app.modules.payments.schemas import CallbackOutcome, CallbackRejection

from ..exporters.prometheus_exporter import (
    observe_amount_mismatch,
    observe_callback_outcome,
    observe_callback_rejected,
    observe_callback_verified,
)


class WebhookVerificationResult(str, Enum):
    """Resultados de verificación de firma del callback."""
    SUCCESS = "success"
    FAILURE = "failure"


# Rechazos atribuibles a la firma
_SIGNATURE_REJECTIONS = {
    CallbackRejection.MISSING_SIGNATURE,
    CallbackRejection.INVALID_SIGNATURE,
}


def get_verification_result(outcome: CallbackOutcome) -> WebhookVerificationResult:
    """
    Resultado de verificación a partir del outcome del handler.

    - Rechazo por firma ausente/inválida → failure
    - Cualquier otro caso → success (la firma no fue el motivo)
    """
    if outcome.reason in _SIGNATURE_REJECTIONS:
        return WebhookVerificationResult.FAILURE
    return WebhookVerificationResult.SUCCESS


def record_callback_metrics(outcome: CallbackOutcome, duration: float) -> None:
    """Observa verificación, outcome y rechazo de un callback procesado."""
    provider = outcome.provider.value
    observe_callback_verified(provider, get_verification_result(outcome).value, duration)
    observe_callback_outcome(provider, outcome.outcome.value)
    if outcome.reason is not None:
        observe_callback_rejected(provider, outcome.reason.value)
        if outcome.reason is CallbackRejection.AMOUNT_MISMATCH:
            observe_amount_mismatch(provider)


__all__ = [
    "WebhookVerificationResult",
    "get_verification_result",
    "record_callback_metrics",
]

# Fin del archivo backend/app/modules/payments/metrics/helpers/__init__.py
