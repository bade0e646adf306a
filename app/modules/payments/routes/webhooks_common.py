# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/webhooks_common.py

Traducción de CallbackOutcome a código HTTP, compartida por las rutas
de callbacks Alipay/WeChat.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

from fastapi import status

from app.modules.payments.schemas import CallbackOutcome, CallbackRejection

_REJECTION_STATUS = {
    CallbackRejection.INVALID_SIGNATURE: status.HTTP_401_UNAUTHORIZED,
    CallbackRejection.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def status_code_for(outcome: CallbackOutcome) -> int:
    """200 si se acusa recibo; 401/404 según motivo; 400 en otro caso."""
    if outcome.accepted:
        return status.HTTP_200_OK
    return _REJECTION_STATUS.get(outcome.reason, status.HTTP_400_BAD_REQUEST)


__all__ = ["status_code_for"]

# Fin del archivo backend/app/modules/payments/routes/webhooks_common.py
