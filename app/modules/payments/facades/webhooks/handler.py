# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/handler.py

Procesamiento de alto nivel de callbacks de pago (Alipay / WeChat Pay).

Flujo:
1. Validación de campos mínimos (sign, out_trade_no, return_code)
2. Verificación de firma
3. Búsqueda de la orden
4. Interpretación del estado reportado por el gateway
5. Conciliación de monto (obligatoria antes de marcar pagado)
6. Transición idempotente de la orden

Las rutas HTTP traducen el CallbackOutcome a la respuesta que cada
gateway espera y observan métricas.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from app.modules.payments.enums import AmountUnit, PaymentProvider, PaymentStatus
from app.modules.payments.repositories import InMemoryOrderRepository, OrderRecord
from app.modules.payments.schemas import (
    CallbackOutcome,
    CallbackOutcomeType,
    CallbackRejection,
)
from app.modules.payments.services.reconciliation import verify_amount
from app.modules.payments.services.webhooks import sanitize_callback_params
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

from .constants import (
    ALIPAY_CLOSED_REASON,
    ALIPAY_FAILED_STATUSES,
    ALIPAY_SUCCESS_STATUSES,
    WECHAT_CODE_FAIL,
    WECHAT_CODE_SUCCESS,
)
from .verify import verify_callback

logger = logging.getLogger(__name__)


class _Disposition(Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    IGNORED = "ignored"


def _interpret_status(
    provider: PaymentProvider,
    params: Mapping[str, Any],
) -> Tuple[_Disposition, Optional[str], Optional[str]]:
    """
    Traduce el estado del gateway.

    Returns:
        (disposición, estado crudo del proveedor, motivo de fallo)
    """
    if provider is PaymentProvider.ALIPAY:
        status = params.get("trade_status") or None
        if status in ALIPAY_SUCCESS_STATUSES:
            return _Disposition.SUCCESS, status, None
        if status in ALIPAY_FAILED_STATUSES:
            return _Disposition.FAILURE, status, ALIPAY_CLOSED_REASON
        return _Disposition.IGNORED, status, None

    result_code = params.get("result_code") or None
    if result_code == WECHAT_CODE_SUCCESS:
        return _Disposition.SUCCESS, result_code, None
    if result_code == WECHAT_CODE_FAIL:
        reason = params.get("err_code_des") or params.get("err_code") or "payment failed"
        return _Disposition.FAILURE, result_code, reason
    return _Disposition.IGNORED, result_code, None


def _reported_amount(provider: PaymentProvider, params: Mapping[str, Any]) -> Tuple[Any, AmountUnit]:
    if provider is PaymentProvider.ALIPAY:
        return params.get("total_amount"), AmountUnit.MAJOR
    return params.get("total_fee"), AmountUnit.MINOR


def _transaction_id(provider: PaymentProvider, params: Mapping[str, Any]) -> Optional[str]:
    key = "trade_no" if provider is PaymentProvider.ALIPAY else "transaction_id"
    return params.get(key) or None


async def process_payment_callback(
    provider: PaymentProvider | str,
    params: Mapping[str, Any],
    *,
    order_repository: InMemoryOrderRepository,
    settings: Optional[PaymentsSettings] = None,
) -> CallbackOutcome:
    """
    Verifica y aplica un callback de pago sobre la orden referenciada.

    Nunca lanza por datos del callback: todo rechazo se devuelve como
    CallbackOutcome(accepted=False) con su motivo.
    """
    provider = PaymentProvider(provider)
    if settings is None:
        settings = get_payments_settings()

    order_ref = params.get("out_trade_no") or None
    logger.info(
        f"Callback {provider.value} recibido para orden {order_ref}: "
        f"{sanitize_callback_params(params)}"
    )

    # 1-3. Campos mínimos
    if not params.get("sign"):
        logger.warning(f"Callback {provider.value} rechazado: falta firma (orden={order_ref})")
        return CallbackOutcome.rejected(
            provider, CallbackRejection.MISSING_SIGNATURE, "Missing signature", order_ref
        )

    if not order_ref:
        logger.warning(f"Callback {provider.value} rechazado: falta out_trade_no")
        return CallbackOutcome.rejected(
            provider, CallbackRejection.MISSING_ORDER_REFERENCE, "Missing out_trade_no"
        )

    if provider is PaymentProvider.WECHAT and params.get("return_code") != WECHAT_CODE_SUCCESS:
        message = params.get("return_msg") or "Gateway communication error"
        logger.warning(f"Callback wechat con return_code={params.get('return_code')!r}: {message}")
        return CallbackOutcome.rejected(
            provider, CallbackRejection.GATEWAY_ERROR, message, order_ref
        )

    # 2. Firma
    verification = verify_callback(provider, params, settings)
    if not verification.valid:
        logger.warning(
            f"Callback {provider.value} rechazado: firma inválida "
            f"(orden={order_ref}, reason={verification.reason})"
        )
        return CallbackOutcome.rejected(
            provider, CallbackRejection.INVALID_SIGNATURE, "Signature verification failed", order_ref
        )

    # 3. Orden
    order: Optional[OrderRecord] = await order_repository.get_by_reference(order_ref)
    if order is None:
        logger.warning(f"Callback {provider.value} rechazado: orden {order_ref} no encontrada")
        return CallbackOutcome.rejected(
            provider, CallbackRejection.ORDER_NOT_FOUND, "Payment not found", order_ref
        )

    # 4. Estado
    disposition, provider_status, failure_reason = _interpret_status(provider, params)
    transaction_id = _transaction_id(provider, params)

    if disposition is _Disposition.IGNORED:
        logger.info(f"Callback {provider.value} ignorado para orden {order_ref}: estado={provider_status}")
        return CallbackOutcome(
            provider=provider,
            accepted=True,
            outcome=CallbackOutcomeType.IGNORED,
            order_reference=order_ref,
            transaction_id=transaction_id,
        )

    if disposition is _Disposition.FAILURE:
        if order.status == PaymentStatus.SUCCEEDED:
            logger.warning(
                f"Callback de fallo para orden {order_ref} ya pagada; se conserva estado succeeded"
            )
            return CallbackOutcome(
                provider=provider,
                accepted=True,
                outcome=CallbackOutcomeType.DUPLICATE,
                order_reference=order_ref,
                transaction_id=order.transaction_id,
            )
        marked_failed = await order_repository.mark_failed(
            order_ref, reason=failure_reason, provider_status=provider_status
        )
        if not marked_failed:
            # Un callback de éxito concurrente la marcó pagada primero
            logger.warning(
                f"Callback de fallo para orden {order_ref} descartado: la orden ya fue pagada"
            )
            return CallbackOutcome(
                provider=provider,
                accepted=True,
                outcome=CallbackOutcomeType.DUPLICATE,
                order_reference=order_ref,
                transaction_id=transaction_id,
            )
        return CallbackOutcome(
            provider=provider,
            accepted=True,
            outcome=CallbackOutcomeType.FAILED,
            order_reference=order_ref,
            transaction_id=transaction_id,
        )

    # 5. Monto (obligatorio antes de marcar pagado)
    reported, unit = _reported_amount(provider, params)
    tolerance: Decimal = settings.payments_amount_tolerance
    if not verify_amount(order.amount, reported, unit, tolerance=tolerance):
        logger.error(
            f"Callback {provider.value} rechazado: monto no coincide para orden {order_ref} "
            f"(esperado={order.amount}, reportado={reported!r} {unit.value})"
        )
        return CallbackOutcome.rejected(
            provider, CallbackRejection.AMOUNT_MISMATCH, "Amount mismatch", order_ref
        )

    # 6. Idempotencia
    if order.status == PaymentStatus.SUCCEEDED:
        logger.info(f"Callback duplicado para orden {order_ref} ya pagada")
        return CallbackOutcome(
            provider=provider,
            accepted=True,
            outcome=CallbackOutcomeType.DUPLICATE,
            order_reference=order_ref,
            transaction_id=order.transaction_id,
        )

    transitioned = await order_repository.mark_paid(
        order_ref, transaction_id=transaction_id, provider_status=provider_status
    )
    if not transitioned:
        # Otro callback concurrente la marcó primero
        return CallbackOutcome(
            provider=provider,
            accepted=True,
            outcome=CallbackOutcomeType.DUPLICATE,
            order_reference=order_ref,
            transaction_id=transaction_id,
        )

    return CallbackOutcome(
        provider=provider,
        accepted=True,
        outcome=CallbackOutcomeType.PAID,
        order_reference=order_ref,
        transaction_id=transaction_id,
    )


__all__ = ["process_payment_callback"]

# Fin del archivo backend/app/modules/payments/facades/webhooks/handler.py
