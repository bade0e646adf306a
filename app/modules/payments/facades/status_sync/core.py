# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/status_sync/core.py

Sincronización del estado de órdenes pendientes consultando al gateway.

Complementa a los callbacks: si una notificación se pierde, la consulta
activa (alipay.trade.query / orderquery) aplica el estado final.

Reglas:
- Solo se sincronizan órdenes pending con proveedor asignado
- Un estado de éxito exige conciliación de monto antes de marcar pagado
- Una orden succeeded nunca se degrada
- Estados desconocidos no producen transición

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import httpx

from app.modules.payments.enums import PaymentStatus
from app.modules.payments.repositories import InMemoryOrderRepository
from app.modules.payments.services.gateway_queries import query_gateway_status
from app.modules.payments.services.reconciliation import verify_amount
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

from .rules import map_gateway_status

logger = logging.getLogger(__name__)


@dataclass
class SyncSummary:
    """Resultado de un lote de sincronización."""

    total: int = 0
    synced: int = 0
    failed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"total": self.total, "synced": self.synced, "failed": self.failed}


async def sync_order_status(
    reference: str,
    *,
    order_repository: InMemoryOrderRepository,
    settings: Optional[PaymentsSettings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> bool:
    """
    Consulta al gateway el estado de una orden y lo aplica.

    Returns:
        True si la orden quedó sincronizada (con o sin transición),
        False si no se pudo obtener o aplicar un estado confiable
    """
    if settings is None:
        settings = get_payments_settings()

    order = await order_repository.get_by_reference(reference)
    if order is None:
        logger.error(f"Sincronización: orden {reference} no encontrada")
        return False

    if order.status != PaymentStatus.PENDING:
        return True

    if order.provider is None:
        logger.warning(f"Sincronización: orden {reference} sin proveedor asignado")
        return False

    trade = await query_gateway_status(order.provider, reference, settings, client=client)
    if trade is None:
        logger.warning(f"Sincronización: no se obtuvo estado del gateway para orden {reference}")
        return False

    new_status = map_gateway_status(trade.status)
    if new_status is None:
        logger.warning(
            f"Sincronización: estado {trade.status!r} de {order.provider.value} "
            f"no reconocido para orden {reference}"
        )
        return False

    if new_status is PaymentStatus.PENDING:
        logger.debug(f"Sincronización: orden {reference} sigue pendiente ({trade.status})")
        return True

    if new_status is PaymentStatus.SUCCEEDED:
        if not verify_amount(
            order.amount,
            trade.amount,
            trade.amount_unit,
            tolerance=settings.payments_amount_tolerance,
        ):
            logger.error(
                f"Sincronización: monto no coincide para orden {reference} "
                f"(esperado={order.amount}, reportado={trade.amount!r} {trade.amount_unit.value})"
            )
            return False
        transitioned = await order_repository.mark_paid(
            reference,
            transaction_id=trade.transaction_id,
            provider_status=trade.status,
        )
    else:
        transitioned = await order_repository.mark_failed(
            reference,
            reason=trade.failure_reason or f"gateway status {trade.status}",
            provider_status=trade.status,
            status=new_status,
        )

    logger.info(
        f"Sincronización: orden {reference} {PaymentStatus.PENDING.value} -> {new_status.value} "
        f"(gateway={trade.status}, transición={transitioned})"
    )
    return True


async def sync_pending_orders(
    *,
    order_repository: InMemoryOrderRepository,
    settings: Optional[PaymentsSettings] = None,
    client: Optional[httpx.AsyncClient] = None,
    limit: Optional[int] = None,
    max_age: Optional[timedelta] = None,
) -> SyncSummary:
    """
    Sincroniza por lote las órdenes pendientes recientes.

    Args:
        limit: Máximo de órdenes (default: payments_sync_batch_limit)
        max_age: Antigüedad máxima (default: payments_sync_max_age_hours)
    """
    if settings is None:
        settings = get_payments_settings()
    if limit is None:
        limit = settings.payments_sync_batch_limit
    if max_age is None:
        max_age = timedelta(hours=settings.payments_sync_max_age_hours)

    pending = await order_repository.list_pending(
        limit=limit,
        created_after=datetime.now(timezone.utc) - max_age,
    )

    summary = SyncSummary(total=len(pending))
    for order in pending:
        try:
            synced = await sync_order_status(
                order.reference,
                order_repository=order_repository,
                settings=settings,
                client=client,
            )
        except Exception as e:
            logger.error(f"Sincronización: error en orden {order.reference}: {e}", exc_info=True)
            synced = False

        if synced:
            summary.synced += 1
        else:
            summary.failed += 1

    logger.info(f"Sincronización por lote completada: {summary.to_dict()}")
    return summary


__all__ = [
    "SyncSummary",
    "sync_order_status",
    "sync_pending_orders",
]

# Fin del archivo backend/app/modules/payments/facades/status_sync/core.py
