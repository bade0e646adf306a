# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/order_repository.py

Repositorio de órdenes de pago referenciadas por out_trade_no.

Responsabilidades:
- Búsqueda por referencia de orden (out_trade_no)
- Transiciones pending -> succeeded / failed / cancelled
- Listado de órdenes pendientes para sincronización con el gateway
- Idempotencia: una orden succeeded nunca se vuelve a marcar

La implementación en memoria protege su diccionario con un lock; se
inyecta en las rutas vía get_order_repository para poder sustituirla.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from app.modules.payments.enums import PaymentProvider, PaymentStatus

logger = logging.getLogger(__name__)


@dataclass
class OrderRecord:
    """Orden de pago tal como la ve el procesamiento de callbacks."""

    reference: str
    amount: Decimal
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: Optional[str] = None
    provider_status: Optional[str] = None
    failure_reason: Optional[str] = None
    paid_at: Optional[datetime] = None
    provider: Optional[PaymentProvider] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class InMemoryOrderRepository:
    def __init__(self) -> None:
        self._orders: Dict[str, OrderRecord] = {}
        self._lock = threading.Lock()

    # -----------------------------------------------------------
    # Alta / búsqueda
    # -----------------------------------------------------------
    async def add(self, order: OrderRecord) -> OrderRecord:
        """Registra (o reemplaza) una orden."""
        with self._lock:
            self._orders[order.reference] = replace(order)
        return order

    async def get_by_reference(self, reference: str) -> Optional[OrderRecord]:
        """Obtiene una copia de la orden por out_trade_no."""
        with self._lock:
            order = self._orders.get(reference)
            return replace(order) if order is not None else None

    async def list_pending(
        self,
        *,
        limit: Optional[int] = None,
        created_after: Optional[datetime] = None,
    ) -> List[OrderRecord]:
        """
        Órdenes pending con proveedor asignado, más recientes primero.

        Args:
            limit: Máximo de órdenes a devolver
            created_after: Solo órdenes creadas a partir de este instante
        """
        with self._lock:
            pending = [
                replace(order)
                for order in self._orders.values()
                if order.status == PaymentStatus.PENDING
                and order.provider is not None
                and (created_after is None or order.created_at >= created_after)
            ]
        pending.sort(key=lambda order: order.created_at, reverse=True)
        return pending[:limit] if limit is not None else pending

    # -----------------------------------------------------------
    # Transiciones
    # -----------------------------------------------------------
    async def mark_paid(
        self,
        reference: str,
        *,
        transaction_id: Optional[str],
        provider_status: Optional[str] = None,
    ) -> bool:
        """
        Marca la orden como pagada.

        Returns:
            True si hubo transición, False si no existe o ya estaba succeeded.
        """
        with self._lock:
            order = self._orders.get(reference)
            if order is None or order.status == PaymentStatus.SUCCEEDED:
                return False
            order.status = PaymentStatus.SUCCEEDED
            order.transaction_id = transaction_id
            order.provider_status = provider_status
            order.failure_reason = None
            order.paid_at = datetime.now(timezone.utc)

        logger.info(f"Orden {reference} marcada como pagada (transaction_id={transaction_id})")
        return True

    async def mark_failed(
        self,
        reference: str,
        *,
        reason: Optional[str],
        provider_status: Optional[str] = None,
        status: PaymentStatus = PaymentStatus.FAILED,
    ) -> bool:
        """
        Marca la orden como fallida (o cancelada). Nunca degrada una orden succeeded.

        Raises:
            ValueError: status distinto de FAILED / CANCELLED
        """
        if status not in (PaymentStatus.FAILED, PaymentStatus.CANCELLED):
            raise ValueError(f"Estado de cierre no válido: {status}")

        with self._lock:
            order = self._orders.get(reference)
            if order is None or order.status == PaymentStatus.SUCCEEDED:
                return False
            order.status = status
            order.provider_status = provider_status
            order.failure_reason = reason

        logger.info(f"Orden {reference} marcada como {status.value}: {reason}")
        return True

    def clear(self) -> None:
        with self._lock:
            self._orders.clear()


# Singleton global
_order_repository: Optional[InMemoryOrderRepository] = None


def get_order_repository() -> InMemoryOrderRepository:
    """Dependencia FastAPI: repositorio de órdenes del proceso."""
    global _order_repository
    if _order_repository is None:
        _order_repository = InMemoryOrderRepository()
    return _order_repository


def reset_order_repository() -> None:
    """Descarta el repositorio global (útil para tests)."""
    global _order_repository
    _order_repository = None


__all__ = [
    "OrderRecord",
    "InMemoryOrderRepository",
    "get_order_repository",
    "reset_order_repository",
]

# Fin del archivo backend/app/modules/payments/repositories/order_repository.py
