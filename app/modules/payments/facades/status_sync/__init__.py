# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/status_sync/__init__.py

Sincronización de estado de órdenes contra los gateways.

Autor: OpenAero
Fecha: 2026-10-19
"""

from .core import SyncSummary, sync_order_status, sync_pending_orders
from .rules import map_gateway_status

__all__ = [
    "SyncSummary",
    "sync_order_status",
    "sync_pending_orders",
    "map_gateway_status",
]

# Fin del archivo backend/app/modules/payments/facades/status_sync/__init__.py
