# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/repositories/__init__.py

Punto de entrada de repositorios del módulo Payments.

Autor: OpenAero
Fecha: 2026-10-19
"""

from .order_repository import (
    OrderRecord,
    InMemoryOrderRepository,
    get_order_repository,
    reset_order_repository,
)

__all__ = [
    "OrderRecord",
    "InMemoryOrderRepository",
    "get_order_repository",
    "reset_order_repository",
]

# Fin del archivo backend/app/modules/payments/repositories/__init__.py
