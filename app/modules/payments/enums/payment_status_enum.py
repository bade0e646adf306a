# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/payment_status_enum.py

Enum de estados del pago de una orden.

Autor: OpenAero
Fecha: 2026-10-19
"""

from enum import StrEnum


class PaymentStatus(StrEnum):
    """Estado del pago de la orden frente al proveedor."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


__all__ = ["PaymentStatus"]


# Fin del archivo backend/app/modules/payments/enums/payment_status_enum.py
