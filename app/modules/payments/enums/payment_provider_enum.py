# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/payment_provider_enum.py

Enum de proveedores de pago soportados.

Autor: OpenAero
Fecha: 2026-10-19
"""

from enum import StrEnum


class PaymentProvider(StrEnum):
    """Proveedor de pago externo."""

    ALIPAY = "alipay"
    WECHAT = "wechat"


__all__ = ["PaymentProvider"]


# Fin del archivo backend/app/modules/payments/enums/payment_provider_enum.py
