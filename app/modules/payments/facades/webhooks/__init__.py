# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/__init__.py

Exporta las funciones clave de facades/webhooks.

Autor: OpenAero
Fecha: 2026-10-19
"""

from .verify import (
    verify_alipay_callback,
    verify_wechat_callback,
    verify_callback,
)
from .handler import process_payment_callback

__all__ = [
    "verify_alipay_callback",
    "verify_wechat_callback",
    "verify_callback",
    "process_payment_callback",
]

# Fin del archivo backend/app/modules/payments/facades/webhooks/__init__.py
