# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/__init__.py

Superficie de exportación de enums del módulo Payments.

Incluye:
- AmountUnit
- PaymentProvider
- PaymentStatus
- RuntimeEnvironment
- SignatureAlgorithm

Autor: OpenAero
Fecha: 2026-10-19
"""

from .amount_unit_enum import AmountUnit
from .payment_provider_enum import PaymentProvider
from .payment_status_enum import PaymentStatus
from .runtime_environment_enum import RuntimeEnvironment
from .signature_algorithm_enum import SignatureAlgorithm

__all__ = [
    "AmountUnit",
    "PaymentProvider",
    "PaymentStatus",
    "RuntimeEnvironment",
    "SignatureAlgorithm",
]

# Fin del archivo backend/app/modules/payments/enums/__init__.py
