# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/reconciliation/__init__.py

Conciliación de montos de pago.

Autor: OpenAero
Fecha: 2026-10-19
"""

from .amount import (
    verify_amount,
    validate_checkout_amount,
    AmountCheck,
    to_decimal,
    parse_minor_units,
    to_minor_units,
    DEFAULT_AMOUNT_TOLERANCE,
)

__all__ = [
    "verify_amount",
    "validate_checkout_amount",
    "AmountCheck",
    "to_decimal",
    "parse_minor_units",
    "to_minor_units",
    "DEFAULT_AMOUNT_TOLERANCE",
]

# Fin del archivo backend/app/modules/payments/services/reconciliation/__init__.py
