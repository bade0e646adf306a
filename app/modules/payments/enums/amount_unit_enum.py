# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/amount_unit_enum.py

Unidad en la que un proveedor reporta montos.

- major: yuan con decimales ("99.99"), p. ej. Alipay total_amount
- minor: fen enteros ("9999"), p. ej. WeChat total_fee

Autor: OpenAero
Fecha: 2026-10-19
"""

from enum import StrEnum


class AmountUnit(StrEnum):
    MAJOR = "major"
    MINOR = "minor"


__all__ = ["AmountUnit"]

# Fin del archivo backend/app/modules/payments/enums/amount_unit_enum.py
