# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/reconciliation/amount.py

Conciliación del monto reportado por el gateway contra el total de la orden.

- Unidad "major" (Alipay total_amount="99.99"): tolerancia absoluta de 0.01
  para absorber ruido de redondeo de decimales representados como float.
- Unidad "minor" (WeChat total_fee="9999"): solo se aceptan enteros o strings
  de dígitos ASCII; el total esperado se convierte a centavos con redondeo
  half-up y se compara por igualdad entera.

Toda la aritmética es Decimal; valores no numéricos o fuera del rango del
contexto Decimal -> mismatch (False).

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from app.modules.payments.enums import AmountUnit

logger = logging.getLogger(__name__)

Number = Union[Decimal, int, float, str]

DEFAULT_AMOUNT_TOLERANCE = Decimal("0.01")
MINOR_UNITS_PER_MAJOR = Decimal(100)

# Un pago mayor a 10x el precio se considera anómalo
MAX_PRICE_MULTIPLIER = Decimal(10)

# total_fee en fen; 18 dígitos cubren cualquier monto real
MAX_MINOR_UNIT_DIGITS = 18


def to_decimal(value: Number | None) -> Optional[Decimal]:
    """
    Convierte a Decimal finito o None.

    Los float se convierten vía str() para conservar su representación
    decimal corta (100.1 -> Decimal("100.1")).
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not result.is_finite():
        return None
    return result


def to_minor_units(amount_major: Number) -> Optional[int]:
    """Convierte unidades mayores a menores: round(amount * 100), half-up."""
    amount = to_decimal(amount_major)
    if amount is None:
        return None
    try:
        return int((amount * MINOR_UNITS_PER_MAJOR).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except ArithmeticError:
        return None


def parse_minor_units(value: Number | None) -> Optional[int]:
    """
    Interpreta un monto en unidades menores como entero.

    Acepta int o un string de dígitos ASCII (sin signo, sin exponente ni
    punto decimal); cualquier otra forma -> None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    digits = value.strip()
    if not digits or len(digits) > MAX_MINOR_UNIT_DIGITS:
        return None
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(digits)


def verify_amount(
    expected_major_units: Number,
    reported_value: Number | None,
    unit: AmountUnit | str = AmountUnit.MAJOR,
    *,
    tolerance: Decimal = DEFAULT_AMOUNT_TOLERANCE,
) -> bool:
    """
    Compara el monto reportado por el gateway contra el total local.

    Args:
        expected_major_units: Total de la orden en unidades mayores (yuan)
        reported_value: Monto reportado (string o número)
        unit: "major" o "minor" según el proveedor
        tolerance: Tolerancia absoluta para unidad "major"

    Returns:
        True si los montos coinciden
    """
    expected = to_decimal(expected_major_units)
    if expected is None:
        logger.error(f"Monto esperado inválido: {expected_major_units!r}")
        return False

    try:
        amount_unit = AmountUnit(unit)
    except ValueError:
        logger.error(f"Unidad de monto desconocida: {unit!r}")
        return False

    if amount_unit is AmountUnit.MINOR:
        reported_minor = parse_minor_units(reported_value)
        if reported_minor is None:
            logger.warning(f"Monto en unidades menores no entero: {reported_value!r}")
            return False
        expected_minor = to_minor_units(expected)
        if expected_minor is None:
            logger.error(f"Monto esperado fuera de rango: {expected_major_units!r}")
            return False
        matches = expected_minor == reported_minor
    else:
        reported = to_decimal(reported_value)
        if reported is None:
            logger.warning(f"Monto reportado no numérico: {reported_value!r}")
            return False
        try:
            matches = abs(expected - reported) <= Decimal(tolerance)
        except ArithmeticError:
            logger.warning(f"Monto reportado fuera de rango: {reported_value!r}")
            return False

    if not matches:
        logger.warning(
            f"Monto no coincide: esperado={expected} ({AmountUnit.MAJOR.value}), "
            f"reportado={reported_value} ({amount_unit.value})"
        )
    return matches


@dataclass(frozen=True)
class AmountCheck:
    """Resultado de validación del monto solicitado en checkout."""

    valid: bool
    error: Optional[str] = None


def validate_checkout_amount(
    requested_amount: Number,
    price: Number,
    *,
    tolerance: Decimal = DEFAULT_AMOUNT_TOLERANCE,
) -> AmountCheck:
    """
    Valida el monto que el cliente pide pagar contra el precio de la solución.

    Reglas: monto > 0, no más de 10x el precio, diferencia <= tolerancia.
    """
    requested = to_decimal(requested_amount)
    expected = to_decimal(price)

    if requested is None or expected is None:
        return AmountCheck(valid=False, error="El monto de pago no es numérico")

    if requested <= 0:
        return AmountCheck(valid=False, error="El monto de pago debe ser mayor a 0")

    try:
        anomalous = requested > expected * MAX_PRICE_MULTIPLIER
        difference = abs(requested - expected)
    except ArithmeticError:
        return AmountCheck(valid=False, error="El monto de pago está fuera de rango")

    if anomalous:
        return AmountCheck(valid=False, error="Monto de pago anómalo, verifique")

    if difference > Decimal(tolerance):
        return AmountCheck(
            valid=False,
            error=(
                f"El monto de pago no coincide con el precio "
                f"(precio: {expected}, monto: {requested})"
            ),
        )

    return AmountCheck(valid=True)


__all__ = [
    "verify_amount",
    "validate_checkout_amount",
    "AmountCheck",
    "to_decimal",
    "to_minor_units",
    "parse_minor_units",
    "DEFAULT_AMOUNT_TOLERANCE",
]

# Fin del archivo backend/app/modules/payments/services/reconciliation/amount.py
