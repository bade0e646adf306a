# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/payload_sanitizer.py

Preparación segura de parámetros de callback para logs y auditoría.

- La firma se conserva en el mapping original (se necesita para verificar),
  pero en logs se reemplaza por una huella corta.
- Identificadores del comprador (PII) se enmascaran.
- Hash SHA256 del payload completo para trazabilidad.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import hashlib
from typing import Any, Dict, Mapping, Set

# Campos de firma: se reemplazan por huella
SIGNATURE_FIELDS: Set[str] = {"sign", "paySign"}

# Identificadores del comprador: se enmascaran
PII_FIELDS: Set[str] = {
    "buyer_id",
    "buyer_logon_id",
    "buyer_user_id",
    "buyer_open_id",
    "openid",
    "sub_openid",
}

SIGNATURE_FINGERPRINT_LENGTH = 8


def _fingerprint(value: str) -> str:
    digest = hashlib.sha256(value.encode("utf-8", "surrogatepass")).hexdigest()
    return f"<redacted:{digest[:SIGNATURE_FINGERPRINT_LENGTH]}>"


def _mask(value: str) -> str:
    """Conserva los extremos: 'abcdefgh' -> 'ab****gh'."""
    if len(value) <= 4:
        return "*" * len(value)
    return f"{value[:2]}{'*' * (len(value) - 4)}{value[-2:]}"


def sanitize_callback_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Copia de los parámetros apta para logs (firma y PII ocultas).

    No modifica el mapping original.
    """
    safe: Dict[str, Any] = {}
    for key, value in params.items():
        if value is None or value == "":
            safe[key] = value
        elif key in SIGNATURE_FIELDS:
            safe[key] = _fingerprint(str(value))
        elif key in PII_FIELDS:
            safe[key] = _mask(str(value))
        else:
            safe[key] = value
    return safe


def compute_payload_hash(params: Mapping[str, Any]) -> str:
    """
    SHA256 del payload completo (todas las llaves, orden canónico).

    A diferencia del string firmado, incluye sign/sign_type y valores vacíos,
    así que dos entregas idénticas producen el mismo hash.
    """
    canonical = "&".join(
        f"{key}={'' if value is None else value}"
        for key, value in sorted(params.items())
    )
    return hashlib.sha256(canonical.encode("utf-8", "surrogatepass")).hexdigest()


__all__ = [
    "sanitize_callback_params",
    "compute_payload_hash",
    "SIGNATURE_FIELDS",
    "PII_FIELDS",
]

# Fin del archivo backend/app/modules/payments/services/webhooks/payload_sanitizer.py
