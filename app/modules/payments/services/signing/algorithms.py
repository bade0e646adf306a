# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/signing/algorithms.py

Normalización de nombres de algoritmo de firma.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

from app.modules.payments.enums import SignatureAlgorithm
from .errors import UnsupportedAlgorithmError

# Nombres que usan los gateways para el mismo algoritmo
_ALGORITHM_ALIASES = {
    "RSA2": SignatureAlgorithm.RSA_SHA256,
    "SHA256WITHRSA": SignatureAlgorithm.RSA_SHA256,
    "HMAC_SHA256": SignatureAlgorithm.HMAC_SHA256,
}


def resolve_signature_algorithm(value: SignatureAlgorithm | str) -> SignatureAlgorithm:
    """
    Normaliza el nombre de algoritmo (acepta "RSA2", "md5", etc.).

    Raises:
        UnsupportedAlgorithmError: si el nombre no corresponde a ninguno soportado
    """
    if isinstance(value, SignatureAlgorithm):
        return value
    name = str(value or "").strip().upper()
    if name in _ALGORITHM_ALIASES:
        return _ALGORITHM_ALIASES[name]
    try:
        return SignatureAlgorithm(name)
    except ValueError:
        raise UnsupportedAlgorithmError(f"Algoritmo de firma no soportado: {value!r}") from None


__all__ = ["resolve_signature_algorithm"]

# Fin del archivo backend/app/modules/payments/services/signing/algorithms.py
