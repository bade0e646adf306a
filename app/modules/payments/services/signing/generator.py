# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/signing/generator.py

Generador de firmas para solicitudes salientes al gateway
(p. ej. consulta de estado de transacción).

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

from typing import Any, Mapping

from app.modules.payments.enums import SignatureAlgorithm
from .algorithms import resolve_signature_algorithm
from .canonical import RSA_EXCLUDED_KEYS, encode_canonical_params
from .errors import SigningKeyError
from .rsa_signature import sign_rsa
from .shared_secret import compute_shared_secret_signature


def sign_params(
    params: Mapping[str, Any],
    private_key_or_secret: str,
    algorithm: SignatureAlgorithm | str,
) -> str:
    """
    Firma parámetros salientes.

    - RSA-SHA256: excluye sign/sign_type, firma con la llave privada, base64
    - MD5 / HMAC-SHA256: excluye sign, agrega "&key=<secreto>", hex mayúsculas

    Raises:
        SigningKeyError: llave/secreto ausente o malformado (bug de configuración)
        UnsupportedAlgorithmError: algoritmo desconocido
    """
    algo = resolve_signature_algorithm(algorithm)

    if not private_key_or_secret:
        raise SigningKeyError(f"Material de firma no configurado para {algo.value}")

    if algo is SignatureAlgorithm.RSA_SHA256:
        canonical = encode_canonical_params(params, RSA_EXCLUDED_KEYS)
        return sign_rsa(canonical, private_key_or_secret)

    return compute_shared_secret_signature(params, private_key_or_secret, algo)


__all__ = ["sign_params"]

# Fin del archivo backend/app/modules/payments/services/signing/generator.py
