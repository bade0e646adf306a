# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/signing/__init__.py

Primitivas de firma de parámetros de gateways (funciones puras, sin estado).

Autor: OpenAero
Fecha: 2026-10-19
"""

from .canonical import (
    encode_canonical_params,
    RSA_EXCLUDED_KEYS,
    SHARED_SECRET_EXCLUDED_KEYS,
)
from .errors import SigningKeyError, UnsupportedAlgorithmError
from .keys import wrap_pem, load_public_key, load_rsa_private_key
from .rsa_signature import check_rsa_signature, verify_rsa_signature, sign_rsa
from .shared_secret import (
    compute_shared_secret_signature,
    check_shared_secret_signature,
    verify_shared_secret_signature,
)
from .algorithms import resolve_signature_algorithm
from .generator import sign_params

__all__ = [
    # Codificación canónica
    "encode_canonical_params",
    "RSA_EXCLUDED_KEYS",
    "SHARED_SECRET_EXCLUDED_KEYS",

    # Errores
    "SigningKeyError",
    "UnsupportedAlgorithmError",

    # Llaves
    "wrap_pem",
    "load_public_key",
    "load_rsa_private_key",

    # Verificación / firma
    "check_rsa_signature",
    "verify_rsa_signature",
    "sign_rsa",
    "compute_shared_secret_signature",
    "check_shared_secret_signature",
    "verify_shared_secret_signature",
    "sign_params",
    "resolve_signature_algorithm",
]

# Fin del archivo backend/app/modules/payments/services/signing/__init__.py
