# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/signing/keys.py

Carga de llaves RSA desde configuración.

Las consolas de Alipay entregan llaves como base64 en una sola línea,
sin encabezados PEM. Aquí se envuelven en el sobre PEM estándar
(líneas de 64 caracteres) antes de cargarlas con `cryptography`.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .errors import SigningKeyError

logger = logging.getLogger(__name__)

PEM_LINE_LENGTH = 64

PUBLIC_KEY_LABEL = "PUBLIC KEY"
PKCS8_PRIVATE_KEY_LABEL = "PRIVATE KEY"
PKCS1_PRIVATE_KEY_LABEL = "RSA PRIVATE KEY"


def wrap_pem(key: str, label: str) -> str:
    """
    Envuelve base64 "desnudo" en un bloque PEM.

    Si el valor ya trae encabezado PEM se devuelve tal cual (normalizando
    los "\\n" literales que suelen quedar al pegar llaves en variables de
    entorno).
    """
    text = key.strip().replace("\\n", "\n")
    if text.startswith("-----BEGIN"):
        return text + "\n"

    body = "".join(text.split())
    lines = [body[i:i + PEM_LINE_LENGTH] for i in range(0, len(body), PEM_LINE_LENGTH)]
    return "\n".join([f"-----BEGIN {label}-----", *lines, f"-----END {label}-----"]) + "\n"


def load_public_key(key: str):
    """
    Carga una llave pública (PEM o base64 SubjectPublicKeyInfo).

    Raises:
        ValueError / UnsupportedAlgorithm: si la llave no se puede parsear
    """
    pem = wrap_pem(key, PUBLIC_KEY_LABEL)
    return serialization.load_pem_public_key(pem.encode("ascii"))


def load_rsa_private_key(key: str) -> rsa.RSAPrivateKey:
    """
    Carga la llave privada RSA de la plataforma.

    Acepta PEM (PKCS#8 o PKCS#1) o base64 de cualquiera de los dos.

    Raises:
        SigningKeyError: si la llave falta, está malformada o no es RSA
    """
    if not key or not key.strip():
        raise SigningKeyError("Llave privada no configurada")

    candidates = [wrap_pem(key, PKCS8_PRIVATE_KEY_LABEL)]
    if not key.strip().startswith("-----BEGIN"):
        candidates.append(wrap_pem(key, PKCS1_PRIVATE_KEY_LABEL))

    last_error: Exception | None = None
    for pem in candidates:
        try:
            private_key = serialization.load_pem_private_key(pem.encode("ascii"), password=None)
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            last_error = e
            continue

        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise SigningKeyError(
                f"La llave privada no es RSA ({type(private_key).__name__})"
            )
        return private_key

    logger.error(f"Llave privada RSA inválida: {type(last_error).__name__}")
    raise SigningKeyError("Llave privada RSA malformada") from last_error


__all__ = [
    "wrap_pem",
    "load_public_key",
    "load_rsa_private_key",
    "PEM_LINE_LENGTH",
]

# Fin del archivo backend/app/modules/payments/services/signing/keys.py
