# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/signing/rsa_signature.py

Verificación y firma RSA2 (SHA256withRSA, PKCS#1 v1.5) estilo Alipay.

IMPORTANTE:
- Sin llave pública: fail-open SOLO con env=development (se loguea WARNING),
  fail-closed en cualquier otro entorno.
- Cualquier error de parseo/verificación de datos entrantes -> False.
  Nunca se propaga una excepción por un callback malformado.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import base64
import logging
from typing import Optional

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from app.modules.payments.enums import RuntimeEnvironment
from app.modules.payments.schemas import VerificationFailure, VerificationResult
from .keys import load_public_key, load_rsa_private_key

logger = logging.getLogger(__name__)


def check_rsa_signature(
    canonical: str,
    signature_b64: Optional[str],
    public_key_b64: Optional[str],
    env: RuntimeEnvironment | str = RuntimeEnvironment.PRODUCTION,
) -> VerificationResult:
    """
    Verifica una firma RSA2 sobre el string canónico.

    Args:
        canonical: String canónico (ver encode_canonical_params)
        signature_b64: Firma en base64 enviada por el gateway
        public_key_b64: Llave pública del gateway (base64 o PEM)
        env: Entorno de verificación (development/production)

    Returns:
        VerificationResult con el motivo del rechazo si aplica
    """
    environment = RuntimeEnvironment.coerce(env)

    if not public_key_b64:
        if environment is RuntimeEnvironment.DEVELOPMENT:
            logger.warning(
                "DESARROLLO: verificación RSA omitida, llave pública no configurada. "
                "Esto NUNCA debe ocurrir en producción."
            )
            return VerificationResult.ok(detail="development bypass: public key not configured")
        logger.error("Firma RSA rechazada: llave pública no configurada")
        return VerificationResult.fail(
            VerificationFailure.MISSING_KEY, "public key not configured"
        )

    try:
        public_key = load_public_key(public_key_b64)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.error(f"Firma RSA rechazada: llave pública malformada - {type(e).__name__}")
        return VerificationResult.fail(VerificationFailure.MALFORMED_KEY, "public key could not be parsed")

    if not isinstance(public_key, rsa.RSAPublicKey):
        logger.error(f"Firma RSA rechazada: la llave pública no es RSA ({type(public_key).__name__})")
        return VerificationResult.fail(
            VerificationFailure.UNSUPPORTED_ALGORITHM, "public key is not an RSA key"
        )

    if not signature_b64:
        logger.warning("Firma RSA rechazada: firma vacía")
        return VerificationResult.fail(VerificationFailure.MISSING_SIGNATURE)

    try:
        signature = base64.b64decode(signature_b64)
    except ValueError as e:
        logger.warning(f"Firma RSA rechazada: base64 inválido - {e}")
        return VerificationResult.fail(VerificationFailure.MALFORMED_SIGNATURE, "signature is not valid base64")

    try:
        public_key.verify(
            signature,
            canonical.encode("utf-8"),
            padding.PKCS1v15(),
            hashes.SHA256(),
        )
    except InvalidSignature:
        logger.warning("Firma RSA rechazada: la firma no coincide")
        return VerificationResult.fail(VerificationFailure.SIGNATURE_MISMATCH)
    except (ValueError, TypeError) as e:
        logger.warning(f"Firma RSA rechazada: error verificando - {e}")
        return VerificationResult.fail(VerificationFailure.MALFORMED_SIGNATURE, str(e))

    logger.debug("Firma RSA verificada correctamente")
    return VerificationResult.ok()


def verify_rsa_signature(
    canonical: str,
    signature_b64: Optional[str],
    public_key_b64: Optional[str],
    env: RuntimeEnvironment | str = RuntimeEnvironment.PRODUCTION,
) -> bool:
    """Variante booleana de check_rsa_signature."""
    return check_rsa_signature(canonical, signature_b64, public_key_b64, env).valid


def sign_rsa(canonical: str, private_key: str) -> str:
    """
    Firma el string canónico con la llave privada (SHA256withRSA).

    Returns:
        Firma en base64

    Raises:
        SigningKeyError: si la llave privada falta o está malformada
    """
    key = load_rsa_private_key(private_key)
    signature = key.sign(canonical.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256())
    return base64.b64encode(signature).decode("ascii")


__all__ = [
    "check_rsa_signature",
    "verify_rsa_signature",
    "sign_rsa",
]

# Fin del archivo backend/app/modules/payments/services/signing/rsa_signature.py
