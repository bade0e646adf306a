# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/signing/shared_secret.py

Firmas con secreto compartido estilo WeChat Pay v2.

    stringSignTemp = canonical(params sin "sign") + "&key=" + api_key
    sign = MD5(stringSignTemp).hex().upper()
    # o bien HMAC-SHA256(api_key, stringSignTemp).hex().upper()

La comparación contra la firma recibida es de tiempo constante
(hmac.compare_digest) y sensible a mayúsculas.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Any, Mapping, Optional

from app.modules.payments.enums import RuntimeEnvironment, SignatureAlgorithm
from app.modules.payments.schemas import VerificationFailure, VerificationResult
from .algorithms import resolve_signature_algorithm
from .canonical import SHARED_SECRET_EXCLUDED_KEYS, encode_canonical_params
from .errors import UnsupportedAlgorithmError

logger = logging.getLogger(__name__)


def compute_shared_secret_signature(
    params: Mapping[str, Any],
    secret: str,
    algorithm: SignatureAlgorithm | str = SignatureAlgorithm.MD5,
) -> str:
    """
    Calcula la firma hex en mayúsculas de los parámetros.

    Raises:
        UnsupportedAlgorithmError: si el algoritmo no es MD5 ni HMAC-SHA256
    """
    algo = resolve_signature_algorithm(algorithm)
    canonical = encode_canonical_params(params, SHARED_SECRET_EXCLUDED_KEYS)
    payload = f"{canonical}&key={secret}".encode("utf-8")

    if algo is SignatureAlgorithm.MD5:
        digest = hashlib.md5(payload).hexdigest()
    elif algo is SignatureAlgorithm.HMAC_SHA256:
        digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    else:
        raise UnsupportedAlgorithmError(f"Algoritmo de secreto compartido no soportado: {algorithm}")

    return digest.upper()


def check_shared_secret_signature(
    params: Mapping[str, Any],
    submitted_signature: Optional[str],
    shared_secret: Optional[str],
    env: RuntimeEnvironment | str = RuntimeEnvironment.PRODUCTION,
    *,
    algorithm: SignatureAlgorithm | str = SignatureAlgorithm.MD5,
) -> VerificationResult:
    """
    Verifica la firma de un callback con secreto compartido.

    Args:
        params: Parámetros planos del callback (puede incluir "sign")
        submitted_signature: Firma recibida
        shared_secret: API key del comercio
        env: Entorno de verificación (development/production)
        algorithm: MD5 (default) o HMAC-SHA256

    Returns:
        VerificationResult con el motivo del rechazo si aplica
    """
    environment = RuntimeEnvironment.coerce(env)

    if not shared_secret:
        if environment is RuntimeEnvironment.DEVELOPMENT:
            logger.warning(
                "DESARROLLO: verificación de secreto compartido omitida, API key no configurada. "
                "Esto NUNCA debe ocurrir en producción."
            )
            return VerificationResult.ok(detail="development bypass: shared secret not configured")
        logger.error("Firma rechazada: secreto compartido no configurado")
        return VerificationResult.fail(
            VerificationFailure.MISSING_KEY, "shared secret not configured"
        )

    if not submitted_signature:
        logger.warning("Firma rechazada: firma vacía")
        return VerificationResult.fail(VerificationFailure.MISSING_SIGNATURE)

    try:
        expected = compute_shared_secret_signature(params, shared_secret, algorithm)
    except UnsupportedAlgorithmError as e:
        logger.warning(f"Firma rechazada: {e}")
        return VerificationResult.fail(VerificationFailure.UNSUPPORTED_ALGORITHM, str(e))
    except UnicodeEncodeError as e:
        logger.warning(f"Firma rechazada: parámetros no codificables en UTF-8 - {e}")
        return VerificationResult.fail(VerificationFailure.SIGNATURE_MISMATCH, "payload is not valid UTF-8")

    submitted = submitted_signature.encode("utf-8", "surrogatepass")
    if not hmac.compare_digest(expected.encode("ascii"), submitted):
        logger.warning("Firma rechazada: la firma no coincide")
        return VerificationResult.fail(VerificationFailure.SIGNATURE_MISMATCH)

    logger.debug("Firma de secreto compartido verificada correctamente")
    return VerificationResult.ok()


def verify_shared_secret_signature(
    params: Mapping[str, Any],
    submitted_signature: Optional[str],
    shared_secret: Optional[str],
    env: RuntimeEnvironment | str = RuntimeEnvironment.PRODUCTION,
    *,
    algorithm: SignatureAlgorithm | str = SignatureAlgorithm.MD5,
) -> bool:
    """Variante booleana de check_shared_secret_signature."""
    return check_shared_secret_signature(
        params, submitted_signature, shared_secret, env, algorithm=algorithm
    ).valid


__all__ = [
    "compute_shared_secret_signature",
    "check_shared_secret_signature",
    "verify_shared_secret_signature",
]

# Fin del archivo backend/app/modules/payments/services/signing/shared_secret.py
