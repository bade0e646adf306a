# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/webhooks/verify.py

Verificación de firma de callbacks por proveedor.

Cada función arma el string canónico según el proveedor, resuelve el
algoritmo declarado en el callback y delega en las primitivas de
services/signing. El entorno de verificación (fail-open de desarrollo)
se resuelve con la política de services/webhooks.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from app.modules.payments.enums import PaymentProvider, SignatureAlgorithm
from app.modules.payments.schemas import VerificationFailure, VerificationResult
from app.modules.payments.services.signing import (
    RSA_EXCLUDED_KEYS,
    SHARED_SECRET_EXCLUDED_KEYS,
    UnsupportedAlgorithmError,
    check_rsa_signature,
    check_shared_secret_signature,
    encode_canonical_params,
    resolve_signature_algorithm,
)
from app.modules.payments.services.webhooks import resolve_verification_environment
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

logger = logging.getLogger(__name__)


def _resolve_declared_algorithm(
    declared: Optional[str],
    default: SignatureAlgorithm,
) -> Optional[SignatureAlgorithm]:
    """Algoritmo declarado en sign_type, o None si no es soportado."""
    if not declared:
        return default
    try:
        return resolve_signature_algorithm(declared)
    except UnsupportedAlgorithmError:
        return None


def verify_alipay_callback(
    params: Mapping[str, Any],
    settings: Optional[PaymentsSettings] = None,
) -> VerificationResult:
    """Verifica la firma RSA2 de un callback de Alipay."""
    if settings is None:
        settings = get_payments_settings()

    signature = params.get("sign")
    if not signature:
        return VerificationResult.fail(VerificationFailure.MISSING_SIGNATURE)

    algorithm = _resolve_declared_algorithm(params.get("sign_type"), SignatureAlgorithm.RSA_SHA256)
    if algorithm is not SignatureAlgorithm.RSA_SHA256:
        logger.warning(f"Alipay callback con sign_type no soportado: {params.get('sign_type')!r}")
        return VerificationResult.fail(
            VerificationFailure.UNSUPPORTED_ALGORITHM,
            f"sign_type {params.get('sign_type')!r} is not RSA2",
        )

    canonical = encode_canonical_params(params, RSA_EXCLUDED_KEYS)
    if not canonical:
        return VerificationResult.fail(VerificationFailure.EMPTY_PAYLOAD)

    return check_rsa_signature(
        canonical,
        str(signature),
        settings.alipay_public_key,
        resolve_verification_environment(settings),
    )


def verify_wechat_callback(
    params: Mapping[str, Any],
    settings: Optional[PaymentsSettings] = None,
) -> VerificationResult:
    """Verifica la firma MD5 / HMAC-SHA256 de un callback de WeChat Pay v2."""
    if settings is None:
        settings = get_payments_settings()

    signature = params.get("sign")
    if not signature:
        return VerificationResult.fail(VerificationFailure.MISSING_SIGNATURE)

    algorithm = _resolve_declared_algorithm(params.get("sign_type"), SignatureAlgorithm.MD5)
    if algorithm is None or not algorithm.is_shared_secret:
        logger.warning(f"WeChat callback con sign_type no soportado: {params.get('sign_type')!r}")
        return VerificationResult.fail(
            VerificationFailure.UNSUPPORTED_ALGORITHM,
            f"sign_type {params.get('sign_type')!r} is not MD5 or HMAC-SHA256",
        )

    if not encode_canonical_params(params, SHARED_SECRET_EXCLUDED_KEYS):
        return VerificationResult.fail(VerificationFailure.EMPTY_PAYLOAD)

    return check_shared_secret_signature(
        params,
        str(signature),
        settings.wechat_api_key,
        resolve_verification_environment(settings),
        algorithm=algorithm,
    )


def verify_callback(
    provider: PaymentProvider | str,
    params: Mapping[str, Any],
    settings: Optional[PaymentsSettings] = None,
) -> VerificationResult:
    """
    Despacha la verificación según el proveedor.

    Raises:
        ValueError: proveedor desconocido
    """
    provider = PaymentProvider(provider)
    if provider is PaymentProvider.ALIPAY:
        return verify_alipay_callback(params, settings)
    if provider is PaymentProvider.WECHAT:
        return verify_wechat_callback(params, settings)
    raise ValueError(f"Proveedor no soportado: {provider}")


__all__ = [
    "verify_alipay_callback",
    "verify_wechat_callback",
    "verify_callback",
]

# Fin del archivo backend/app/modules/payments/facades/webhooks/verify.py
