# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/__init__.py

Módulo de pagos de OpenAero.

Este módulo gestiona:
- Verificación de firmas de callbacks (Alipay RSA2, WeChat Pay v2 MD5/HMAC-SHA256)
- Conciliación de montos reportados contra la orden
- Transición idempotente de órdenes a partir de callbacks
- Consulta de estado en los gateways y sincronización de órdenes pendientes

Estructura:
- enums: Tipos de datos (PaymentProvider, PaymentStatus, SignatureAlgorithm, etc.)
- schemas: Resultados Pydantic (VerificationResult, CallbackOutcome)
- services: Primitivas puras (signing, reconciliation, webhooks)
- repositories: Acceso a órdenes
- facades: Funciones de alto nivel (API pública)
- routes: Endpoints HTTP

Autor: OpenAero
Fecha: 2026-10-19
"""

# ===== ENUMS =====
from .enums import (
    AmountUnit,
    PaymentProvider,
    PaymentStatus,
    RuntimeEnvironment,
    SignatureAlgorithm,
)

# ===== SCHEMAS =====
from .schemas import (
    VerificationFailure,
    VerificationResult,
    CallbackOutcome,
    CallbackOutcomeType,
    CallbackRejection,
)

# ===== SERVICES =====
from .services.signing import (
    encode_canonical_params,
    verify_rsa_signature,
    verify_shared_secret_signature,
    sign_params,
    SigningKeyError,
    UnsupportedAlgorithmError,
)
from .services.reconciliation import verify_amount, validate_checkout_amount

# ===== FACADES =====
from .facades.webhooks import (
    verify_alipay_callback,
    verify_wechat_callback,
    verify_callback,
    process_payment_callback,
)
from .facades.status_sync import (
    sync_order_status,
    sync_pending_orders,
)

__all__ = [
    # Enums
    "AmountUnit",
    "PaymentProvider",
    "PaymentStatus",
    "RuntimeEnvironment",
    "SignatureAlgorithm",
    # Schemas
    "VerificationFailure",
    "VerificationResult",
    "CallbackOutcome",
    "CallbackOutcomeType",
    "CallbackRejection",
    # Services
    "encode_canonical_params",
    "verify_rsa_signature",
    "verify_shared_secret_signature",
    "sign_params",
    "SigningKeyError",
    "UnsupportedAlgorithmError",
    "verify_amount",
    "validate_checkout_amount",
    # Facades
    "verify_alipay_callback",
    "verify_wechat_callback",
    "verify_callback",
    "process_payment_callback",
    "sync_order_status",
    "sync_pending_orders",
]

# Fin del archivo backend/app/modules/payments/__init__.py
