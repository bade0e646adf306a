# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/__init__.py

Servicios relacionados con callbacks de pagos.

Autor: OpenAero
Fecha: 2026-10-19
"""

from .verification_policy import (
    allow_insecure_callbacks,
    is_development_environment,
    resolve_verification_environment,
)
from .wechat_xml import (
    WechatXmlError,
    parse_wechat_xml,
    render_wechat_xml,
    build_wechat_ack,
)
from .payload_sanitizer import (
    sanitize_callback_params,
    compute_payload_hash,
    SIGNATURE_FIELDS,
    PII_FIELDS,
)
from .client_ip import get_client_ip

__all__ = [
    # Política de verificación
    "allow_insecure_callbacks",
    "is_development_environment",
    "resolve_verification_environment",

    # XML WeChat
    "WechatXmlError",
    "parse_wechat_xml",
    "render_wechat_xml",
    "build_wechat_ack",

    # Sanitización
    "sanitize_callback_params",
    "compute_payload_hash",
    "SIGNATURE_FIELDS",
    "PII_FIELDS",

    "get_client_ip",
]

# Fin del archivo backend/app/modules/payments/services/webhooks/__init__.py
