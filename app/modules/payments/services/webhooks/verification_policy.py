# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/verification_policy.py

Política del bypass inseguro de verificación de callbacks.

REGLAS:
1. PAYMENTS_ALLOW_INSECURE_WEBHOOKS debe ser "true" (flag explícito)
2. ADEMÁS, ENVIRONMENT debe ser de desarrollo (development/dev/local)
3. PYTHON_ENV=test nunca permite bypass (los tests son fail-closed)

Si se cumplen las tres, los verificadores corren con env=development y
aceptan callbacks cuando la llave no está configurada. En cualquier otro
caso corren con env=production (fail-closed).

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import Optional

from app.modules.payments.enums import RuntimeEnvironment
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

logger = logging.getLogger(__name__)

DEVELOPMENT_ENVIRONMENTS = frozenset({"development", "dev", "local"})


def is_development_environment(settings: Optional[PaymentsSettings] = None) -> bool:
    """
    Verifica si estamos en entorno de desarrollo.

    NOTA: "test" NO es desarrollo.
    """
    if settings is None:
        settings = get_payments_settings()
    return settings.environment in DEVELOPMENT_ENVIRONMENTS


def allow_insecure_callbacks(settings: Optional[PaymentsSettings] = None) -> bool:
    """Determina si se permite el fail-open de verificación de firmas."""
    if settings is None:
        settings = get_payments_settings()

    if settings.python_env == "test":
        return False

    allow_flag = settings.payments_allow_insecure_webhooks
    is_dev = is_development_environment(settings)

    if allow_flag and not is_dev:
        logger.error(
            "SECURITY VIOLATION: PAYMENTS_ALLOW_INSECURE_WEBHOOKS=true en entorno "
            f"no-desarrollo ({settings.environment}). Ignorando flag y forzando verificación real."
        )
        return False

    if allow_flag and is_dev:
        logger.warning(
            "DESARROLLO: callbacks sin llave configurada serán aceptados. "
            "Esto NUNCA debe ocurrir en producción."
        )
        return True

    return False


def resolve_verification_environment(
    settings: Optional[PaymentsSettings] = None,
) -> RuntimeEnvironment:
    """Entorno con el que se invocan los verificadores de firma."""
    if allow_insecure_callbacks(settings):
        return RuntimeEnvironment.DEVELOPMENT
    return RuntimeEnvironment.PRODUCTION


__all__ = [
    "is_development_environment",
    "allow_insecure_callbacks",
    "resolve_verification_environment",
    "DEVELOPMENT_ENVIRONMENTS",
]

# Fin del archivo backend/app/modules/payments/services/webhooks/verification_policy.py
