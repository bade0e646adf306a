# -*- coding: utf-8 -*-
"""
backend/app/shared/config/__init__.py

Entry-point ligero para configuración.

Expone imports estables:
    from app.shared.config import get_payments_settings, setup_logging

No inicializa settings en import-time para evitar efectos colaterales
durante la recolección de tests.
"""

from .settings_payments import (
    PaymentsSettings,
    get_payments_settings,
    reset_payments_settings,
)
from .logging_config import setup_logging

__all__ = [
    "PaymentsSettings",
    "get_payments_settings",
    "reset_payments_settings",
    "setup_logging",
]
# Fin del archivo backend/app/shared/config/__init__.py
