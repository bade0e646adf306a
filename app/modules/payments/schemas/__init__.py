# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/__init__.py

Superficie de exportación de esquemas Pydantic del módulo Payments.

Autor: OpenAero
Fecha: 2026-10-19
"""

from .verification_schemas import VerificationFailure, VerificationResult
from .callback_schemas import CallbackOutcome, CallbackOutcomeType, CallbackRejection

__all__ = [
    "VerificationFailure",
    "VerificationResult",
    "CallbackOutcome",
    "CallbackOutcomeType",
    "CallbackRejection",
]

# Fin del archivo backend/app/modules/payments/schemas/__init__.py
