# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/schemas/verification_schemas.py

Resultado de verificación de firma de un callback.

Se construye por llamada y no se retiene: valid + razón de diagnóstico
para logs y métricas. El handler del webhook solo ramifica por `valid`.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class VerificationFailure(StrEnum):
    """Motivo por el que una firma no se considera válida."""

    MISSING_SIGNATURE = "missing_signature"
    MISSING_KEY = "missing_key"
    MALFORMED_KEY = "malformed_key"
    MALFORMED_SIGNATURE = "malformed_signature"
    SIGNATURE_MISMATCH = "signature_mismatch"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    EMPTY_PAYLOAD = "empty_payload"


class VerificationResult(BaseModel):
    """Resultado booleano de verificación con detalle opcional."""

    model_config = ConfigDict(frozen=True)

    valid: bool = Field(description="¿La firma es válida (o el bypass de desarrollo aplica)?")
    reason: Optional[VerificationFailure] = Field(
        default=None,
        description="Motivo del rechazo cuando valid=False"
    )
    detail: Optional[str] = Field(
        default=None,
        description="Detalle legible para logs (nunca incluye material de llaves)"
    )

    @classmethod
    def ok(cls, detail: Optional[str] = None) -> "VerificationResult":
        return cls(valid=True, detail=detail)

    @classmethod
    def fail(cls, reason: VerificationFailure, detail: Optional[str] = None) -> "VerificationResult":
        return cls(valid=False, reason=reason, detail=detail)

    def __bool__(self) -> bool:
        return self.valid


__all__ = ["VerificationFailure", "VerificationResult"]

# Fin del archivo backend/app/modules/payments/schemas/verification_schemas.py
