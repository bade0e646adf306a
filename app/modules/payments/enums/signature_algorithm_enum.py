# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/signature_algorithm_enum.py

Algoritmos de firma usados por los gateways.

- RSA-SHA256: Alipay "RSA2" (PKCS#1 v1.5 + SHA-256, firma en base64)
- MD5 / HMAC-SHA256: WeChat Pay v2 (hex en mayúsculas, secreto compartido)

Autor: OpenAero
Fecha: 2026-10-19
"""

from enum import StrEnum


class SignatureAlgorithm(StrEnum):
    """Algoritmo de firma de parámetros canónicos."""

    RSA_SHA256 = "RSA-SHA256"
    MD5 = "MD5"
    HMAC_SHA256 = "HMAC-SHA256"

    @property
    def is_shared_secret(self) -> bool:
        return self in (SignatureAlgorithm.MD5, SignatureAlgorithm.HMAC_SHA256)


__all__ = ["SignatureAlgorithm"]

# Fin del archivo backend/app/modules/payments/enums/signature_algorithm_enum.py
