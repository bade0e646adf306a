# -*- coding: utf-8 -*-
"""
backend/app/shared/config/settings_payments.py

Configuración de pagos para OpenAero (Alipay RSA2 y WeChat Pay v2).

Descripción:
    Centraliza llaves de proveedores, política de verificación de webhooks
    y tolerancias de conciliación de montos.

    Las llaves se aceptan en PEM completo o en base64 "desnudo" (el formato
    que entregan las consolas de Alipay); el módulo de firmas se encarga de
    envolverlas.

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaymentsSettings(BaseSettings):
    """Configuración del sistema de pagos."""

    # =========================================================================
    # ENTORNO
    # =========================================================================

    environment: str = Field(
        default="production",
        description="Entorno de ejecución: development, production (default fail-closed)"
    )

    python_env: str = Field(
        default="production",
        description="PYTHON_ENV=test desactiva cualquier bypass de firmas"
    )

    payments_allow_insecure_webhooks: bool = Field(
        default=False,
        description="Permite callbacks sin llave configurada (SOLO DESARROLLO)"
    )

    trust_proxy_headers: bool = Field(
        default=False,
        description="Confiar en X-Forwarded-For / X-Real-IP para la IP de callbacks"
    )

    # =========================================================================
    # ALIPAY (RSA2)
    # =========================================================================

    alipay_app_id: Optional[str] = Field(
        default=None,
        description="App ID de Alipay Open Platform"
    )

    alipay_public_key: Optional[str] = Field(
        default=None,
        description="Llave pública de Alipay para verificar callbacks (PEM o base64)"
    )

    alipay_private_key: Optional[str] = Field(
        default=None,
        description="Llave privada de la app para firmar solicitudes salientes (PEM o base64)"
    )

    alipay_gateway_url: str = Field(
        default="https://openapi.alipay.com/gateway.do",
        description="URL del gateway de Alipay"
    )

    # =========================================================================
    # WECHAT PAY (v2, secreto compartido)
    # =========================================================================

    wechat_app_id: Optional[str] = Field(
        default=None,
        description="AppID vinculado al comercio"
    )

    wechat_mch_id: Optional[str] = Field(
        default=None,
        description="ID de comercio (mch_id)"
    )

    wechat_api_key: Optional[str] = Field(
        default=None,
        description="API key v2 del comercio (secreto compartido)"
    )

    wechat_sign_type: str = Field(
        default="MD5",
        description="Algoritmo para solicitudes salientes: MD5 o HMAC-SHA256"
    )

    wechat_order_query_url: str = Field(
        default="https://api.mch.weixin.qq.com/pay/orderquery",
        description="URL de consulta de orden de WeChat Pay v2"
    )

    # =========================================================================
    # CONSULTA / SINCRONIZACIÓN DE ESTADO
    # =========================================================================

    payments_gateway_timeout_seconds: float = Field(
        default=10.0,
        description="Timeout de lectura para consultas a los gateways"
    )

    payments_sync_batch_limit: int = Field(
        default=50,
        description="Máximo de órdenes pendientes consultadas por lote"
    )

    payments_sync_max_age_hours: int = Field(
        default=24,
        description="Solo se sincronizan órdenes creadas en esta ventana"
    )

    # =========================================================================
    # CONCILIACIÓN
    # =========================================================================

    payments_amount_tolerance: Decimal = Field(
        default=Decimal("0.01"),
        description="Tolerancia absoluta (unidades mayores) al comparar montos"
    )

    # =========================================================================
    # LOGGING
    # =========================================================================

    log_level: str = Field(default="INFO", description="Nivel de logging")
    log_format: str = Field(default="plain", description="plain, pretty o json")

    @field_validator("environment", "python_env", mode="before")
    @classmethod
    def _normalize_env_name(cls, v: Optional[str]) -> str:
        """Normaliza nombres de entorno (comillas, espacios, mayúsculas)."""
        if not v:
            return "production"
        return str(v).strip().strip('"').strip("'").lower()

    @field_validator("wechat_sign_type", mode="before")
    @classmethod
    def _normalize_sign_type(cls, v: Optional[str]) -> str:
        if not v:
            return "MD5"
        return str(v).strip().upper()

    # =========================================================================
    # CONFIGURACIÓN DE PYDANTIC
    # =========================================================================

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton global
_payments_settings: Optional[PaymentsSettings] = None


def get_payments_settings() -> PaymentsSettings:
    """
    Obtiene la instancia global de configuración de pagos.

    Returns:
        PaymentsSettings: Configuración de pagos
    """
    global _payments_settings
    if _payments_settings is None:
        _payments_settings = PaymentsSettings()
    return _payments_settings


def reset_payments_settings() -> None:
    """Descarta la instancia cacheada (útil para tests)."""
    global _payments_settings
    _payments_settings = None


__all__ = [
    "PaymentsSettings",
    "get_payments_settings",
    "reset_payments_settings",
]
# Fin del archivo backend/app/shared/config/settings_payments.py
