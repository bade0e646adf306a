# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/exporters/prometheus_exporter.py

Exporter Prometheus para callbacks de pago.
Expone métricas en formato Prometheus desde un registro propio.

Autor: OpenAero
Fecha: 2026-10-19
"""

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
import logging

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
# Registro de Prometheus del módulo
# --------------------------------------------------------------------------
registry = CollectorRegistry()

# --------------------------------------------------------------------------
# Definición de métricas
# --------------------------------------------------------------------------
CALLBACKS_RECEIVED_TOTAL = Counter(
    "payments_callback_received_total",
    "Total callbacks recibidos por proveedor",
    ["provider"],
    registry=registry,
)

# Verificación de firma separada del outcome de negocio
CALLBACKS_VERIFIED_TOTAL = Counter(
    "payments_callback_verified_total",
    "Total callbacks por resultado de verificación de firma",
    ["provider", "result"],  # result: success/failure
    registry=registry,
)
CALLBACKS_OUTCOME_TOTAL = Counter(
    "payments_callback_outcome_total",
    "Total callbacks por outcome de negocio",
    ["provider", "outcome"],  # outcome: paid/failed/duplicate/ignored/rejected/error
    registry=registry,
)
CALLBACKS_REJECTED_TOTAL = Counter(
    "payments_callback_rejected_total",
    "Total callbacks rechazados por proveedor y razón",
    ["provider", "reason"],
    registry=registry,
)
CALLBACKS_PROCESSING_SECONDS = Histogram(
    "payments_callback_processing_seconds",
    "Latencia del handler de callbacks (segundos)",
    ["provider"],
    registry=registry,
)
CALLBACK_AMOUNT_MISMATCH_TOTAL = Counter(
    "payments_callback_amount_mismatch_total",
    "Callbacks con firma válida cuyo monto no coincide con la orden",
    ["provider"],
    registry=registry,
)

# --------------------------------------------------------------------------
# Funciones auxiliares
# --------------------------------------------------------------------------
def render_prometheus_metrics() -> bytes:
    """
    Genera la salida actual de las métricas en formato Prometheus.
    """
    return generate_latest(registry)


def observe_callback_received(provider: str):
    """Registra recepción de un callback."""
    CALLBACKS_RECEIVED_TOTAL.labels(provider=provider).inc()


def observe_callback_verified(provider: str, verification_result: str, duration: float):
    """
    Registra resultado de verificación del callback.

    Args:
        provider: alipay/wechat
        verification_result: success/failure (solo verificación de firma)
        duration: Tiempo de procesamiento en segundos
    """
    CALLBACKS_VERIFIED_TOTAL.labels(provider=provider, result=verification_result).inc()
    CALLBACKS_PROCESSING_SECONDS.labels(provider=provider).observe(duration)
    logger.debug(f"[Prometheus] Callback {provider} verified={verification_result} duration={duration:.4f}s")


def observe_callback_outcome(provider: str, outcome: str):
    """Registra outcome de negocio del callback."""
    CALLBACKS_OUTCOME_TOTAL.labels(provider=provider, outcome=outcome).inc()
    logger.debug(f"[Prometheus] Callback {provider} outcome={outcome}")


def observe_callback_rejected(provider: str, reason: str):
    """
    Registra callback rechazado.

    Args:
        provider: alipay/wechat
        reason: invalid_signature/amount_mismatch/malformed_payload/...
    """
    CALLBACKS_REJECTED_TOTAL.labels(provider=provider, reason=reason).inc()
    logger.debug(f"[Prometheus] Callback {provider} rejected reason={reason}")


def observe_amount_mismatch(provider: str):
    """Registra mismatch de monto."""
    CALLBACK_AMOUNT_MISMATCH_TOTAL.labels(provider=provider).inc()
    logger.warning(f"[Prometheus] Amount mismatch detected for {provider}")


__all__ = [
    "registry",
    "CONTENT_TYPE_LATEST",
    "render_prometheus_metrics",
    "observe_callback_received",
    "observe_callback_verified",
    "observe_callback_outcome",
    "observe_callback_rejected",
    "observe_amount_mismatch",
]

# Fin del archivo backend/app/modules/payments/metrics/exporters/prometheus_exporter.py
