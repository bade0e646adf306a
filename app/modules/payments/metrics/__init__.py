# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/metrics/__init__.py

Métricas Prometheus de callbacks de pago.

Autor: OpenAero
Fecha: 2026-10-19
"""

from .exporters.prometheus_exporter import (
    registry,
    render_prometheus_metrics,
    observe_callback_received,
    observe_callback_verified,
    observe_callback_outcome,
    observe_callback_rejected,
    observe_amount_mismatch,
)

__all__ = [
    "registry",
    "render_prometheus_metrics",
    "observe_callback_received",
    "observe_callback_verified",
    "observe_callback_outcome",
    "observe_callback_rejected",
    "observe_amount_mismatch",
]

# Fin del archivo backend/app/modules/payments/metrics/__init__.py
