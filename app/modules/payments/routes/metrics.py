# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/metrics.py

Exposición de métricas de pagos para scraping de Prometheus.

Endpoint:
- GET /payments/metrics/prometheus

Autor: OpenAero
Fecha: 2026-10-19
"""

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST

from app.modules.payments.metrics import render_prometheus_metrics

router = APIRouter(prefix="/metrics", tags=["payments:metrics"])


@router.get("/prometheus")
async def prometheus_metrics() -> Response:
    """Devuelve las métricas en formato Prometheus."""
    return Response(content=render_prometheus_metrics(), media_type=CONTENT_TYPE_LATEST)


# Fin del archivo backend/app/modules/payments/routes/metrics.py
