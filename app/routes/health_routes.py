# -*- coding: utf-8 -*-
"""
backend/app/routes/health_routes.py

Endpoint básico de health check del servicio de pagos.

Autor: OpenAero
Fecha: 2026-10-19
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app import __version__
from app.shared.config.settings_payments import PaymentsSettings, get_payments_settings

router = APIRouter()


@router.get(
    "/health",
    summary="Health check del servicio",
    description="Devuelve el estado básico del servicio de callbacks de pago.",
)
async def health_check(
    settings: PaymentsSettings = Depends(get_payments_settings),
) -> dict:
    """
    Health check básico (liveness).

    Returns:
        dict: información mínima de estado de la aplicación.
    """
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
        "service": {
            "name": "openaero-payments",
            "version": __version__,
        },
    }

# Fin del archivo backend/app/routes/health_routes.py
