# -*- coding: utf-8 -*-
"""
backend/app/routes/__init__.py

Ensamblador principal de ruteadores de la API.

Responsabilidades:
- Incluir el router de health (/health).
- Incluir las rutas del módulo Payments (/payments/...).

Autor: OpenAero
Fecha: 2026-10-19
"""

from fastapi import APIRouter

from app.modules.payments.routes import router as payments_router

from .health_routes import router as health_router

router = APIRouter()

# Health check sin prefijo adicional
router.include_router(health_router)
router.include_router(payments_router)

__all__ = ["router"]

# Fin del archivo backend/app/routes/__init__.py
