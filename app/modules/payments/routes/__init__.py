# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/routes/__init__.py

Ensamblador de rutas REST del módulo Payments.

Incluye:
- /payments/webhooks/alipay
- /payments/webhooks/wechat
- /payments/metrics/prometheus

Autor: OpenAero
Fecha: 2026-10-19
"""

from fastapi import APIRouter

from .webhooks_alipay import router as webhooks_alipay_router
from .webhooks_wechat import router as webhooks_wechat_router
from .metrics import router as metrics_router

router = APIRouter()

# Prefijo común /payments para todas las rutas del módulo
router.include_router(webhooks_alipay_router, prefix="/payments")
router.include_router(webhooks_wechat_router, prefix="/payments")
router.include_router(metrics_router, prefix="/payments")

__all__ = ["router"]

# Fin del archivo backend/app/modules/payments/routes/__init__.py
