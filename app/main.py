# -*- coding: utf-8 -*-
"""
backend/app/main.py

Punto de entrada principal del servicio de pagos de OpenAero.

Ajustes clave:
- .env cargado antes de leer configuración
- Logging configurado desde PaymentsSettings (plain / json)
- Ciclo de vida con log de la política de verificación de callbacks
- Health /health y rutas /payments/* vía app.routes

Autor: OpenAero
Fecha: 2026-10-19
"""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path

# ---------------------------------------------------------------------------
# Cargar .env ANTES de cualquier import que lea configuración
# En DEV: override=True para que .env mande sobre variables del entorno
# En PROD: override=False para respetar variables del entorno
# ---------------------------------------------------------------------------
from dotenv import load_dotenv

_ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
_ENVIRONMENT = os.getenv("ENVIRONMENT", "production").strip().strip('"').strip("'").lower()
_override_env = _ENVIRONMENT != "production"
load_dotenv(dotenv_path=_ENV_PATH, override=_override_env)

from fastapi import FastAPI
import uvicorn

from app import __version__
from app.shared.config import get_payments_settings, setup_logging
from app.modules.payments.services.gateway_queries import close_gateway_http_client
from app.modules.payments.services.webhooks import resolve_verification_environment
from app.routes import router

_settings = get_payments_settings()
setup_logging(_settings.log_level, _settings.log_format)
logger = logging.getLogger(__name__)

logger.info(f"[dotenv] Loaded {_ENV_PATH} (override={_override_env}, ENVIRONMENT={_ENVIRONMENT})")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # ────────── STARTUP ──────────
    settings = get_payments_settings()
    verification_env = resolve_verification_environment(settings)
    logger.info(
        f"🟢 Servicio de pagos iniciado (environment={settings.environment}, "
        f"verificación={verification_env.value})"
    )
    if not settings.alipay_public_key:
        logger.warning("⚠️ ALIPAY_PUBLIC_KEY no configurada: callbacks de Alipay serán rechazados")
    if not settings.wechat_api_key:
        logger.warning("⚠️ WECHAT_API_KEY no configurada: callbacks de WeChat serán rechazados")
    try:
        yield
    finally:
        # ────────── SHUTDOWN ──────────
        await close_gateway_http_client()
        logger.info("🔴 Servicio de pagos apagado.")


openapi_tags = [
    {"name": "payments:webhooks", "description": "Callbacks de Alipay y WeChat Pay"},
    {"name": "payments:metrics", "description": "Métricas Prometheus"},
]

app = FastAPI(
    title="OpenAero Payments API",
    description="Verificación y procesamiento de callbacks de pago",
    version=__version__,
    lifespan=lifespan,
    openapi_tags=openapi_tags,
)

app.include_router(router)


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=_ENVIRONMENT != "production",
    )

# Fin del archivo backend/app/main.py
