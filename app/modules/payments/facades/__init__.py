# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/facades/__init__.py

Punto de entrada del paquete de fachadas del módulo Payments.

Diseño:
- Este __init__ NO realiza imports automáticos de submódulos.
- Cada facade se importa explícitamente desde su paquete:

      from app.modules.payments.facades.webhooks import process_payment_callback
      from app.modules.payments.facades.webhooks.verify import verify_callback
      from app.modules.payments.facades.status_sync import sync_pending_orders

Autor: OpenAero
Fecha: 2026-10-19
"""

__all__: list[str] = []

# Fin del archivo backend/app/modules/payments/facades/__init__.py
