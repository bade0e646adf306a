# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/__init__.py

Servicios del módulo Payments.

Subpaquetes:
- signing: codificación canónica, verificación y firma
- reconciliation: conciliación de montos
- webhooks: política de verificación, XML WeChat, sanitización
- gateway_requests: solicitudes salientes firmadas
- gateway_queries: envío de consultas de estado y verificación de respuestas

Se importan explícitamente desde cada subpaquete.

Autor: OpenAero
Fecha: 2026-10-19
"""

__all__: list[str] = []

# Fin del archivo backend/app/modules/payments/services/__init__.py
