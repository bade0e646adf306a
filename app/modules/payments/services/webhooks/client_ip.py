# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/webhooks/client_ip.py

Extracción de IP del cliente para logs de callbacks.

Los headers de proxy (X-Forwarded-For, X-Real-IP) solo se consideran con
trust_proxy_headers=True y únicamente si contienen una IP válida; en otro
caso se usa la IP directa del socket.

Autor: OpenAero
Fecha: 2026-10-19
"""
from __future__ import annotations

import ipaddress
import logging
from typing import Optional

from starlette.requests import Request

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT_IP = "unknown"


def _valid_ip(candidate: Optional[str]) -> Optional[str]:
    """Normaliza la IP candidata; None si no es IPv4/IPv6 válida."""
    if not candidate:
        return None
    try:
        return str(ipaddress.ip_address(candidate.strip()))
    except ValueError:
        return None


def get_client_ip(request: Request, trust_proxy_headers: bool = False) -> str:
    """
    Extrae la IP del cliente.

    Si trust_proxy_headers:
        1. X-Forwarded-For (primer valor, cliente original)
        2. X-Real-IP
    Siempre como fallback: request.client.host

    Returns:
        IP del cliente como string, o "unknown" si no se puede determinar
    """
    if trust_proxy_headers:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            client_ip = _valid_ip(forwarded.split(",")[0])
            if client_ip:
                return client_ip
            logger.warning("X-Forwarded-For con IP inválida; se ignora")

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            client_ip = _valid_ip(real_ip)
            if client_ip:
                return client_ip
            logger.warning("X-Real-IP con IP inválida; se ignora")

    if request.client and request.client.host:
        return request.client.host

    return UNKNOWN_CLIENT_IP


__all__ = ["get_client_ip"]

# Fin del archivo backend/app/modules/payments/services/webhooks/client_ip.py
