# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/signing/canonical.py

Codificador canónico de parámetros para firmas de gateways.

Reglas compartidas por Alipay y WeChat Pay v2:
- Se excluyen las llaves de firma (sign, sign_type según proveedor)
- Se omiten valores vacíos ("") o ausentes (None)
- Orden ascendente por code point de la llave
- Unión "k1=v1&k2=v2" sin URL-encoding

Autor: OpenAero
Fecha: 2026-10-19
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

# Llaves excluidas por familia de proveedor
RSA_EXCLUDED_KEYS = frozenset({"sign", "sign_type"})
SHARED_SECRET_EXCLUDED_KEYS = frozenset({"sign"})


def encode_canonical_params(
    params: Mapping[str, Any],
    exclude_keys: Iterable[str] = SHARED_SECRET_EXCLUDED_KEYS,
) -> str:
    """
    Construye el string canónico determinista a firmar.

    Args:
        params: Parámetros planos del callback o de la solicitud
        exclude_keys: Llaves a excluir (además de las de valor vacío)

    Returns:
        "k1=v1&k2=v2..." o "" si no queda nada que firmar
    """
    excluded = frozenset(exclude_keys)
    items = sorted(
        (key, str(value))
        for key, value in params.items()
        if key not in excluded and value is not None and value != ""
    )
    return "&".join(f"{key}={value}" for key, value in items)


__all__ = [
    "encode_canonical_params",
    "RSA_EXCLUDED_KEYS",
    "SHARED_SECRET_EXCLUDED_KEYS",
]

# Fin del archivo backend/app/modules/payments/services/signing/canonical.py
