# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/enums/runtime_environment_enum.py

Entorno bajo el que corre la verificación de firmas.

Solo DEVELOPMENT habilita el fail-open cuando falta la llave;
cualquier otro valor se trata como PRODUCTION (fail-closed).

Autor: OpenAero
Fecha: 2026-10-19
"""

from enum import StrEnum


class RuntimeEnvironment(StrEnum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @classmethod
    def coerce(cls, value: "RuntimeEnvironment | str | None") -> "RuntimeEnvironment":
        """Convierte un string a enum; valores desconocidos -> PRODUCTION."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().lower() == cls.DEVELOPMENT.value:
            return cls.DEVELOPMENT
        return cls.PRODUCTION


__all__ = ["RuntimeEnvironment"]

# Fin del archivo backend/app/modules/payments/enums/runtime_environment_enum.py
