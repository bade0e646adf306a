# -*- coding: utf-8 -*-
"""
backend/app/modules/payments/services/signing/errors.py

Errores de firma saliente.

Solo la firma de solicitudes salientes lanza excepciones: una llave rota
es un bug de despliegue que el operador debe corregir. La verificación de
callbacks entrantes nunca lanza (retorna False).

Autor: OpenAero
Fecha: 2026-10-19
"""


class SigningKeyError(ValueError):
    """Llave privada / secreto ausente o malformado al firmar."""
    pass


class UnsupportedAlgorithmError(ValueError):
    """Algoritmo de firma no soportado."""
    pass


__all__ = ["SigningKeyError", "UnsupportedAlgorithmError"]

# Fin del archivo backend/app/modules/payments/services/signing/errors.py
