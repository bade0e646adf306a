# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Inicializador del paquete principal 'app' del backend OpenAero.

Permite que los módulos internos puedan importarse como 'app.*'
cuando la raíz del repositorio se incluye en PYTHONPATH.

Autor: OpenAero
Fecha: 2026-10-19
"""

__version__ = "0.1.0"

# Fin del archivo backend/app/__init__.py
