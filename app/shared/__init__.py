# app/shared/__init__.py
"""
Infraestructura compartida (configuración y logging) del backend OpenAero.
"""
# fin del archivo
