# --------------------------------------------------------------
# File: __init__.py
# Description: Servicios de backend/cliente y flujo de interoperabilidad.
# --------------------------------------------------------------
"""Inicializa el paquete `api` que orquesta las primitivas de `core`."""

__all__ = ["interop", "services"]
