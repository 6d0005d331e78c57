# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública de utilidades criptográficas del paquete core.
# --------------------------------------------------------------
"""Inicializa el paquete `core` y documenta sus módulos principales."""

__all__ = [
    "codec",
    "config",
    "crypto_asym",
    "crypto_kdf",
    "crypto_sign",
    "crypto_sym",
    "errors",
    "hybrid",
    "keystore",
    "models",
    "storage",
]
