# --------------------------------------------------------------
# File: codec.py
# Description: Codificación Base64 estándar compartida con los pares Go y Dart.
# --------------------------------------------------------------
"""Utilidades Base64 con alfabeto estándar y relleno, como en el formato de red."""

import base64


def b64e(data: bytes) -> str:
    """Codifica datos binarios en Base64 estándar con relleno."""

    return base64.b64encode(data).decode("ascii")


def b64d(value: str) -> bytes:
    """Decodifica Base64 estándar de forma estricta.

    Args:
        value (str): Cadena codificada; se ignoran espacios y saltos de línea
            exteriores.

    Returns:
        bytes: Datos originales.

    Raises:
        ValueError: Si la cadena contiene caracteres fuera del alfabeto o
            un relleno incorrecto.

    """

    return base64.b64decode(value.strip(), validate=True)
