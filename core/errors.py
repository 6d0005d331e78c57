# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones de la capa criptográfica híbrida.
# --------------------------------------------------------------
"""Excepciones tipadas que distinguen cada fallo del protocolo híbrido.

Ningún fallo de descifrado o autenticación es reintentable: las mismas
entradas fallan siempre igual. Los reintentos solo tienen sentido alrededor
del transporte del mensaje, nunca alrededor del paso criptográfico.
"""


class CryptoError(Exception):
    """Error base de todas las operaciones criptográficas del paquete."""


class KeyGenError(CryptoError):
    """Fallo al generar material de claves (entropía o backend)."""


class EncryptError(CryptoError):
    """Clave o nonce con longitud inválida al cifrar."""


class AuthenticationError(CryptoError):
    """La etiqueta AES-GCM no verifica: clave, nonce o ciphertext incorrectos."""


class DecryptError(CryptoError):
    """Fallo de padding RSA-OAEP o clave privada que no corresponde."""


class PayloadTooLarge(CryptoError):
    """El dato supera el máximo cifrable con RSA-OAEP para el módulo dado."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(
            f"El payload RSA ocupa {size} bytes y el máximo admitido es {limit}."
        )
        self.size = size
        self.limit = limit


class SignatureMismatch(CryptoError):
    """La firma del remitente no verifica o no se ha enviado."""


class KeyFormatError(CryptoError):
    """Clave en Base64/PEM que no puede interpretarse."""


class MessageFormatError(CryptoError):
    """Mensaje seguro con JSON o campos Base64 inválidos."""


class KeyStoreError(CryptoError):
    """Material de claves ausente o acceso privado no permitido."""
