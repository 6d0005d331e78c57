# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-GCM para cifrado y descifrado simétrico seguro.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico con clave y nonce explícitos.

El ciphertext producido es ``datos_cifrados || etiqueta(16)``, el mismo
formato que ``cipher.AEAD.Seal`` en Go y ``AES-GCM`` en Dart, por lo que los
tres entornos intercambian el campo ``payload`` sin transformaciones.
"""

import logging
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from core.errors import AuthenticationError, EncryptError, KeyGenError

logger = logging.getLogger(__name__)

KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16
VALID_KEY_SIZES = (16, 24, 32)


def generate_symmetric_key(size: int = KEY_SIZE) -> bytes:
    """Genera bytes aleatorios criptográficamente seguros.

    Args:
        size (int): Longitud solicitada en bytes (32 para AES-256).

    Returns:
        bytes: Clave simétrica de un solo uso.

    Raises:
        KeyGenError: Si la longitud no es positiva o la fuente de entropía falla.

    """

    if size <= 0:
        raise KeyGenError(f"Longitud de clave inválida: {size}.")
    try:
        return os.urandom(size)
    except OSError as exc:
        raise KeyGenError("La fuente de entropía del sistema no está disponible.") from exc


def generate_nonce() -> bytes:
    """Genera un nonce AES-GCM de 96 bits."""

    try:
        return os.urandom(NONCE_SIZE)
    except OSError as exc:
        raise KeyGenError("La fuente de entropía del sistema no está disponible.") from exc


def _check_key(key: bytes) -> None:
    if len(key) not in VALID_KEY_SIZES:
        raise EncryptError(
            f"La clave AES debe medir 16, 24 o 32 bytes (recibidos {len(key)})."
        )


def encrypt_symmetric(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    """Cifra datos con AES-GCM sin datos asociados.

    Args:
        key (bytes): Clave simétrica de 128, 192 o 256 bits.
        nonce (bytes): Nonce de 96 bits que no debe reutilizarse con la misma clave.
        plaintext (bytes): Datos en claro, pueden estar vacíos.

    Returns:
        bytes: Ciphertext seguido de la etiqueta de autenticación.

    Raises:
        EncryptError: Si la clave o el nonce tienen una longitud inválida.

    """

    _check_key(key)
    if len(nonce) != NONCE_SIZE:
        raise EncryptError(
            f"El nonce AES-GCM debe medir {NONCE_SIZE} bytes (recibidos {len(nonce)})."
        )
    ciphertext = AESGCM(key).encrypt(nonce, plaintext, None)
    logger.debug("[AES-GCM] cifrado pt=%d bytes ct=%d bytes", len(plaintext), len(ciphertext))
    return ciphertext


def decrypt_symmetric(key: bytes, ciphertext: bytes, nonce: bytes) -> bytes:
    """Descifra y autentica un ciphertext AES-GCM.

    Args:
        key (bytes): Clave simétrica usada al cifrar.
        ciphertext (bytes): Datos cifrados seguidos de la etiqueta.
        nonce (bytes): Nonce usado al cifrar.

    Returns:
        bytes: Mensaje original; un resultado vacío solo se devuelve si el
        mensaje cifrado estaba vacío y la etiqueta es válida.

    Raises:
        AuthenticationError: Si la etiqueta no verifica por clave, nonce o
            ciphertext incorrectos.

    """

    # Una clave o nonce malformados nunca pueden autenticar el mensaje.
    if len(key) not in VALID_KEY_SIZES or len(nonce) != NONCE_SIZE:
        raise AuthenticationError("Clave o nonce no válidos para este mensaje.")
    if len(ciphertext) < TAG_SIZE:
        raise AuthenticationError("Ciphertext truncado: falta la etiqueta de autenticación.")
    try:
        return AESGCM(key).decrypt(nonce, ciphertext, None)
    except InvalidTag as exc:
        logger.warning("[AES-GCM] etiqueta de autenticación inválida")
        raise AuthenticationError("La etiqueta AES-GCM no verifica.") from exc
