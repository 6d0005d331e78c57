# --------------------------------------------------------------
# File: crypto_asym.py
# Description: Generación de claves RSA y cifrado RSA-OAEP de payloads cortos.
# --------------------------------------------------------------
"""Primitivas RSA compatibles con las claves que intercambian Go y Dart.

Las claves viajan como el documento PEM completo codificado de nuevo en
Base64 (``LS0tLS1CRUdJTi...``). RSA-OAEP usa SHA-256 tanto para el hash
como para MGF1.
"""

import logging

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from core.codec import b64d, b64e
from core.errors import DecryptError, KeyFormatError, KeyGenError, PayloadTooLarge
from core.models import KeyPair

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT = 65537
DEFAULT_KEY_SIZE = 2048
_OAEP_HASH_SIZE = hashes.SHA256.digest_size


def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


def generate_key_pair(key_size: int = DEFAULT_KEY_SIZE) -> KeyPair:
    """Genera un par RSA y lo exporta como PEM envuelto en Base64.

    Args:
        key_size (int): Tamaño del módulo en bits (2048 por defecto).

    Returns:
        KeyPair: Clave privada PKCS#1 y clave pública SubjectPublicKeyInfo.

    Raises:
        KeyGenError: Si el backend no puede generar la clave.

    """

    try:
        private_key = rsa.generate_private_key(
            public_exponent=PUBLIC_EXPONENT, key_size=key_size
        )
    except (ValueError, UnsupportedAlgorithm, OSError) as exc:
        raise KeyGenError(f"No se pudo generar la clave RSA-{key_size}.") from exc

    logger.info("[KEYGEN] par RSA-%d generado", key_size)
    return KeyPair(
        private_key=private_key_to_base64(private_key),
        public_key=public_key_to_base64(private_key.public_key()),
        key_type=f"RSA-{key_size}",
    )


def private_key_to_base64(private_key: rsa.RSAPrivateKey) -> str:
    pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return b64e(pem)


def public_key_to_base64(public_key: rsa.RSAPublicKey) -> str:
    pem = public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return b64e(pem)


def base64_to_public_key(value: str) -> rsa.RSAPublicKey:
    """Carga una clave pública RSA desde PEM envuelto en Base64.

    Raises:
        KeyFormatError: Si el texto no es Base64, no es PEM o no es RSA.

    """

    try:
        key = serialization.load_pem_public_key(b64d(value))
    except (ValueError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError("La clave pública no es un PEM RSA válido.") from exc
    if not isinstance(key, rsa.RSAPublicKey):
        raise KeyFormatError("La clave pública no es RSA.")
    return key


def base64_to_private_key(value: str) -> rsa.RSAPrivateKey:
    """Carga una clave privada RSA (PKCS#1 o PKCS#8) desde PEM envuelto en Base64.

    Raises:
        KeyFormatError: Si el texto no es Base64, no es PEM o no es RSA.

    """

    try:
        key = serialization.load_pem_private_key(b64d(value), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise KeyFormatError("La clave privada no es un PEM RSA válido.") from exc
    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyFormatError("La clave privada no es RSA.")
    return key


def max_payload_size(public_key: rsa.RSAPublicKey) -> int:
    """Devuelve el máximo de bytes cifrables con RSA-OAEP-SHA256 para la clave."""

    modulus_bytes = (public_key.key_size + 7) // 8
    return modulus_bytes - 2 * _OAEP_HASH_SIZE - 2


def encrypt_asymmetric(public_key: rsa.RSAPublicKey, data: bytes) -> bytes:
    """Cifra un payload corto (la clave simétrica) con RSA-OAEP.

    Args:
        public_key (rsa.RSAPublicKey): Clave pública del destinatario.
        data (bytes): Datos a proteger.

    Returns:
        bytes: Ciphertext del tamaño del módulo.

    Raises:
        PayloadTooLarge: Si ``data`` supera el límite módulo menos relleno.

    """

    limit = max_payload_size(public_key)
    if len(data) > limit:
        raise PayloadTooLarge(len(data), limit)
    return public_key.encrypt(data, _oaep())


def decrypt_asymmetric(private_key: rsa.RSAPrivateKey, ciphertext: bytes) -> bytes:
    """Descifra un payload RSA-OAEP.

    Raises:
        DecryptError: Si el relleno no es válido o la clave no corresponde.

    """

    try:
        return private_key.decrypt(ciphertext, _oaep())
    except ValueError as exc:
        logger.warning("[RSA-OAEP] descifrado rechazado")
        raise DecryptError("No se pudo descifrar el payload RSA-OAEP.") from exc
