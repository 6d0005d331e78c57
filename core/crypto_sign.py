# --------------------------------------------------------------
# File: crypto_sign.py
# Description: Firmas RSA sobre SHA-256 (PKCS#1 v1.5 o PSS).
# --------------------------------------------------------------
"""Generación y validación de firmas RSA del remitente."""

import logging

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from core.errors import SignatureMismatch

logger = logging.getLogger(__name__)

SCHEMES = ("pkcs1v15", "pss")


def _padding(scheme: str) -> padding.AsymmetricPadding:
    if scheme == "pkcs1v15":
        return padding.PKCS1v15()
    if scheme == "pss":
        return padding.PSS(
            mgf=padding.MGF1(hashes.SHA256()),
            salt_length=hashes.SHA256.digest_size,
        )
    raise ValueError(f"Esquema de firma desconocido: {scheme}")


def sign(private_key: rsa.RSAPrivateKey, data: bytes, scheme: str = "pkcs1v15") -> bytes:
    """Firma ``data`` con la clave privada del remitente.

    Args:
        private_key (rsa.RSAPrivateKey): Clave privada RSA.
        data (bytes): Datos a firmar; se firma su digest SHA-256.
        scheme (str): ``pkcs1v15`` (por defecto) o ``pss``.

    Returns:
        bytes: Firma del tamaño del módulo.

    """

    return private_key.sign(data, _padding(scheme), hashes.SHA256())


def verify(
    public_key: rsa.RSAPublicKey,
    data: bytes,
    signature: bytes,
    scheme: str = "pkcs1v15",
) -> bool:
    """Comprueba una firma sin lanzar excepción ante discrepancias.

    Returns:
        bool: ``True`` si la firma es válida; ``False`` en caso contrario.

    """

    try:
        public_key.verify(signature, data, _padding(scheme), hashes.SHA256())
    except InvalidSignature:
        logger.info("[SIGN] firma no válida (%s)", scheme)
        return False
    return True


def require_valid_signature(
    public_key: rsa.RSAPublicKey,
    data: bytes,
    signature: bytes | None,
    scheme: str = "pkcs1v15",
) -> None:
    """Variante estricta de :func:`verify` para quien exige firma.

    Raises:
        SignatureMismatch: Si no hay firma o no verifica.

    """

    if not signature:
        raise SignatureMismatch("El mensaje no incluye firma del remitente.")
    if not verify(public_key, data, signature, scheme):
        raise SignatureMismatch("La firma del remitente no verifica.")
