# --------------------------------------------------------------
# File: hybrid.py
# Description: Protocolo híbrido RSA-OAEP + AES-GCM con firma opcional.
# --------------------------------------------------------------
"""Cifrado de sobre: AES-GCM para los datos y RSA-OAEP para la clave.

Flujo del remitente:
    1. Genera clave simétrica de 32 bytes y nonce de 12 bytes.
    2. Cifra el mensaje con AES-GCM.
    3. Cifra la clave simétrica con la clave pública del destinatario.
    4. Opcionalmente firma el ``payload`` con su clave privada.

Flujo del destinatario:
    1. Si conoce la clave pública del remitente, verifica la firma antes de
       tocar el ciphertext.
    2. Recupera la clave simétrica con su clave privada.
    3. Descifra y autentica el ``payload``.

La clave que se envuelve con RSA es el texto Base64 de la clave simétrica,
igual que hacen los clientes Dart y Go; al recibir se aceptan también
claves en bruto.
"""

from __future__ import annotations

import logging
from typing import Optional

from core.codec import b64d, b64e
from core.crypto_asym import decrypt_asymmetric, encrypt_asymmetric
from core.crypto_sign import require_valid_signature, sign
from core.crypto_sym import (
    VALID_KEY_SIZES,
    decrypt_symmetric,
    encrypt_symmetric,
    generate_nonce,
    generate_symmetric_key,
)
from core.errors import DecryptError, MessageFormatError
from core.keystore import KeyStore
from core.models import SecureMessage

logger = logging.getLogger(__name__)


def _unwrap_symmetric_key(raw: bytes) -> bytes:
    # Una longitud AES válida se toma siempre como clave en bruto; solo el
    # resto se interpreta como texto Base64 (44 caracteres para AES-256).
    if len(raw) in VALID_KEY_SIZES:
        return raw
    try:
        decoded = b64d(raw.decode("ascii"))
    except (UnicodeDecodeError, ValueError):
        decoded = b""
    if len(decoded) in VALID_KEY_SIZES:
        return decoded
    raise DecryptError("La clave simétrica recuperada no tiene un tamaño AES válido.")


class HybridCipher:
    """Sella y abre ``SecureMessage`` con las claves de un ``KeyStore``."""

    def __init__(self, keystore: KeyStore, signature_scheme: str = "pkcs1v15"):
        self._keystore = keystore
        self._scheme = signature_scheme

    @property
    def keystore(self) -> KeyStore:
        return self._keystore

    def seal(self, plaintext: bytes, recipient: KeyStore, sign_payload: bool = False) -> SecureMessage:
        """Cifra ``plaintext`` para ``recipient``.

        Args:
            plaintext (bytes): Datos en claro (pueden estar vacíos).
            recipient (KeyStore): Almacén, normalmente solo público, del destinatario.
            sign_payload (bool): Si es ``True`` firma el ``payload`` con la
                clave privada propia; requiere un almacén con clave privada.

        Returns:
            SecureMessage: Mensaje listo para serializar.

        """

        symmetric_key = generate_symmetric_key()
        nonce = generate_nonce()
        payload = b64e(encrypt_symmetric(symmetric_key, nonce, plaintext))
        wrapped = encrypt_asymmetric(
            recipient.public_key(), b64e(symmetric_key).encode("ascii")
        )

        signature = None
        if sign_payload:
            signature = b64e(
                sign(self._keystore.private_key(), payload.encode("ascii"), self._scheme)
            )

        logger.info(
            "[SEAL] AES-GCM-256 pt=%d bytes | clave envuelta RSA-OAEP | firma=%s",
            len(plaintext),
            "sí" if signature else "no",
        )
        return SecureMessage(payload=payload, key=b64e(wrapped), nonce=b64e(nonce), signature=signature)

    def open(self, message: SecureMessage | str | bytes, sender: Optional[KeyStore] = None) -> bytes:
        """Descifra un mensaje dirigido a este almacén.

        Args:
            message (SecureMessage | str | bytes): Mensaje o su JSON de red.
            sender (Optional[KeyStore]): Clave pública del remitente; si se
                indica, la firma es obligatoria y se verifica antes de descifrar.

        Returns:
            bytes: Mensaje original.

        Raises:
            MessageFormatError: Si el JSON o sus campos no son válidos.
            SignatureMismatch: Si se exige firma y falta o no verifica.
            DecryptError: Si la clave envuelta no corresponde a este almacén.
            AuthenticationError: Si el ``payload`` fue alterado.

        """

        if not isinstance(message, SecureMessage):
            message = SecureMessage.from_json(message)

        if sender is not None:
            signature = b64d(message.signature) if message.signature else None
            require_valid_signature(
                sender.public_key(), message.payload.encode("ascii"), signature, self._scheme
            )
            logger.info("[OPEN] firma del remitente verificada")

        raw_key = decrypt_asymmetric(self._keystore.private_key(), b64d(message.key))
        symmetric_key = _unwrap_symmetric_key(raw_key)

        nonce = b64d(message.nonce)
        if not nonce:
            raise MessageFormatError("El nonce del mensaje está vacío.")
        plaintext = decrypt_symmetric(symmetric_key, b64d(message.payload), nonce)
        logger.info("[OPEN] mensaje descifrado pt=%d bytes", len(plaintext))
        return plaintext
