# --------------------------------------------------------------
# File: services.py
# Description: Servicios de backend y cliente para el intercambio de mensajes híbridos.
# --------------------------------------------------------------
"""Funciones de la capa de servicios que consumen la interfaz y el flujo de pruebas.

El backend (equivalente al servicio Go) es el único que carga la clave
privada de descifrado. El cliente (equivalente a la app Dart) solo lee el
archivo de handoff con la clave pública del backend y, si firma, su propio
par de firma.
"""

import logging
import os
from typing import Tuple

from core.config import load_settings
from core.errors import (
    AuthenticationError,
    CryptoError,
    DecryptError,
    KeyFormatError,
    KeyStoreError,
    MessageFormatError,
    SignatureMismatch,
)
from core.hybrid import HybridCipher
from core.keystore import KeyStore

logger = logging.getLogger(__name__)


def backend_keys_path() -> str:
    return os.path.join(load_settings().storage_path, "backend", "keys.json")


def client_keys_path() -> str:
    return os.path.join(load_settings().storage_path, "client", "keys.json")


def backend_handoff_path() -> str:
    return os.path.join(load_settings().storage_path, "handoff", "backend_public_key.json")


def client_handoff_path() -> str:
    return os.path.join(load_settings().storage_path, "handoff", "client_public_key.json")


def generate_backend_keys() -> Tuple[bool, str, str]:
    """Genera el par RSA del backend y publica su clave pública.

    Returns:
        Tuple[bool, str, str]: Indicador de éxito, mensaje para la interfaz y
        traza de depuración.

    """

    settings = load_settings()
    try:
        keystore = KeyStore.generate(settings.rsa_key_size)
    except CryptoError as exc:
        return False, f"No se pudo generar el par de claves: {exc}", ""

    try:
        keystore.save(backend_keys_path())
        handoff = keystore.publish(backend_handoff_path())
    except OSError as exc:
        logger.error("[KEYGEN] no se pudieron guardar las claves: %s", exc)
        return False, f"No se pudieron guardar las claves del backend: {exc}", ""
    debug = (
        f"[KEYGEN] {handoff.key_type} e=65537\n"
        f"[HANDOFF] {backend_handoff_path()} generado {handoff.generated_at.isoformat()}"
    )
    return True, "Claves del backend generadas y clave pública publicada.", debug


def ensure_client_keys() -> KeyStore:
    """Devuelve el par de firma del cliente, creándolo y publicándolo si no existe."""

    path = client_keys_path()
    if os.path.exists(path):
        return KeyStore.load(path)

    keystore = KeyStore.generate(load_settings().rsa_key_size)
    keystore.save(path)
    keystore.publish(client_handoff_path())
    return keystore


def encrypt_for_backend(plaintext: str, sign: bool = False) -> Tuple[bool, str, str, str]:
    """Cifra un texto para el backend usando únicamente su handoff público.

    Args:
        plaintext (str): Texto a proteger (se codifica en UTF-8).
        sign (bool): Firma el ``payload`` con la clave del cliente.

    Returns:
        Tuple[bool, str, str, str]: Indicador de éxito, mensaje, JSON del
        ``SecureMessage`` y traza de depuración.

    """

    settings = load_settings()
    try:
        backend = KeyStore.from_handoff(backend_handoff_path())
    except (KeyStoreError, KeyFormatError) as exc:
        return False, f"No hay clave pública del backend disponible: {exc}", "", ""

    try:
        own = ensure_client_keys() if sign else backend
    except (CryptoError, OSError) as exc:
        logger.error("[SEAL] claves de firma del cliente no disponibles: %s", exc)
        return False, f"Claves de firma del cliente no disponibles: {exc}", "", ""
    cipher = HybridCipher(own, settings.signature_scheme)
    message = cipher.seal(plaintext.encode("utf-8"), backend, sign_payload=sign)

    debug = (
        f"[SEAL] AES-GCM-256 nonce=96-bit tag=128-bit\n"
        f"[SEAL] clave envuelta con RSA-OAEP-SHA256 ({backend.key_type})\n"
        f"[SEAL] firma={settings.signature_scheme if sign else 'no'}"
    )
    return True, "Mensaje cifrado para el backend.", message.to_json(), debug


def decrypt_on_backend(message_json: str, verify_signature: bool = False) -> Tuple[bool, str, str, str]:
    """Descifra en el backend un ``SecureMessage`` recibido como JSON.

    Args:
        message_json (str): Mensaje en el formato de red.
        verify_signature (bool): Exige y verifica la firma del cliente.

    Returns:
        Tuple[bool, str, str, str]: Indicador de éxito, mensaje para la
        interfaz, texto descifrado y traza de depuración.

    """

    settings = load_settings()
    try:
        backend = KeyStore.load(backend_keys_path())
        sender = KeyStore.from_handoff(client_handoff_path()) if verify_signature else None
    except (KeyStoreError, KeyFormatError) as exc:
        return False, f"Material de claves no disponible: {exc}", "", ""

    cipher = HybridCipher(backend, settings.signature_scheme)
    try:
        plaintext = cipher.open(message_json, sender=sender)
    except MessageFormatError:
        return False, "El JSON recibido no es un mensaje seguro válido.", "", ""
    except SignatureMismatch as exc:
        return False, f"Firma rechazada: {exc}", "", ""
    except DecryptError:
        return False, "La clave simétrica no está cifrada para este backend.", "", ""
    except AuthenticationError:
        # SECURITY: nunca se devuelve contenido parcial de un mensaje no autenticado.
        return False, "Mensaje alterado o clave/nonce incorrectos (etiqueta AES-GCM inválida).", "", ""

    debug = (
        f"[OPEN] RSA-OAEP-SHA256 ({backend.key_type}) → clave simétrica recuperada\n"
        f"[OPEN] AES-GCM-256 pt={len(plaintext)} bytes\n"
        f"[OPEN] firma verificada={'sí' if sender else 'no solicitada'}"
    )
    return True, "Mensaje descifrado.", plaintext.decode("utf-8", errors="replace"), debug
