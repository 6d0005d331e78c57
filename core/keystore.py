# --------------------------------------------------------------
# File: keystore.py
# Description: Almacén de claves inyectable y handoff estructurado de la clave pública.
# --------------------------------------------------------------
"""Capacidad de acceso a claves que se pasa explícitamente a quien la necesita.

Solo el proceso que descifra posee un ``KeyStore`` con clave privada; los
demás reciben un almacén público construido desde el archivo de handoff.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from cryptography.hazmat.primitives.asymmetric import rsa
from pydantic import ValidationError

from core.crypto_asym import (
    DEFAULT_KEY_SIZE,
    base64_to_private_key,
    base64_to_public_key,
    generate_key_pair,
    public_key_to_base64,
)
from core.errors import KeyStoreError
from core.models import KeyHandoff, KeyPair
from core.storage import PRIVATE_FILE_MODE, read_json, write_json

logger = logging.getLogger(__name__)


class KeyStore:
    """Material RSA de una parte del protocolo."""

    def __init__(self, public_key_b64: str, private_key_b64: Optional[str] = None,
                 key_type: Optional[str] = None):
        self._public = base64_to_public_key(public_key_b64)
        self._public_b64 = public_key_b64
        self._private: Optional[rsa.RSAPrivateKey] = None
        self._private_b64 = private_key_b64
        if private_key_b64 is not None:
            self._private = base64_to_private_key(private_key_b64)
            if public_key_to_base64(self._private.public_key()) != public_key_to_base64(self._public):
                raise KeyStoreError("La clave pública no corresponde a la clave privada.")
        self.key_type = key_type or f"RSA-{self._public.key_size}"

    @classmethod
    def generate(cls, key_size: int = DEFAULT_KEY_SIZE) -> "KeyStore":
        return cls.from_key_pair(generate_key_pair(key_size))

    @classmethod
    def from_key_pair(cls, pair: KeyPair) -> "KeyStore":
        return cls(pair.public_key, pair.private_key, pair.key_type)

    @classmethod
    def public_only(cls, public_key_b64: str) -> "KeyStore":
        return cls(public_key_b64)

    @property
    def has_private_key(self) -> bool:
        return self._private is not None

    def public_key(self) -> rsa.RSAPublicKey:
        return self._public

    def public_key_b64(self) -> str:
        return self._public_b64

    def private_key(self) -> rsa.RSAPrivateKey:
        """Devuelve la clave privada o falla si el almacén es solo público."""

        if self._private is None:
            raise KeyStoreError("Este almacén no tiene acceso a la clave privada.")
        return self._private

    def to_key_pair(self) -> KeyPair:
        if self._private_b64 is None:
            raise KeyStoreError("Este almacén no tiene acceso a la clave privada.")
        return KeyPair(
            private_key=self._private_b64,
            public_key=self._public_b64,
            key_type=self.key_type,
        )

    def save(self, path: str) -> None:
        """Persiste el par completo con permisos restringidos."""

        write_json(self.to_key_pair().model_dump(), path, mode=PRIVATE_FILE_MODE)
        logger.info("[KEYSTORE] par %s guardado en %s", self.key_type, path)

    @classmethod
    def load(cls, path: str) -> "KeyStore":
        """Carga un par completo guardado con :meth:`save`.

        Raises:
            KeyStoreError: Si el archivo falta o no contiene un par válido.

        """

        try:
            pair = KeyPair.model_validate(read_json(path))
        except FileNotFoundError as exc:
            raise KeyStoreError(f"No existe el almacén de claves {path}.") from exc
        except (json.JSONDecodeError, ValidationError) as exc:
            raise KeyStoreError(f"Almacén de claves corrupto: {path}.") from exc
        return cls.from_key_pair(pair)

    def handoff(self) -> KeyHandoff:
        return KeyHandoff(public_key=self._public_b64, key_type=self.key_type)

    def publish(self, path: str) -> KeyHandoff:
        """Escribe el documento de handoff con la clave pública únicamente."""

        document = self.handoff()
        write_json(document.model_dump(mode="json"), path)
        logger.info("[HANDOFF] clave pública %s publicada en %s", self.key_type, path)
        return document

    @classmethod
    def from_handoff(cls, path: str) -> "KeyStore":
        """Construye un almacén solo público a partir de un archivo de handoff."""

        try:
            document = KeyHandoff.model_validate(read_json(path))
        except FileNotFoundError as exc:
            raise KeyStoreError(f"No existe el archivo de handoff {path}.") from exc
        except (json.JSONDecodeError, ValidationError) as exc:
            raise KeyStoreError(f"Archivo de handoff inválido: {path}.") from exc
        return cls(document.public_key, key_type=document.key_type)
