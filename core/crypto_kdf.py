# --------------------------------------------------------------
# File: crypto_kdf.py
# Description: Derivación de claves y hash de contraseñas mediante scrypt.
# --------------------------------------------------------------
"""Funciones scrypt con los parámetros acordados entre plataformas."""

import hmac
import logging
import os
from typing import Optional, Tuple

from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from core.codec import b64d, b64e
from core.errors import KeyGenError
from core.models import ScryptParams, ScryptRecord

logger = logging.getLogger(__name__)

SALT_SIZE = 16

# Coste alto para contraseñas y moderado para claves de cifrado.
PASSWORD_PARAMS = ScryptParams(n=16384, r=8, p=1, key_length=32)
ENCRYPTION_PARAMS = ScryptParams(n=8192, r=8, p=1, key_length=32)


def derive_key(password: str, salt: bytes, params: ScryptParams = ENCRYPTION_PARAMS) -> bytes:
    """Deriva una clave con scrypt.

    Args:
        password (str): Contraseña en claro; se codifica en UTF-8.
        salt (bytes): Salt aleatoria asociada a la contraseña.
        params (ScryptParams): Coste ``N``, tamaño de bloque ``r``,
            paralelismo ``p`` y longitud de salida.

    Returns:
        bytes: Clave derivada de ``params.key_length`` bytes.

    """

    kdf = Scrypt(salt=salt, length=params.key_length, n=params.n, r=params.r, p=params.p)
    return kdf.derive(password.encode("utf-8"))


def _new_salt() -> bytes:
    try:
        return os.urandom(SALT_SIZE)
    except OSError as exc:
        raise KeyGenError("La fuente de entropía del sistema no está disponible.") from exc


def hash_password(password: str, params: ScryptParams = PASSWORD_PARAMS) -> ScryptRecord:
    """Calcula el hash scrypt de una contraseña con salt aleatoria de 16 bytes."""

    salt = _new_salt()
    digest = derive_key(password, salt, params)
    logger.debug("[SCRYPT] hash N=%d r=%d p=%d", params.n, params.r, params.p)
    return ScryptRecord(salt=b64e(salt), hash=b64e(digest), parameters=params)


def verify_password(password: str, record: ScryptRecord) -> bool:
    """Comprueba una contraseña contra un registro scrypt en tiempo constante."""

    candidate = derive_key(password, b64d(record.salt), record.parameters)
    return hmac.compare_digest(candidate, b64d(record.hash))


def derive_encryption_key(
    password: str, salt: Optional[bytes] = None
) -> Tuple[bytes, bytes]:
    """Deriva una clave AES-256 desde una contraseña.

    Returns:
        Tuple[bytes, bytes]: Clave derivada y salt utilizada (nueva si no se pasó).

    """

    salt = salt if salt is not None else _new_salt()
    return derive_key(password, salt, ENCRYPTION_PARAMS), salt


def load_record(raw: str | bytes) -> ScryptRecord:
    """Carga un registro exportado por cualquiera de las plataformas."""

    return ScryptRecord.model_validate_json(raw)
