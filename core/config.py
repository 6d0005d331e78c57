# --------------------------------------------------------------
# File: config.py
# Description: Configuración por entorno (.env) y arranque del logging.
# --------------------------------------------------------------
import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

from core.crypto_sign import SCHEMES

load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


class Settings(BaseModel):
    """Parámetros de ejecución leídos del entorno."""

    storage_path: str = "./_data"
    rsa_key_size: int = 2048
    signature_scheme: str = "pkcs1v15"
    log_level: str = "INFO"

    @field_validator("signature_scheme")
    @classmethod
    def _known_scheme(cls, value: str) -> str:
        value = value.lower()
        if value not in SCHEMES:
            raise ValueError("SIGNATURE_SCHEME debe ser 'pkcs1v15' o 'pss'.")
        return value

    @field_validator("rsa_key_size")
    @classmethod
    def _min_key_size(cls, value: int) -> int:
        if value < 2048:
            raise ValueError("RSA_KEY_SIZE mínimo 2048.")
        return value


def load_settings() -> Settings:
    # Se lee en cada llamada para respetar cambios de entorno (tests, Streamlit).
    return Settings(
        storage_path=os.getenv("STORAGE_PATH", "./_data"),
        rsa_key_size=int(os.getenv("RSA_KEY_SIZE", "2048")),
        signature_scheme=os.getenv("SIGNATURE_SCHEME", "pkcs1v15"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(settings: Settings | None = None) -> None:
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
