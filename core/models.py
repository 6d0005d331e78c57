# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes utilizados por la capa criptográfica.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan estructuras de intercambio criptográfico."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    computed_field,
    field_validator,
)

from core.codec import b64d
from core.errors import MessageFormatError


class KeyPair(BaseModel):
    """Par de claves RSA exportado como PEM envuelto en Base64.

    Attributes:
        private_key (str): PEM PKCS#1 de la clave privada codificado en Base64.
        public_key (str): PEM SubjectPublicKeyInfo codificado en Base64.
        key_type (str): Descripción del algoritmo, p. ej. ``RSA-2048``.

    """

    private_key: str
    public_key: str
    key_type: str = "RSA-2048"


class SecureMessage(BaseModel):
    """Mensaje híbrido tal como viaja entre entornos.

    Attributes:
        payload (str): Ciphertext AES-GCM (incluida la etiqueta) en Base64.
        key (str): Clave simétrica cifrada con RSA-OAEP en Base64.
        nonce (str): Nonce AES-GCM de 96 bits en Base64.
        signature (Optional[str]): Firma RSA del ``payload`` en Base64.

    """

    payload: str
    key: str
    nonce: str
    signature: Optional[str] = None

    @field_validator("payload", "key", "nonce", "signature")
    @classmethod
    def _must_be_base64(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            b64d(value)
        except ValueError as exc:
            raise ValueError("el campo no es Base64 válido") from exc
        return value.strip()

    @classmethod
    def from_json(cls, raw: str | bytes) -> "SecureMessage":
        """Interpreta el JSON de red lanzando ``MessageFormatError`` si es inválido."""

        try:
            return cls.model_validate_json(raw)
        except ValidationError as exc:
            raise MessageFormatError(f"Mensaje seguro inválido: {exc}") from exc

    def to_json(self) -> str:
        """Serializa el mensaje omitiendo la firma cuando no existe."""

        return self.model_dump_json(exclude_none=True)


class ScryptParams(BaseModel):
    """Parámetros de coste de scrypt."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    n: int
    r: int = 8
    p: int = 1
    key_length: int = Field(default=32, alias="keyLength")

    @field_validator("n")
    @classmethod
    def _power_of_two(cls, value: int) -> int:
        if value < 2 or value & (value - 1):
            raise ValueError("N debe ser potencia de dos mayor que 1.")
        if value > 16384:
            raise ValueError("N máximo admitido: 16384.")
        return value


class ScryptRecord(BaseModel):
    """Registro exportable de un hash scrypt para comparar entre plataformas."""

    model_config = ConfigDict(populate_by_name=True)

    salt: str
    hash: str
    parameters: ScryptParams
    algorithm: str = "scrypt"
    purpose: str = "password_hashing"

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class KeyHandoff(BaseModel):
    """Documento de distribución de la clave pública (sin material privado)."""

    public_key: str
    key_type: str = "RSA-2048"
    generated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class WorkflowStep(BaseModel):
    name: str
    ok: bool
    detail: str = ""


class WorkflowReport(BaseModel):
    """Resultado estructurado de una ejecución del flujo de interoperabilidad."""

    started_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    finished_at: Optional[datetime] = None
    steps: List[WorkflowStep] = Field(default_factory=list)

    @computed_field
    @property
    def ok(self) -> bool:
        return bool(self.steps) and all(step.ok for step in self.steps)

    def add(self, name: str, ok: bool, detail: str = "") -> WorkflowStep:
        step = WorkflowStep(name=name, ok=ok, detail=detail)
        self.steps.append(step)
        return step
