# --------------------------------------------------------------
# File: interop.py
# Description: Flujo completo de interoperabilidad backend/cliente y pruebas scrypt.
# --------------------------------------------------------------
"""Ejecuta de extremo a extremo el intercambio híbrido y registra cada paso.

Las claves se distribuyen mediante archivos JSON escritos una sola vez
(par del backend y handoff público), de modo que ninguna parte depende
de la salida de logs de otra. El resultado es un ``WorkflowReport`` que
también se guarda como ``workflow_report.json``.
"""

import argparse
import logging
import os
import sys
import time
from datetime import UTC, datetime
from typing import Callable, Optional, Type

from core.codec import b64d, b64e
from core.config import configure_logging, load_settings
from core.crypto_asym import encrypt_asymmetric, max_payload_size
from core.crypto_kdf import (
    ENCRYPTION_PARAMS,
    derive_encryption_key,
    derive_key,
    hash_password,
    load_record,
    verify_password,
)
from core.crypto_sign import sign, verify
from core.crypto_sym import decrypt_symmetric, encrypt_symmetric, generate_nonce
from core.errors import AuthenticationError, CryptoError, DecryptError, PayloadTooLarge
from core.hybrid import HybridCipher
from core.keystore import KeyStore
from core.models import ScryptParams, SecureMessage, WorkflowReport
from core.storage import read_json, write_json

logger = logging.getLogger(__name__)

SAMPLE_PAYLOAD = '{"Code":"172","Amount":100.0,"Currency":"INR"}'
REPORT_FILE = "workflow_report.json"
SCRYPT_TIME_LIMIT_MS = 1000.0


class CheckFailed(Exception):
    """Una comprobación del flujo no obtuvo el resultado esperado."""


def _require(condition: bool, detail: str = "comprobación fallida") -> None:
    if not condition:
        raise CheckFailed(detail)


def _check(report: WorkflowReport, name: str, fn: Callable[[], str]) -> bool:
    """Ejecuta un paso que debe completarse y anota su resultado."""

    try:
        detail = fn()
    except (CryptoError, CheckFailed) as exc:
        logger.error("[WORKFLOW] %s falló: %s", name, exc)
        report.add(name, False, f"{type(exc).__name__}: {exc}")
        return False
    logger.info("[WORKFLOW] %s OK", name)
    report.add(name, True, detail)
    return True


def _expect_failure(
    report: WorkflowReport, name: str, error: Type[CryptoError], fn: Callable[[], object]
) -> bool:
    """Ejecuta un paso que debe fallar con ``error`` concreto."""

    try:
        fn()
    except error as exc:
        report.add(name, True, f"{error.__name__} como se esperaba: {exc}")
        return True
    except CryptoError as exc:
        report.add(name, False, f"Se esperaba {error.__name__} y se obtuvo {type(exc).__name__}")
        return False
    report.add(name, False, f"Se esperaba {error.__name__} y la operación tuvo éxito")
    return False


def _flip_first_bit(value: str) -> str:
    raw = bytearray(b64d(value))
    raw[0] ^= 0x01
    return b64e(bytes(raw))


def run_workflow(output_dir: str, include_scrypt: bool = True) -> WorkflowReport:
    """Genera claves, cifra como cliente, descifra como backend y comprueba fallos.

    Args:
        output_dir (str): Carpeta donde se escriben claves, handoff, mensaje e informe.
        include_scrypt (bool): Añade al informe los escenarios scrypt.

    Returns:
        WorkflowReport: Pasos ejecutados con su resultado.

    """

    settings = load_settings()
    report = WorkflowReport()
    keys_path = os.path.join(output_dir, "backend_keys.json")
    handoff_path = os.path.join(output_dir, "backend_public_key.json")
    message_path = os.path.join(output_dir, "secure_message.json")
    state = {}

    def keygen() -> str:
        backend = KeyStore.generate(settings.rsa_key_size)
        backend.save(keys_path)
        backend.publish(handoff_path)
        state["backend"] = backend
        return f"{backend.key_type} guardado en {keys_path}"

    def handoff() -> str:
        document = read_json(handoff_path)
        _require("private_key" not in document, "el handoff contiene material privado")
        client_view = KeyStore.from_handoff(handoff_path)
        _require(not client_view.has_private_key, "el cliente obtuvo clave privada")
        state["recipient"] = client_view
        return "handoff solo público"

    def client_seal() -> str:
        client = KeyStore.generate(settings.rsa_key_size)
        state["client"] = client
        cipher = HybridCipher(client, settings.signature_scheme)
        message = cipher.seal(SAMPLE_PAYLOAD.encode("utf-8"), state["recipient"], sign_payload=True)
        write_json(message.model_dump(exclude_none=True), message_path)
        state["message"] = message
        return f"mensaje escrito en {message_path}"

    def backend_open() -> str:
        with open(message_path, "r", encoding="utf-8") as handler:
            message = SecureMessage.from_json(handler.read())
        sender = KeyStore.public_only(state["client"].public_key_b64())
        cipher = HybridCipher(KeyStore.load(keys_path), settings.signature_scheme)
        plaintext = cipher.open(message, sender=sender).decode("utf-8")
        _require(plaintext == SAMPLE_PAYLOAD, f"texto recuperado distinto: {plaintext!r}")
        return plaintext

    if not _check(report, "backend_keygen", keygen):
        return _finish(report, output_dir)
    if not _check(report, "public_key_handoff", handoff):
        return _finish(report, output_dir)
    if not _check(report, "client_seal", client_seal):
        return _finish(report, output_dir)
    _check(report, "backend_open", backend_open)

    backend_cipher = HybridCipher(state["backend"], settings.signature_scheme)
    message = state["message"]
    tampered = message.model_copy(update={"payload": _flip_first_bit(message.payload)})
    _expect_failure(report, "tamper_detected", AuthenticationError,
                    lambda: backend_cipher.open(tampered))

    wrong_nonce = message.model_copy(update={"nonce": _flip_first_bit(message.nonce)})
    _expect_failure(report, "wrong_nonce_detected", AuthenticationError,
                    lambda: backend_cipher.open(wrong_nonce))

    other_backend = HybridCipher(KeyStore.generate(settings.rsa_key_size), settings.signature_scheme)
    _expect_failure(report, "wrong_private_key_rejected", DecryptError,
                    lambda: other_backend.open(message))

    recipient_key = state["recipient"].public_key()
    oversize = b"\x00" * (max_payload_size(recipient_key) + 1)
    _expect_failure(report, "rsa_payload_bound", PayloadTooLarge,
                    lambda: encrypt_asymmetric(recipient_key, oversize))

    def signature_integrity() -> str:
        client = state["client"]
        data = message.payload.encode("ascii")
        good = sign(client.private_key(), data, settings.signature_scheme)
        other = sign(client.private_key(), data + b"!", settings.signature_scheme)
        _require(verify(client.public_key(), data, good, settings.signature_scheme))
        _require(not verify(client.public_key(), data, other, settings.signature_scheme))
        return f"firma {settings.signature_scheme} verificada y discrepancia detectada"

    _check(report, "signature_integrity", signature_integrity)

    if include_scrypt:
        run_scrypt_checks(report)
    return _finish(report, output_dir)


def _finish(report: WorkflowReport, output_dir: str) -> WorkflowReport:
    report.finished_at = datetime.now(UTC)
    write_json(report.model_dump(mode="json"), os.path.join(output_dir, REPORT_FILE))
    logger.info("[WORKFLOW] %d pasos, resultado=%s", len(report.steps), "OK" if report.ok else "FALLO")
    return report


def run_scrypt_checks(report: Optional[WorkflowReport] = None) -> WorkflowReport:
    """Escenarios scrypt: hash, derivación, parámetros, formato y rendimiento."""

    report = report if report is not None else WorkflowReport()

    def basic_hash() -> str:
        record = hash_password("mySecurePassword123!")
        _require(verify_password("mySecurePassword123!", record))
        _require(not verify_password("wrongPassword", record))
        return "N=16384 r=8 p=1 verificado"

    def key_derivation() -> str:
        key, _salt = derive_encryption_key("encryptionKey123")
        _require(len(key) == 32)
        nonce = generate_nonce()
        ciphertext = encrypt_symmetric(key, nonce, b"scrypt")
        _require(decrypt_symmetric(key, ciphertext, nonce) == b"scrypt")
        return "clave AES-256 derivada con N=8192"

    def different_parameters() -> str:
        for n in (4096, 16384):
            record = hash_password("parameterTest", ScryptParams(n=n))
            _require(verify_password("parameterTest", record), f"N={n} no verifica")
        return "N=4096 y N=16384 verificados"

    def export_format() -> str:
        document = hash_password("crossPlatform").model_dump(by_alias=True)
        _require(document["algorithm"] == "scrypt")
        _require(set(document["parameters"]) == {"n", "r", "p", "keyLength"})
        return "formato JSON compatible"

    def performance() -> str:
        start = time.perf_counter()
        derive_key("performanceTest", b"0123456789abcdef", ENCRYPTION_PARAMS)
        elapsed_ms = (time.perf_counter() - start) * 1000
        _require(elapsed_ms < SCRYPT_TIME_LIMIT_MS, f"{elapsed_ms:.0f} ms")
        return f"{elapsed_ms:.0f} ms con N=8192"

    def password_strength() -> str:
        strong = hash_password("MyV3ryS3cur3P@ssw0rd!2024")
        weak = hash_password("123456")
        _require(strong.hash != weak.hash)
        return "hashes distintos para contraseñas distintas"

    def export_roundtrip() -> str:
        record = hash_password("exportForDart")
        _require(verify_password("exportForDart", load_record(record.to_json())))
        return "registro exportado verificado"

    for name, fn in (
        ("scrypt_basic_hash", basic_hash),
        ("scrypt_key_derivation", key_derivation),
        ("scrypt_different_parameters", different_parameters),
        ("scrypt_export_format", export_format),
        ("scrypt_performance", performance),
        ("scrypt_password_strength", password_strength),
        ("scrypt_export_roundtrip", export_roundtrip),
    ):
        _check(report, name, fn)
    return report


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Flujo de interoperabilidad RSA + AES-GCM")
    parser.add_argument("output_dir", nargs="?", default=None,
                        help="carpeta de salida (por defecto STORAGE_PATH/workflow)")
    parser.add_argument("--skip-scrypt", action="store_true")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings)
    output_dir = args.output_dir or os.path.join(settings.storage_path, "workflow")
    report = run_workflow(output_dir, include_scrypt=not args.skip_scrypt)
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
