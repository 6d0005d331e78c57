# --------------------------------------------------------------
# File: test_config.py
# Description: Pruebas de la lectura de configuración desde el entorno.
# --------------------------------------------------------------

import pytest
from pydantic import ValidationError

from core.config import load_settings
from core.crypto_sign import SCHEMES


def test_defaults_follow_environment(tmp_path):
    settings = load_settings()
    assert settings.storage_path.endswith("_data")
    assert settings.rsa_key_size == 2048
    assert settings.signature_scheme == "pkcs1v15"


def test_signature_scheme_override(monkeypatch):
    monkeypatch.setenv("SIGNATURE_SCHEME", "PSS")
    assert load_settings().signature_scheme == "pss"


@pytest.mark.parametrize("name,value", [("SIGNATURE_SCHEME", "md5"), ("RSA_KEY_SIZE", "1024")])
def test_invalid_settings_are_rejected(monkeypatch, name, value):
    monkeypatch.setenv(name, value)
    with pytest.raises(ValidationError):
        load_settings()


@pytest.mark.parametrize("scheme", SCHEMES)
def test_every_signature_scheme_is_accepted(monkeypatch, scheme):
    monkeypatch.setenv("SIGNATURE_SCHEME", scheme.upper())
    assert load_settings().signature_scheme == scheme
