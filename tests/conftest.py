# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar almacenamiento y reutilizar claves RSA.
# --------------------------------------------------------------

from typing import Iterator

import pytest

from core.crypto_asym import generate_key_pair
from core.keystore import KeyStore
from core.models import KeyPair


@pytest.fixture(autouse=True)
def _isolate_storage(tmp_path_factory, monkeypatch) -> Iterator[None]:
    """Aísla STORAGE_PATH y fija la configuración por defecto en cada prueba.

    Args:
        tmp_path_factory (pytest.TempPathFactory): Fábrica de carpetas temporales de pytest.
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    data_dir = tmp_path_factory.mktemp("storage") / "_data"
    data_dir.mkdir()
    monkeypatch.setenv("STORAGE_PATH", str(data_dir))
    monkeypatch.setenv("RSA_KEY_SIZE", "2048")
    monkeypatch.setenv("SIGNATURE_SCHEME", "pkcs1v15")

    yield
    # tmp_path se limpia automáticamente por pytest


@pytest.fixture(scope="session")
def backend_pair() -> KeyPair:
    """Par RSA-2048 del backend generado una sola vez por sesión."""
    return generate_key_pair()


@pytest.fixture(scope="session")
def client_pair() -> KeyPair:
    """Par RSA-2048 del cliente (firma) generado una sola vez por sesión."""
    return generate_key_pair()


@pytest.fixture
def backend_store(backend_pair) -> KeyStore:
    return KeyStore.from_key_pair(backend_pair)


@pytest.fixture
def client_store(client_pair) -> KeyStore:
    return KeyStore.from_key_pair(client_pair)
