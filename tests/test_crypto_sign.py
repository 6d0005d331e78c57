# --------------------------------------------------------------
# File: test_crypto_sign.py
# Description: Pruebas para las firmas RSA del remitente.
# --------------------------------------------------------------

import pytest

from core.crypto_asym import base64_to_private_key, base64_to_public_key
from core.crypto_sign import require_valid_signature, sign, verify
from core.errors import SignatureMismatch


@pytest.fixture
def keys(client_pair):
    """Carga el par del cliente como objetos RSA.

    Returns:
        tuple: Clave privada y clave pública.
    """
    return (
        base64_to_private_key(client_pair.private_key),
        base64_to_public_key(client_pair.public_key),
    )


@pytest.mark.parametrize("scheme", ["pkcs1v15", "pss"])
def test_sign_verify_ok(keys, scheme):
    """Comprueba que la firma generada sea válida con la clave correspondiente.

    Args:
        keys (tuple): Par RSA del cliente.
        scheme (str): Esquema de relleno de la firma.

    Returns:
        None: La verificación devuelve True.
    """
    sk, pk = keys
    data = b"mensaje importante"
    assert verify(pk, data, sign(sk, data, scheme), scheme) is True


def test_verify_returns_false_for_other_data(keys):
    """Verifica que una firma sobre otros datos devuelva False sin excepción.

    Returns:
        None: Se comprueba el valor de retorno.
    """
    sk, pk = keys
    assert verify(pk, b"data", sign(sk, b"otherData")) is False


def test_verify_fails_with_other_key(keys, backend_pair):
    sk, _ = keys
    other_pk = base64_to_public_key(backend_pair.public_key)
    assert verify(other_pk, b"hola", sign(sk, b"hola")) is False


def test_verify_rejects_garbage_signature(keys):
    _, pk = keys
    assert verify(pk, b"hola", b"\x00" * 10) is False


def test_pkcs1v15_signature_is_deterministic(keys):
    sk, _ = keys
    assert sign(sk, b"abc") == sign(sk, b"abc")


def test_require_valid_signature_raises(keys):
    """Comprueba la variante estricta usada al abrir mensajes firmados.

    Returns:
        None: Firma ausente o inválida lanzan SignatureMismatch.
    """
    sk, pk = keys
    require_valid_signature(pk, b"abc", sign(sk, b"abc"))
    with pytest.raises(SignatureMismatch):
        require_valid_signature(pk, b"abc", None)
    with pytest.raises(SignatureMismatch):
        require_valid_signature(pk, b"abc124", sign(sk, b"abc123"))


def test_unknown_scheme_is_rejected(keys):
    sk, _ = keys
    with pytest.raises(ValueError):
        sign(sk, b"abc", "md5")
