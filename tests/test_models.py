# --------------------------------------------------------------
# File: test_models.py
# Description: Pruebas del formato de red de SecureMessage y del informe de flujo.
# --------------------------------------------------------------

import json

import pytest

from core.errors import MessageFormatError
from core.models import SecureMessage, WorkflowReport

VALID = {"payload": "AAEC", "key": "AwQF", "nonce": "AAAAAAAAAAAAAAAA"}


def test_wire_format_omits_missing_signature():
    """Comprueba que la firma opcional no aparezca cuando no existe.

    Returns:
        None: El JSON contiene solo los tres campos obligatorios.
    """
    message = SecureMessage(**VALID)
    assert json.loads(message.to_json()) == VALID


def test_wire_format_keeps_signature():
    message = SecureMessage(**VALID, signature="BgcI")
    assert json.loads(message.to_json())["signature"] == "BgcI"


def test_from_json_accepts_peer_document():
    """Acepta el JSON tal como lo emite el cliente Dart.

    Returns:
        None: Los campos se conservan.
    """
    raw = json.dumps(VALID)
    assert SecureMessage.from_json(raw) == SecureMessage(**VALID)


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        json.dumps({"payload": "AAEC", "key": "AwQF"}),
        json.dumps({**VALID, "payload": "%%%"}),
        json.dumps({**VALID, "signature": "no base64"}),
    ],
)
def test_from_json_rejects_invalid(raw):
    with pytest.raises(MessageFormatError):
        SecureMessage.from_json(raw)


def test_workflow_report_ok_requires_all_steps():
    report = WorkflowReport()
    assert not report.ok
    report.add("a", True)
    assert report.ok
    report.add("b", False, "detalle")
    assert not report.ok
    assert report.model_dump(mode="json")["ok"] is False
