# --------------------------------------------------------------
# File: storage.py
# Description: Persistencia JSON atómica para claves, handoff e informes.
# --------------------------------------------------------------
"""Funciones auxiliares de entrada/salida para el almacenamiento local."""

from __future__ import annotations

import json
import os
import tempfile
from typing import Any, Dict, Optional

__all__ = ["read_json", "write_json"]

PRIVATE_FILE_MODE = 0o600
PUBLIC_FILE_MODE = 0o644


def _ensure_parent_dir(path: str) -> None:
    """Garantiza que exista el directorio padre del archivo de destino."""

    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)


def read_json(path: str) -> Dict[str, Any]:
    """Carga un documento JSON.

    Args:
        path (str): Ruta del archivo.

    Returns:
        Dict[str, Any]: Documento cargado.

    Raises:
        FileNotFoundError: Si el archivo no existe.
        json.JSONDecodeError: Si el contenido no es JSON válido.

    """

    with open(path, "r", encoding="utf-8") as handler:
        return json.load(handler)


def write_json(data: Dict[str, Any], path: str, mode: Optional[int] = None) -> None:
    """Guarda un documento JSON aplicando escritura atómica.

    Args:
        data (Dict[str, Any]): Contenido serializable.
        path (str): Ruta de destino.
        mode (Optional[int]): Permisos del archivo final (``0o600`` para
            material privado). Por defecto ``0o644``.

    """

    _ensure_parent_dir(path)
    # Nombre temporal único por escritura: dos sesiones pueden guardar a la vez.
    with tempfile.NamedTemporaryFile(
        "w", encoding="utf-8", dir=os.path.dirname(path) or ".",
        prefix=os.path.basename(path) + ".", suffix=".tmp", delete=False,
    ) as handler:
        tmp_path = handler.name
        json.dump(data, handler, indent=2, ensure_ascii=False)
    try:
        os.chmod(tmp_path, mode if mode is not None else PUBLIC_FILE_MODE)
        os.replace(tmp_path, path)
    except OSError:
        os.remove(tmp_path)
        raise
